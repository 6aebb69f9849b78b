"""Inclusion policy: decides which discovered files go into the output"""

import fnmatch
import logging
import re
from pathlib import PurePath
from typing import Iterable, List, Optional, Tuple, Union

from repo2file.domain.errors import ConfigurationError
from repo2file.domain.models.exclusion import DefaultExclusionSet
from repo2file.domain.models.filter_request import (
    FilterRequest,
    IgnoreRequest,
    IncludeRequest,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, PurePath]


def _validate_glob(pattern: str) -> None:
    """Reject patterns the glob engine would silently treat as literals

    Raises:
        ConfigurationError: On an empty pattern or an unclosed character class
    """
    if not pattern:
        raise ConfigurationError("Invalid glob pattern: empty string")

    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c != "[":
            continue
        j = i
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            raise ConfigurationError(
                f"Invalid glob pattern '{pattern}': unclosed character class"
            )
        i = j + 1


def compile_glob(pattern: str) -> "re.Pattern":
    """Compile a glob so that `*` also matches across path separators"""
    _validate_glob(pattern)
    return re.compile(fnmatch.translate(pattern.replace("\\", "/")))


def _path_string(path: PathLike) -> str:
    return str(path).replace("\\", "/")


def _parts(path: PathLike) -> Tuple[str, ...]:
    return PurePath(_path_string(path)).parts


def _ends_with(path_parts: Tuple[str, ...], entry_parts: Tuple[str, ...]) -> bool:
    """Component-wise suffix check: 'a/b/c.txt' ends with 'c.txt' and 'b/c.txt', not 'bc.txt'"""
    if not entry_parts or len(entry_parts) > len(path_parts):
        return False
    return path_parts[-len(entry_parts):] == entry_parts


class InclusionPolicy:
    """Decides for each candidate path whether it belongs in the output

    Precedence is fixed: include-mode, then file exclusion, then directory
    exclusion, then accept. Patterns are compiled once here, so a malformed
    glob fails before any traversal starts.
    """

    def __init__(
        self,
        defaults: DefaultExclusionSet,
        request: Optional[FilterRequest] = None,
    ):
        """Initialize the policy

        Args:
            defaults: Built-in exclusion set
            request: User filter request (None = no user filters)

        Raises:
            ConfigurationError: If any file pattern is not a valid glob
        """
        self.defaults = defaults
        self.request = request if request is not None else IgnoreRequest()

        self.include_files: Tuple[str, ...] = ()
        if isinstance(self.request, IncludeRequest):
            self.include_files = tuple(self.request.include_files)

        user_files: Tuple[str, ...] = ()
        user_dirs: Tuple[str, ...] = ()
        if isinstance(self.request, IgnoreRequest):
            user_files = tuple(self.request.ignore_files)
            user_dirs = tuple(self.request.ignore_dirs)

        self.effective = defaults.with_additions(user_files, user_dirs)

        self._include_entries = [
            (entry, _parts(entry), compile_glob(entry)) for entry in self.include_files
        ]
        self._file_globs = [
            (pattern, compile_glob(pattern)) for pattern in self.effective.ignore_file_patterns
        ]
        self._file_literals = [
            (pattern, _parts(pattern)) for pattern in self.effective.ignore_file_patterns
        ]
        self._ignore_dirs = frozenset(self.effective.ignore_dir_names)

    @property
    def include_mode(self) -> bool:
        return bool(self.include_files)

    def evaluate(self, path: PathLike) -> Tuple[bool, str]:
        """Decide on a path and report which rule fired

        Args:
            path: Candidate path as yielded by the traversal

        Returns:
            Tuple of (include, reason)
        """
        path_parts = _parts(path)

        if self.include_mode:
            for entry, entry_parts, glob in self._include_entries:
                if _ends_with(path_parts, entry_parts):
                    return True, f"included: {entry}"
                if entry_parts and len(entry_parts) <= len(path_parts):
                    tail = "/".join(path_parts[-len(entry_parts):])
                    if glob.match(tail):
                        return True, f"included: {entry}"
            return False, "not in include list"

        path_str = _path_string(path)
        for pattern, glob in self._file_globs:
            if glob.match(path_str):
                return False, f"matches pattern: {pattern}"
        for pattern, entry_parts in self._file_literals:
            if _ends_with(path_parts, entry_parts):
                return False, f"matches file: {pattern}"

        for component in path_parts[:-1]:
            if component in self._ignore_dirs:
                return False, f"in ignored directory: {component}"

        return True, ""

    def decide(self, path: PathLike) -> bool:
        return self.evaluate(path)[0]

    def filter_paths(
        self, paths: Iterable[PathLike]
    ) -> Tuple[List[PathLike], List[Tuple[PathLike, str]]]:
        """Split paths into included ones and excluded ones with reasons

        Args:
            paths: Candidate paths in traversal order

        Returns:
            Tuple of (included_paths, excluded_paths_with_reasons)
        """
        included = []
        excluded = []

        for path in paths:
            keep, reason = self.evaluate(path)
            if keep:
                included.append(path)
            else:
                excluded.append((path, reason))
                logger.debug(f"Excluding {path}: {reason}")

        if excluded:
            logger.info(f"Filtered out {len(excluded)} files, {len(included)} files remaining")

        return included, excluded


def decide(
    path: PathLike,
    request: Optional[FilterRequest],
    defaults: DefaultExclusionSet,
) -> bool:
    """Stand-alone form of InclusionPolicy.decide for a single path"""
    return InclusionPolicy(defaults, request).decide(path)
