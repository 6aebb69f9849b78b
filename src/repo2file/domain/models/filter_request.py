"""User filter request - include-mode and ignore-mode as separate variants"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from repo2file.domain.errors import FilterConflictError


@dataclass(frozen=True)
class IgnoreRequest:
    """Extra exclusions on top of the defaults"""

    ignore_files: Tuple[str, ...] = ()
    ignore_dirs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IncludeRequest:
    """Exclusive include-list; every exclusion rule is bypassed"""

    include_files: Tuple[str, ...]


FilterRequest = Union[IgnoreRequest, IncludeRequest]


def _clean(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple(v for v in values if v)


def build_filter_request(
    ignore_files: Optional[Iterable[str]] = None,
    ignore_dirs: Optional[Iterable[str]] = None,
    include_files: Optional[Iterable[str]] = None,
) -> FilterRequest:
    """Build the filter request from the three optional lists

    Empty lists count as not supplied.

    Raises:
        FilterConflictError: If include_files is combined with either ignore list
    """
    ignore_files_t = _clean(ignore_files)
    ignore_dirs_t = _clean(ignore_dirs)
    include_files_t = _clean(include_files)

    if include_files_t:
        if ignore_files_t or ignore_dirs_t:
            raise FilterConflictError(
                "--include-files cannot be used together with --ignore-files or --ignore-dirs"
            )
        return IncludeRequest(include_files=include_files_t)
    return IgnoreRequest(ignore_files=ignore_files_t, ignore_dirs=ignore_dirs_t)
