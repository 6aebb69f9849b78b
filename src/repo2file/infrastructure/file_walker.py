"""Local file walker: yields candidate files under an input root"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

import pathspec

from repo2file.domain.config.traversal import TraversalConfig

logger = logging.getLogger(__name__)

IgnoreSpecs = List[Tuple[Path, "pathspec.GitIgnoreSpec"]]


class LocalFileWalker:
    """Recursive walk over a directory tree with gitignore-style pruning

    Entries are visited in sorted order so two walks over an unchanged tree
    yield the same sequence. Ignore files apply to their own directory and
    everything below it.
    """

    def __init__(
        self,
        skip_hidden: bool = True,
        respect_gitignore: bool = True,
        ignore_filenames: Iterable[str] = (".ignore",),
        follow_links: bool = False,
    ):
        self.skip_hidden = skip_hidden
        self.respect_gitignore = respect_gitignore
        self.ignore_filenames = tuple(ignore_filenames)
        self.follow_links = follow_links

    @classmethod
    def from_config(cls, config: TraversalConfig) -> "LocalFileWalker":
        return cls(
            skip_hidden=config.skip_hidden,
            respect_gitignore=config.respect_gitignore,
            ignore_filenames=config.ignore_filenames,
            follow_links=config.follow_links,
        )

    def walk(self, root: Path) -> Iterator[Path]:
        """Yield regular files under root, skipping ignored and unreadable entries

        Args:
            root: Directory to walk (a regular file yields just itself)

        Yields:
            Paths built by joining root with the entry's relative location
        """
        root = Path(root)
        if root.is_file():
            yield root
            return
        if not root.is_dir():
            logger.warning(f"Input path is not a directory, nothing to walk: {root}")
            return

        inherited: Dict[str, IgnoreSpecs] = {os.fspath(root): []}

        for dirpath, dirnames, filenames in os.walk(
            root, topdown=True, onerror=self._on_error, followlinks=self.follow_links
        ):
            current = Path(dirpath)
            specs = inherited.pop(dirpath, []) + self._load_ignore_specs(current)

            kept_dirs = []
            for name in sorted(dirnames):
                if self._is_ignored(current / name, name, specs, is_dir=True):
                    continue
                kept_dirs.append(name)
                inherited[os.path.join(dirpath, name)] = specs
            # Pruning dirnames in place stops os.walk from descending
            dirnames[:] = kept_dirs

            for name in sorted(filenames):
                file_path = current / name
                if not self._is_regular_file(file_path):
                    continue
                if self._is_ignored(file_path, name, specs, is_dir=False):
                    continue
                yield file_path

    def _is_regular_file(self, path: Path) -> bool:
        try:
            if not self.follow_links and path.is_symlink():
                return False
            return path.is_file()
        except OSError as e:
            logger.warning(f"Skipping unreadable entry {path}: {e}")
            return False

    def _is_ignored(self, path: Path, name: str, specs: IgnoreSpecs, is_dir: bool) -> bool:
        if self.skip_hidden and name.startswith("."):
            logger.debug(f"Skipping hidden entry {path}")
            return True

        # Deepest level first; the first level with a matching pattern decides
        for base, spec in reversed(specs):
            rel = path.relative_to(base).as_posix()
            if is_dir:
                rel += "/"
            result = spec.check_file(rel)
            if result.include is None:
                continue
            if result.include:
                logger.debug(f"Skipping {path}: matched ignore file in {base}")
            return bool(result.include)
        return False

    def _ignore_file_names(self) -> List[str]:
        names = [".gitignore"] if self.respect_gitignore else []
        names.extend(n for n in self.ignore_filenames if n not in names)
        return names

    def _load_ignore_specs(self, directory: Path) -> IgnoreSpecs:
        specs: IgnoreSpecs = []
        for name in self._ignore_file_names():
            ignore_path = directory / name
            if not ignore_path.is_file():
                continue
            try:
                with ignore_path.open("r", encoding="utf-8") as fh:
                    spec = pathspec.GitIgnoreSpec.from_lines(fh)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                logger.warning(f"Ignoring unreadable ignore file {ignore_path}: {e}")
                continue
            specs.append((directory, spec))
        return specs

    @staticmethod
    def _on_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable entry {error.filename}: {error}")
