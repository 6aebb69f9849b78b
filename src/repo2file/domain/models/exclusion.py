"""DefaultExclusionSet model - the built-in exclusion lists as an immutable value"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from repo2file.domain.config.ignore import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_FILES,
    IgnoreConfig,
)


@dataclass(frozen=True)
class DefaultExclusionSet:
    """File patterns and directory names excluded unless include-mode is active"""

    ignore_file_patterns: Tuple[str, ...]
    ignore_dir_names: Tuple[str, ...]

    def __post_init__(self):
        # Accept any iterable but store tuples so the value stays hashable
        object.__setattr__(self, "ignore_file_patterns", tuple(self.ignore_file_patterns))
        object.__setattr__(self, "ignore_dir_names", tuple(self.ignore_dir_names))
        for pattern in self.ignore_file_patterns + self.ignore_dir_names:
            if not pattern:
                raise ValueError("Exclusion patterns must not be empty strings")

    @classmethod
    def builtin(cls) -> "DefaultExclusionSet":
        return cls(tuple(DEFAULT_IGNORE_FILES), tuple(DEFAULT_IGNORE_DIRS))

    @classmethod
    def from_config(cls, config: IgnoreConfig) -> "DefaultExclusionSet":
        return cls(tuple(config.files), tuple(config.dirs))

    def with_additions(
        self, files: Iterable[str] = (), dirs: Iterable[str] = ()
    ) -> "DefaultExclusionSet":
        """Return the union of this set and extra entries (the effective exclusion set)"""
        return DefaultExclusionSet(
            self.ignore_file_patterns + tuple(files),
            self.ignore_dir_names + tuple(dirs),
        )
