"""Ignore patterns configuration model."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IGNORE_DIRS: List[str] = ["node_modules", ".git", ".idea", ".vscode"]

DEFAULT_IGNORE_FILES: List[str] = [
    "*LICENCE.md",
    "*CHANGELOG.md",
    "*.DS_Store",
    "*.all-contributorsrc",
    "*.yaml",
    "*.yml",
    "*.json",
    "*.csv",
    "*.svg",
    "*.conf",
    "*.ini",
    "*.env",
    "*.log",
    "*.tmp",
    "*.pyc",
    "*.class",
    "*.o",
    "*.obj",
    "*.exe",
    "*.dll",
    "*.so",
    "*.dylib",
    "*.ncb",
    "*.sdf",
    "*.suo",
    "*.pdb",
    "*.idb",
    "*.lock",
    "*.toml",
    ".prettierrc.*",
    "*.txt",
    "Pipfile",
    "*.cfg",
    ".gitignore",
    ".gitattributes",
    ".dockerignore",
    ".env",
    ".flaskenv",
    ".editorconfig",
    "Makefile",
    "CMakeLists.txt",
]


class IgnoreConfig(BaseModel):
    """Built-in exclusion lists.

    Attributes:
        files: Glob patterns (or plain file names) excluded by default
        dirs: Directory names excluded by default (exact component match)
    """

    files: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_FILES))
    dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))

    model_config = ConfigDict(extra="forbid")

    @field_validator("files", "dirs")
    @classmethod
    def _no_empty_patterns(cls, value: List[str]) -> List[str]:
        if any(not item.strip() for item in value):
            raise ValueError("patterns must not be empty")
        return value
