"""Traversal configuration model."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TraversalConfig(BaseModel):
    """Configuration for walking the input tree.

    Attributes:
        skip_hidden: Skip files and directories whose name starts with a dot
        respect_gitignore: Honor .gitignore files found in the tree
        ignore_filenames: Additional gitignore-style files to honor
        follow_links: Descend into symlinked directories and read symlinked files
    """

    skip_hidden: bool = True
    respect_gitignore: bool = True
    ignore_filenames: List[str] = Field(default_factory=lambda: [".ignore"])
    follow_links: bool = False

    model_config = ConfigDict(extra="forbid")
