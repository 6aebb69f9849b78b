"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from repo2file.domain.config.acquisition import AcquisitionConfig
from repo2file.domain.config.ignore import IgnoreConfig
from repo2file.domain.config.output import OutputConfig
from repo2file.domain.config.traversal import TraversalConfig


class AppConfig(BaseModel):
    """Main application configuration.

    This is the root configuration model that aggregates all configuration sections.
    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        ignore: Built-in exclusion lists
        traversal: Directory walking options
        acquisition: Remote repository cloning options
        output: Encoding of sources and output
    """

    ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)
    acquisition: AcquisitionConfig = Field(default_factory=AcquisitionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "ignore": {
                    "files": ["*.lock", "*.json", "Makefile"],
                    "dirs": ["node_modules", ".git", "target"],
                },
                "traversal": {
                    "skip_hidden": True,
                    "respect_gitignore": True,
                    "ignore_filenames": [".ignore"],
                    "follow_links": False,
                },
                "acquisition": {
                    "url_prefixes": ["https://github.com/"],
                    "clone_depth": 1,
                    "git_executable": "git",
                    "timeout": 300,
                },
                "output": {
                    "encoding": "utf-8",
                },
            }
        },
    )
