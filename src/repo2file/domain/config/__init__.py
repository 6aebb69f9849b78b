"""Configuration models with Pydantic validation."""

from repo2file.domain.config.acquisition import AcquisitionConfig
from repo2file.domain.config.app import AppConfig
from repo2file.domain.config.ignore import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_FILES,
    IgnoreConfig,
)
from repo2file.domain.config.output import OutputConfig
from repo2file.domain.config.traversal import TraversalConfig

__all__ = [
    "AppConfig",
    "IgnoreConfig",
    "TraversalConfig",
    "AcquisitionConfig",
    "OutputConfig",
    "DEFAULT_IGNORE_FILES",
    "DEFAULT_IGNORE_DIRS",
]
