"""Configuration manager for loading and validating .repo2file.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from repo2file.domain.config import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_FILES,
    AcquisitionConfig,
    AppConfig,
    IgnoreConfig,
    OutputConfig,
    TraversalConfig,
)
from repo2file.domain.errors import ConfigurationError
from repo2file.domain.models.exclusion import DefaultExclusionSet

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".repo2file.yml"


class ConfigManager:
    """Manages configuration from .repo2file.yml and environment variables

    Loads configuration with validation using Pydantic models. Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .repo2file.yml file (searched from current directory upwards)
    3. Environment variables (REPO2FILE_*)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
        "ignore": {
            "files": list(DEFAULT_IGNORE_FILES),
            "dirs": list(DEFAULT_IGNORE_DIRS),
        },
        "traversal": {
            "skip_hidden": True,
            "respect_gitignore": True,
            "ignore_filenames": [".ignore"],
            "follow_links": False,
        },
        "acquisition": {
            "url_prefixes": ["https://github.com/"],
            "clone_depth": None,
            "git_executable": "git",
            "timeout": None,
        },
        "output": {
            "encoding": "utf-8",
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .repo2file.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                msg = error["msg"]
                errors.append(f"  - {field}: {msg}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .repo2file.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILENAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILENAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Returns:
            Validated AppConfig instance

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
            else:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(
                        f"Configuration file {self.config_path} must contain a mapping"
                    )
                config_dict = self._merge_config(config_dict, file_config)
                logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)

        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries

        Lists are replaced, not concatenated.
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with env overrides applied
        """
        if os.getenv("REPO2FILE_GIT_EXECUTABLE"):
            config["acquisition"]["git_executable"] = os.getenv("REPO2FILE_GIT_EXECUTABLE")

        # Validated as an int by AcquisitionConfig
        if os.getenv("REPO2FILE_CLONE_DEPTH"):
            config["acquisition"]["clone_depth"] = os.getenv("REPO2FILE_CLONE_DEPTH")

        if os.getenv("REPO2FILE_ENCODING"):
            config["output"]["encoding"] = os.getenv("REPO2FILE_ENCODING")

        return config

    def get_ignore_config(self) -> IgnoreConfig:
        return self.config.ignore

    def get_default_exclusions(self) -> DefaultExclusionSet:
        """Get the built-in exclusion set as an immutable value

        Returns:
            DefaultExclusionSet built from the ignore section
        """
        return DefaultExclusionSet.from_config(self.get_ignore_config())

    def get_traversal_config(self) -> TraversalConfig:
        return self.config.traversal

    def get_acquisition_config(self) -> AcquisitionConfig:
        return self.config.acquisition

    def get_output_config(self) -> OutputConfig:
        return self.config.output

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "output.encoding" or "output")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config.model_dump()
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
