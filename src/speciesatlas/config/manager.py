"""Configuration management backed by a YAML file."""

import logging
import shutil
from typing import Any

import yaml
from pydantic import ValidationError

from speciesatlas.config.models import AtlasConfig
from speciesatlas.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path()

    def load(self) -> AtlasConfig:
        """Load and validate configuration, creating a default file when missing.

        Returns:
            AtlasConfig: Loaded and validated configuration

        Raises:
            ValueError: If the file contents do not form a valid configuration
        """
        self._ensure_config_exists()
        raw_config = self._read_yaml()

        try:
            return self._create_config_object(raw_config)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    def save(self, config: AtlasConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def reload(self) -> AtlasConfig:
        """Reload configuration from disk."""
        return self.load()

    def _ensure_config_exists(self) -> None:
        """Write a default config file if none exists yet."""
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = AtlasConfig().model_dump()
            self.config_path.write_text(
                yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            )
            logger.info("Created default configuration at %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary
        """
        config_text = self.config_path.read_text()
        return yaml.safe_load(config_text) or {}

    def _create_config_object(self, raw_config: dict[str, Any]) -> AtlasConfig:
        """Create AtlasConfig object from dictionary, dropping unknown keys."""
        expected_fields = set(AtlasConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Filtered out unexpected config fields: %s", unexpected_fields)

        return AtlasConfig(**filtered_config)
