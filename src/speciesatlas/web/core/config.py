"""Configuration loading for the web application."""

from speciesatlas.config import AtlasConfig, ConfigManager
from speciesatlas.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> AtlasConfig:
    """Load Species Atlas configuration.

    Args:
        path_resolver: Optional PathResolver instance to use. If not provided,
                      creates a new PathResolver instance.

    Returns:
        AtlasConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    return ConfigManager(path_resolver).load()
