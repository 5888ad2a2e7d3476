"""Species Atlas configuration package.

This package provides centralized configuration management with:
- Pydantic models for every configuration section
- YAML parsing and serialization
- Defaults written on first load
"""

from .manager import ConfigManager
from .models import AtlasConfig

__all__ = [
    "AtlasConfig",
    "ConfigManager",
]
