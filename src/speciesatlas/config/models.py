"""Configuration models for Species Atlas.

This module contains all configuration-related Pydantic models used throughout the application.
"""

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "species-atlas"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'.")
        return level


class ChartMargins(BaseModel):
    """Pixel margins around the plot area."""

    top: int = 70
    right: int = 60
    bottom: int = 80
    left: int = 100


class ChartConfig(BaseModel):
    """Speed chart layout settings."""

    min_width: int = 600  # Chart never renders narrower than this (px)
    min_height: int = 400  # Chart never renders shorter than this (px)
    margins: ChartMargins = Field(default_factory=ChartMargins)
    y_ticks: int = 8
    band_padding: float = 0.15
    dpi: int = 100

    @field_validator("band_padding")
    @classmethod
    def validate_band_padding(cls, v: float) -> float:
        """Band padding is a fraction of the band step."""
        if not 0.0 <= v < 1.0:
            raise ValueError("band_padding must be in [0, 1).")
        return v


class AtlasConfig(BaseModel):
    """Configuration settings for the Species Atlas application."""

    config_version: str = "1.0.0"

    # Basic Settings
    site_name: str = "Species Atlas"

    # Storage
    database_url: str = ""  # Empty = SQLite file under the data directory

    # Animal speed chart
    animal_csv_path: str = ""  # Empty = bundled sample_animals.csv
    top_n: int = 15
    chart: ChartConfig = Field(default_factory=ChartConfig)

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        """At least one animal must be charted."""
        if v < 1:
            raise ValueError("top_n must be at least 1.")
        return v
