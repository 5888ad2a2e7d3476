import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class PathResolver:
    """Central authority for all file path resolution in Species Atlas.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.app_dir = Path(os.getenv("SPECIESATLAS_APP", str(PACKAGE_DIR)))
        self.data_dir = Path(os.getenv("SPECIESATLAS_DATA", "/var/lib/speciesatlas"))

    def get_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks SPECIESATLAS_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("SPECIESATLAS_CONFIG")
        if config_path:
            return Path(config_path)
        return self.data_dir / "config" / "speciesatlas.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory path."""
        return self.data_dir

    def get_database_dir(self) -> Path:
        """Get the directory for database files."""
        return self.data_dir / "database"

    def get_database_path(self) -> Path:
        """Get the path to the default SQLite database."""
        return self.data_dir / "database" / "speciesatlas.db"

    def get_database_url(self, configured_url: str = "") -> str:
        """Get the async SQLAlchemy URL, preferring an explicitly configured one."""
        if configured_url:
            return configured_url
        return f"sqlite+aiosqlite:///{self.get_database_path()}"

    # Web application paths (in app directory)
    def get_static_dir(self) -> Path:
        """Get the directory for static web assets."""
        return self.app_dir / "web" / "static"

    def get_templates_dir(self) -> Path:
        """Get the directory for HTML templates."""
        return self.app_dir / "web" / "templates"

    def get_animal_csv_path(self, configured_path: str = "") -> str:
        """Get the animal speed CSV location (file path or URL)."""
        if configured_path:
            return configured_path
        return str(self.get_static_dir() / "sample_animals.csv")
