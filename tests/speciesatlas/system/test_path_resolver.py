"""Tests for PathResolver."""

import os
from pathlib import Path
from unittest.mock import patch

from speciesatlas.system.path_resolver import PACKAGE_DIR, PathResolver


class TestPathResolver:
    """Test path resolution from environment and defaults."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        """Should use the package directory and /var/lib/speciesatlas."""
        resolver = PathResolver()

        assert resolver.app_dir == PACKAGE_DIR
        assert resolver.get_data_dir() == Path("/var/lib/speciesatlas")
        assert resolver.get_config_path() == Path("/var/lib/speciesatlas/config/speciesatlas.yaml")
        assert resolver.get_templates_dir() == PACKAGE_DIR / "web" / "templates"

    @patch.dict(
        os.environ,
        {"SPECIESATLAS_DATA": "/tmp/atlas", "SPECIESATLAS_CONFIG": "/etc/atlas.yaml"},
        clear=True,
    )
    def test_environment_overrides(self):
        """Should honour the data dir and config path environment variables."""
        resolver = PathResolver()

        assert resolver.get_database_path() == Path("/tmp/atlas/database/speciesatlas.db")
        assert resolver.get_config_path() == Path("/etc/atlas.yaml")

    def test_database_url_defaults_to_sqlite_file(self, path_resolver):
        """Should build an aiosqlite URL for the default database file."""
        url = path_resolver.get_database_url()

        assert url.startswith("sqlite+aiosqlite:///")
        assert url.endswith("speciesatlas.db")

    def test_configured_values_take_precedence(self, path_resolver):
        """Should prefer explicitly configured database URL and CSV location."""
        assert path_resolver.get_database_url("sqlite+aiosqlite://") == "sqlite+aiosqlite://"
        assert path_resolver.get_animal_csv_path("https://x/a.csv") == "https://x/a.csv"

    def test_bundled_sample_csv_exists(self, path_resolver):
        """Should point at the sample table shipped with the package."""
        assert Path(path_resolver.get_animal_csv_path()).is_file()
