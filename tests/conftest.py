from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path

import matplotlib
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from speciesatlas.config import AtlasConfig, ConfigManager
from speciesatlas.database.core import DatabaseService
from speciesatlas.species.models import Kingdom, SpeciesRecord
from speciesatlas.species.store import SpeciesStore
from speciesatlas.system.path_resolver import PACKAGE_DIR, PathResolver
from speciesatlas.web.core.container import Container
from speciesatlas.web.core.factory import create_app

# Configure matplotlib to use non-GUI backend for testing
matplotlib.use("Agg")

AUTHOR = "session-author"


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Get the absolute path to the repository root."""
    return Path(__file__).parent.parent.resolve()


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver whose writable paths live under a temp directory.

    Templates, static files and the bundled sample CSV still come from the
    package itself; the database and config file are isolated per test.
    """
    resolver = PathResolver()
    resolver.app_dir = PACKAGE_DIR
    resolver.data_dir = tmp_path / "data"
    resolver.data_dir.mkdir(parents=True)

    config_path = tmp_path / "config" / "speciesatlas.yaml"
    resolver.get_config_path = lambda: config_path  # type: ignore[method-assign]
    return resolver


@pytest.fixture
def atlas_config(path_resolver: PathResolver) -> AtlasConfig:
    """Load (and create) a default config in the temp config location."""
    return ConfigManager(path_resolver).load()


@pytest.fixture
def sample_csv_path(path_resolver: PathResolver) -> str:
    """Location of the bundled sample animal table."""
    return path_resolver.get_animal_csv_path()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Write CSV text to a temp file and return its path."""

    def _write(text: str, name: str = "animals.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
async def database_service(path_resolver: PathResolver) -> AsyncGenerator[DatabaseService, None]:
    """Provide an initialized DatabaseService on a temp SQLite file."""
    service = DatabaseService(path_resolver.get_database_url())
    await service.initialize()
    try:
        yield service
    finally:
        await service.dispose()


@pytest.fixture
def species_store(database_service: DatabaseService) -> SpeciesStore:
    """Provide a SpeciesStore over the temp database."""
    return SpeciesStore(database_service)


@pytest.fixture
def make_species() -> Callable[..., SpeciesRecord]:
    """Build an unsaved species record, overriding any field by keyword."""

    def _make(**overrides) -> SpeciesRecord:
        fields = {
            "scientific_name": "Panthera leo",
            "common_name": "Lion",
            "kingdom": Kingdom.ANIMALIA,
            "total_population": 23000,
            "description": "Large social cat of the savanna.",
            "author": AUTHOR,
        }
        fields.update(overrides)
        return SpeciesRecord(**fields)

    return _make


@pytest.fixture
def app_container(path_resolver: PathResolver, atlas_config: AtlasConfig) -> Container:
    """Container with every path and the config pointed at temp locations."""
    container = Container()
    container.path_resolver.override(providers.Singleton(lambda: path_resolver))
    container.config.override(providers.Singleton(lambda: atlas_config))
    return container


@pytest.fixture
def client(app_container: Container) -> Generator[TestClient, None, None]:
    """Running application client; the lifespan creates the tables."""
    app = create_app(app_container)
    with TestClient(app) as test_client:
        yield test_client
    app_container.unwire()


@pytest.fixture
def seed_species(
    client: TestClient, app_container: Container, make_species
) -> Callable[..., SpeciesRecord]:
    """Insert a species through the store on the client's event loop."""

    def _seed(**overrides) -> SpeciesRecord:
        store = app_container.species_store()
        return client.portal.call(store.create_species, make_species(**overrides))  # type: ignore[union-attr]

    return _seed
