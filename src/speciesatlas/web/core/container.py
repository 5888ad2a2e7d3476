"""Dependency injection container for the Species Atlas application."""

from dependency_injector import containers, providers
from fastapi.templating import Jinja2Templates
from jinja2 import StrictUndefined

from speciesatlas.animals.chart import SpeedChartRenderer
from speciesatlas.animals.ingestion import AnimalSpeedLoader
from speciesatlas.database.core import DatabaseService
from speciesatlas.notifications.toast import ToastQueue
from speciesatlas.species.store import SpeciesStore
from speciesatlas.species.submission import SpeciesUpdateService
from speciesatlas.system.path_resolver import PathResolver
from speciesatlas.web.core.config import get_config


def create_jinja2_templates(resolver: PathResolver) -> Jinja2Templates:
    """Create Jinja2Templates with dynamic path from resolver and strict undefined handling.

    Configures Jinja2 to raise errors on undefined variables,
    making missing template context obvious during development.
    """
    templates = Jinja2Templates(directory=str(resolver.get_templates_dir()))
    templates.env.undefined = StrictUndefined
    return templates


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Long-lived services are singletons; anything that carries per-request
    state (toast queues and the services writing to them) is a factory.
    """

    # Core infrastructure services - singletons
    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    templates = providers.Singleton(
        create_jinja2_templates,
        resolver=path_resolver,
    )

    # Database
    database_url = providers.Factory(
        lambda resolver, c: resolver.get_database_url(c.database_url),
        resolver=path_resolver,
        c=config,
    )

    database_service = providers.Singleton(
        DatabaseService,
        database_url=database_url,
    )

    species_store = providers.Singleton(
        SpeciesStore,
        database_service=database_service,
    )

    # Animal speed chart
    animal_csv_path = providers.Factory(
        lambda resolver, c: resolver.get_animal_csv_path(c.animal_csv_path),
        resolver=path_resolver,
        c=config,
    )

    animal_speed_loader = providers.Singleton(
        AnimalSpeedLoader,
        top_n=providers.Factory(lambda c: c.top_n, c=config),
    )

    speed_chart_renderer = providers.Singleton(
        SpeedChartRenderer,
        chart_config=providers.Factory(lambda c: c.chart, c=config),
    )

    # Per-request notification queue and the submission service reporting into it
    toast_queue = providers.Factory(ToastQueue)

    species_update_service = providers.Factory(
        SpeciesUpdateService,
        store=species_store,
        notifications=toast_queue,
    )
