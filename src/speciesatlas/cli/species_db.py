"""CLI for creating and inspecting the species catalogue."""

import asyncio
import uuid

import click

from speciesatlas.config import AtlasConfig, ConfigManager
from speciesatlas.database.core import DatabaseService
from speciesatlas.species.dialogs import SpeciesDetailsView
from speciesatlas.species.models import Kingdom, SpeciesRecord
from speciesatlas.species.store import SpeciesStore, SpeciesStoreError
from speciesatlas.species.validation import validate_species_edit
from speciesatlas.system.path_resolver import PathResolver
from speciesatlas.system.structlog_configurator import configure_structlog


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Species Atlas catalogue management."""
    ctx.ensure_object(dict)
    path_resolver = PathResolver()
    config = ConfigManager(path_resolver).load()
    configure_structlog(config)
    ctx.obj["path_resolver"] = path_resolver
    ctx.obj["config"] = config


def _database_service(ctx: click.Context) -> DatabaseService:
    path_resolver: PathResolver = ctx.obj["path_resolver"]
    config: AtlasConfig = ctx.obj["config"]
    return DatabaseService(path_resolver.get_database_url(config.database_url))


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the catalogue tables if they do not exist."""

    async def _init() -> None:
        database_service = _database_service(ctx)
        try:
            await database_service.initialize()
        finally:
            await database_service.dispose()

    asyncio.run(_init())
    click.echo(click.style("Species catalogue initialized", fg="green"))


@cli.command()
@click.option("--scientific-name", required=True, help="Binomial name, e.g. Panthera leo")
@click.option("--common-name", default="", help="Vernacular name")
@click.option(
    "--kingdom",
    type=click.Choice([kingdom.value for kingdom in Kingdom]),
    required=True,
)
@click.option("--total-population", default="", help="Estimated number of individuals")
@click.option("--description", default="", help="Free-form notes")
@click.option("--author", required=True, help="Session id allowed to edit this record")
@click.pass_context
def add(
    ctx: click.Context,
    scientific_name: str,
    common_name: str,
    kingdom: str,
    total_population: str,
    description: str,
    author: str,
) -> None:
    """Add a species to the catalogue."""
    validation = validate_species_edit(
        {
            "scientific_name": scientific_name,
            "common_name": common_name,
            "kingdom": kingdom,
            "total_population": total_population,
            "description": description,
        }
    )
    if validation.values is None:
        for field, messages in validation.errors.items():
            for message in messages:
                click.echo(click.style(f"{field}: {message}", fg="red"), err=True)
        ctx.exit(1)

    record = SpeciesRecord(**validation.values.model_dump(), author=author)

    async def _add() -> SpeciesRecord:
        database_service = _database_service(ctx)
        try:
            await database_service.initialize()
            return await SpeciesStore(database_service).create_species(record)
        finally:
            await database_service.dispose()

    try:
        created = asyncio.run(_add())
    except SpeciesStoreError as e:
        raise click.ClickException(e.message) from e

    click.echo(click.style(f"Added {created.scientific_name} ({created.id})", fg="green"))


@cli.command()
@click.argument("species_id", type=click.UUID)
@click.option("--session-id", default=None, help="Show whether this session may edit")
@click.pass_context
def show(ctx: click.Context, species_id: uuid.UUID, session_id: str | None) -> None:
    """Print the details of one species."""

    async def _show() -> SpeciesRecord | None:
        database_service = _database_service(ctx)
        try:
            await database_service.initialize()
            return await SpeciesStore(database_service).get_species(species_id)
        finally:
            await database_service.dispose()

    species = asyncio.run(_show())
    if species is None:
        raise click.ClickException(f"Species {species_id} not found")

    view = SpeciesDetailsView(species, session_id)
    click.echo(click.style(view.title, bold=True))
    for row in view.rows():
        click.echo(f"{row.label}: {row.value}")
    if session_id is not None:
        click.echo(f"Editable: {'yes' if view.can_edit else 'no'}")


def main() -> None:
    """Entry point for the species catalogue CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
