"""CLI for rendering the animal speed chart to a PNG file."""

import asyncio
from pathlib import Path

import click

from speciesatlas.animals.chart import SpeedChartRenderer
from speciesatlas.animals.ingestion import DEFAULT_TOP_N, AnimalSpeedLoader
from speciesatlas.config import ConfigManager
from speciesatlas.system.path_resolver import PathResolver
from speciesatlas.system.structlog_configurator import configure_structlog


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Species Atlas speed chart tools."""
    ctx.ensure_object(dict)
    path_resolver = PathResolver()
    config = ConfigManager(path_resolver).load()
    configure_structlog(config)
    ctx.obj["path_resolver"] = path_resolver
    ctx.obj["config"] = config


@cli.command()
@click.argument("source", required=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="PNG file to write",
)
@click.option("--top-n", type=click.IntRange(min=1), default=None, help="Number of bars to draw")
@click.option("--width", type=click.IntRange(min=1), default=None, help="Canvas width in pixels")
@click.option("--height", type=click.IntRange(min=1), default=None, help="Canvas height in pixels")
@click.pass_context
def render(
    ctx: click.Context,
    source: str | None,
    output: Path,
    top_n: int | None,
    width: int | None,
    height: int | None,
) -> None:
    """Render the fastest animals in SOURCE (CSV path or URL) as a bar chart.

    Without SOURCE the configured CSV is used.

    Examples:
        # Chart the bundled sample data
        speciesatlas-chart render --output speeds.png

        # Chart the ten fastest animals from a remote CSV
        speciesatlas-chart render https://example.org/animals.csv -o speeds.png --top-n 10
    """
    config = ctx.obj["config"]
    path_resolver: PathResolver = ctx.obj["path_resolver"]
    resource = source or path_resolver.get_animal_csv_path(config.animal_csv_path)

    loader = AnimalSpeedLoader(top_n=top_n or config.top_n or DEFAULT_TOP_N)
    result = asyncio.run(loader.load_with_report(resource))

    if result.failed:
        raise click.ClickException(f"Could not load animal data from {resource}")

    for rejection in result.rejections:
        click.echo(
            click.style(f"Skipped row {rejection.row_number}: {rejection.reason}", fg="yellow"),
            err=True,
        )

    renderer = SpeedChartRenderer(config.chart)
    buf = renderer.render_png(result.records, width=width, height=height)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(buf.getvalue())

    click.echo(click.style(f"Wrote {len(result.records)} bars to {output}", fg="green"))


def main() -> None:
    """Entry point for the speed chart CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
