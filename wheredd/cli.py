"""Command-line interface for building and inspecting the wheredd database."""

import sys
from pathlib import Path

import typer
from rich.panel import Panel

from wheredd.build import carbon_proj_db
from wheredd.config import load_config
from wheredd.console import console
from wheredd.dep_versions import show_versions
from wheredd.errors import WhereddError
from wheredd.export import carbon_proj_db_to_file
from wheredd.info import wheredd_info
from wheredd.types import CONTINENTS, BuildSource, Continent
from wheredd.urls import carbon_proj_release_url, carbon_proj_source_urls

app = typer.Typer(help='Locate and query forest carbon project boundaries')

ENV_FILE_OPTION = typer.Option(
    None,
    '-e',
    '--env-file',
    help='Path to an environment variables file used to set up the configuration',
    exists=True,
    file_okay=True,
    resolve_path=True,
)


def _continents(continent: list[Continent] | None) -> list[str]:
    return [c.value for c in continent] if continent else list(CONTINENTS)


@app.command()
def source_urls(
    continent: list[Continent] | None = typer.Argument(
        None, help='Continents to list URLs for. Defaults to all continents'
    ),
    env_file: Path | None = ENV_FILE_OPTION,
):
    """Print the URLs of the raw per-continent source files."""
    config = load_config(env_file)
    for url in carbon_proj_source_urls(_continents(continent), config=config):
        console.print(url, soft_wrap=True)


@app.command()
def release_url(
    tag: str = typer.Option('latest', '-t', '--tag', help='Release tag', show_default=True),
    env_file: Path | None = ENV_FILE_OPTION,
):
    """Print the download URL of the pre-processed release file."""
    config = load_config(env_file)
    try:
        url = carbon_proj_release_url(tag, config=config)
    except WhereddError as e:
        console.print(f'[bold red]Error:[/] {e}')
        raise typer.Exit(1)
    console.print(url, soft_wrap=True)


@app.command()
def build(
    dest: Path | None = typer.Option(
        None, '-d', '--dest', help='Directory for the database. Defaults to the user cache'
    ),
    db_name: str | None = typer.Option(
        None, '-n', '--db-name', help='Database file name without extension'
    ),
    continent: list[Continent] | None = typer.Option(
        None, '-c', '--continent', help='Continent to include. Repeat for several'
    ),
    force: bool = typer.Option(
        False, '-f', '--force', help='Remove and rebuild an existing database', show_default=True
    ),
    build_from: BuildSource = typer.Option(
        BuildSource.RELEASE,
        '-s',
        '--build-from',
        help='Build from the GitHub release (fast) or the raw source files (full processing)',
        show_default=True,
    ),
    tag: str = typer.Option(
        'latest', '-t', '--tag', help='Release tag, used with --build-from release'
    ),
    env_file: Path | None = ENV_FILE_OPTION,
):
    """Build the local carbon project database."""
    config = load_config(env_file)
    continents = _continents(continent)

    console.print(
        Panel(
            f'[bold]Source:[/] {build_from.value}\n'
            f'[bold]Continents:[/] {", ".join(continents)}\n'
            f'[bold]Tag:[/] {tag if build_from is BuildSource.RELEASE else "-"}\n'
            f'[bold]Force:[/] {force}',
            title='Build Configuration',
            border_style='cyan',
        )
    )

    try:
        carbon_proj_db(
            dest=dest,
            db_name=db_name,
            continents=continents,
            force=force,
            build_from=build_from,
            tag=tag,
            config=config,
        )
    except WhereddError as e:
        console.print(f'[bold red]✗[/] Build failed: {e}')
        raise typer.Exit(1)


@app.command()
def export(
    dest_path: Path = typer.Argument(
        Path('forest_carbon_boundaries.parquet'), help='Output parquet file'
    ),
    db_path: Path | None = typer.Option(
        None, '--db-path', help='Database to export. Defaults to the last built database'
    ),
    env_file: Path | None = ENV_FILE_OPTION,
):
    """Export the database table to a zstd compressed Parquet file."""
    config = load_config(env_file)
    try:
        path = carbon_proj_db_to_file(dest_path, db_path, config=config)
    except WhereddError as e:
        console.print(f'[bold red]✗[/] Export failed: {e}')
        raise typer.Exit(1)
    console.print(f'[bold green]✓[/] Exported to {path}')


@app.command()
def info(env_file: Path | None = ENV_FILE_OPTION):
    """Show information about the most recently built database."""
    config = load_config(env_file)
    try:
        result = wheredd_info(config)
    except WhereddError as e:
        console.print(f'[bold red]Error:[/] {e}')
        raise typer.Exit(1)
    if result is None:
        raise typer.Exit(1)


@app.command()
def versions():
    """Print the versions of installed dependencies."""
    show_versions(file=sys.stdout)


def main():
    app()


if __name__ == '__main__':
    main()
