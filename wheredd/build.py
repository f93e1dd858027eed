"""Build the local carbon project database.

The database holds a single table with one row per project per area role
(project, accounting, reference), geometries stored as WKB blobs and rows
ordered by continent, country and project id.

Two sources are supported:

- ``release``: download the pre-processed parquet file attached to a GitHub
  release. Fast, uses the data as published under the given tag.
- ``source``: read the raw per-continent parquet files from Source
  Cooperative, clean the geometries and pivot from wide to long format.
  Slower, but processes the latest source data.
"""

from collections.abc import Iterable
from pathlib import Path

import duckdb

from wheredd.config import WhereddConfig
from wheredd.console import console
from wheredd.errors import DataSourceError, InvalidArgumentError
from wheredd.info import build_info, wheredd_info
from wheredd.pipeline.queries import release_table_query, source_table_query
from wheredd.types import CONTINENTS, BuildSource, Continent
from wheredd.urls import carbon_proj_release_url, carbon_proj_source_urls
from wheredd.utils import install_load_extensions, is_remote, remove_database, validate_choices

# errors raised by duckdb when a file cannot be fetched or is not valid parquet
READ_ERRORS = (duckdb.IOException, duckdb.InvalidInputException)


def _build_source(build_from: str | BuildSource) -> BuildSource:
    try:
        return BuildSource(build_from)
    except ValueError as exc:
        raise InvalidArgumentError(
            f'Invalid `build_from` value: {build_from!r}. '
            f'Must be one of: {", ".join(b.value for b in BuildSource)}'
        ) from exc


def carbon_proj_db(
    dest: Path | str | None = None,
    db_name: str | None = None,
    continents: str | Continent | Iterable[str | Continent] = CONTINENTS,
    force: bool = False,
    build_from: str | BuildSource = BuildSource.RELEASE,
    tag: str = 'latest',
    *,
    config: WhereddConfig | None = None,
) -> Path:
    """Build the carbon project database.

    Parameters
    ----------
    dest : Path | str, optional
        Directory in which the database is created. Defaults to the user
        cache directory (``config.cache_dir``).
    db_name : str, optional
        Database file name without extension. Defaults to ``config.db_name``
        ('wheredd_db').
    continents : str | Continent | Iterable, default all continents
        Continents to include.
    force : bool, default False
        If True, an existing database is removed and rebuilt. If False, an
        existing database is returned as is.
    build_from : {'release', 'source'}, default 'release'
        Build from the pre-processed GitHub release or from the raw source
        files.
    tag : str, default 'latest'
        Release tag used when ``build_from='release'``. Ignored otherwise.
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    Path
        Path of the database file.

    Raises
    ------
    InvalidArgumentError
        If ``continents``, ``build_from`` or ``tag`` is not valid.
    DataSourceError
        If any input file cannot be fetched or read. No database is left
        behind in that case.

    Examples
    --------
    >>> db_path = carbon_proj_db()
    >>> db_path = carbon_proj_db(continents=['africa', 'asia'], build_from='source')
    >>> db_path = carbon_proj_db(tag='v0.0.1')
    >>> db_path = carbon_proj_db(force=True)
    """
    config = config if config is not None else WhereddConfig()
    build_from = _build_source(build_from)
    continents = validate_choices(continents, CONTINENTS, 'continents')

    db_path = config.db_path(dest, db_name).resolve()
    if db_path.exists() and not force:
        wheredd_info(config)
        return db_path

    if build_from is BuildSource.RELEASE:
        locations = [carbon_proj_release_url(tag, config=config)]
        query = release_table_query(config.table_name, locations[0], continents)
    else:
        locations = carbon_proj_source_urls(continents, config=config)
        query = source_table_query(config.table_name, locations)

    db_path.parent.mkdir(parents=True, exist_ok=True)
    if db_path.exists():
        console.log(f'Removing existing database at {db_path}')
        remove_database(db_path)

    console.log(f'Building {config.table_name} from {build_from.value} ({", ".join(continents)})')
    if config.debug:
        for location in locations:
            console.log(f'Reading {location}')
        console.log(query)

    try:
        with duckdb.connect(str(db_path)) as con:
            install_load_extensions(
                spatial=build_from is BuildSource.SOURCE,
                httpfs=any(is_remote(location) for location in locations),
                con=con,
            )
            con.execute(query)
    except READ_ERRORS as exc:
        remove_database(db_path)
        raise DataSourceError(
            f'Failed to build database from {build_from.value}: {exc}'
        ) from exc
    except Exception:
        remove_database(db_path)
        raise

    console.print(f'[bold green]✓[/] Created wheredd database at {db_path}')

    with duckdb.connect(str(db_path)) as con:
        build_info(con, db_path, table_name=config.table_name, config=config)
    wheredd_info(config)

    return db_path
