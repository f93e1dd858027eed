"""Cached information about the most recently built wheredd database.

A single record per user is kept in the cache directory. Building a new
database overwrites it, so it always describes the last successful build.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pydantic
from rich.table import Table

from wheredd.config import WhereddConfig
from wheredd.console import console
from wheredd.errors import CorruptInfoError, DatabaseNotFoundError
from wheredd.utils import format_bytes


class WhereddInfo(pydantic.BaseModel):
    """Summary of a built wheredd database."""

    db_path: Path
    db_date: datetime
    db_size: pydantic.NonNegativeInt
    table_name: str
    nrecords: pydantic.NonNegativeInt
    ncols: pydantic.NonNegativeInt


def build_info(
    con: Any,
    db_path: Path,
    *,
    table_name: str | None = None,
    config: WhereddConfig | None = None,
) -> WhereddInfo:
    """Collect information about a freshly built database and save it to the cache.

    Parameters
    ----------
    con : duckdb.DuckDBPyConnection
        Open connection to the database.
    db_path : Path
        Path of the database file.
    table_name : str, optional
        Table to describe. Defaults to ``config.table_name``.
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    WhereddInfo
        The record that was written.
    """
    config = config if config is not None else WhereddConfig()
    table_name = table_name or config.table_name

    nrecords = con.execute(f'SELECT COUNT(*) FROM {table_name}').fetchone()[0]
    ncols = len(con.execute(f'DESCRIBE {table_name}').fetchall())
    # flush pending writes so the reported size is the on-disk size
    con.execute('CHECKPOINT')

    info = WhereddInfo(
        db_path=Path(db_path).resolve(),
        db_date=datetime.now(),
        db_size=Path(db_path).stat().st_size,
        table_name=table_name,
        nrecords=nrecords,
        ncols=ncols,
    )
    save_info(info, config=config)
    return info


def save_info(info: WhereddInfo, *, config: WhereddConfig | None = None) -> Path:
    """Write ``info`` to the cache, replacing any previous record."""
    config = config if config is not None else WhereddConfig()
    info_path = config.info_path
    info_path.parent.mkdir(parents=True, exist_ok=True)
    info_path.write_text(info.model_dump_json(indent=2))
    if config.debug:
        console.log(f'Saved database info to {info_path}')
    return info_path


def find_info(config: WhereddConfig | None = None) -> WhereddInfo:
    """Load the cached database info record.

    Raises
    ------
    DatabaseNotFoundError
        If no database has been built yet.
    CorruptInfoError
        If the record exists but cannot be parsed.
    """
    config = config if config is not None else WhereddConfig()
    info_path = config.info_path
    if not info_path.exists():
        raise DatabaseNotFoundError(
            f'No wheredd database found (no info file at {info_path}). '
            'Please build the database first using `carbon_proj_db()`.'
        )
    try:
        return WhereddInfo.model_validate(json.loads(info_path.read_text()))
    except (json.JSONDecodeError, pydantic.ValidationError) as exc:
        raise CorruptInfoError(f'Could not read wheredd info file at {info_path}') from exc


def wheredd_db_path(config: WhereddConfig | None = None) -> Path:
    """Path of the most recently built wheredd database."""
    return find_info(config).db_path


def wheredd_info(config: WhereddConfig | None = None) -> WhereddInfo | None:
    """Display information about the wheredd database.

    Returns
    -------
    WhereddInfo | None
        The cached record, or None if no database has been built yet or the
        record cannot be read.
    """
    config = config if config is not None else WhereddConfig()
    try:
        info = find_info(config)
    except DatabaseNotFoundError:
        console.print(
            f'[bold yellow]![/] No wheredd info file found at {config.info_path}. '
            'Build the database with `carbon_proj_db()`.'
        )
        return None
    except CorruptInfoError as e:
        console.print(
            f'[bold yellow]![/] {e}. Rebuild the database with `carbon_proj_db(force=True)`.'
        )
        return None

    table = Table(title='wheredd Database Information', show_header=False)
    table.add_column('Field', style='cyan', no_wrap=True)
    table.add_column('Value', style='white')
    table.add_row('Database path', str(info.db_path))
    table.add_row('Database created on', info.db_date.strftime('%Y-%m-%d %H:%M:%S'))
    table.add_row('Database size', format_bytes(info.db_size))
    table.add_row('Table', info.table_name)
    table.add_row('Number of records', f'{info.nrecords:,}')
    table.add_row('Number of columns', str(info.ncols))
    console.print(table)
    return info
