from pathlib import Path
from typing import get_args

import duckdb

from wheredd.config import WhereddConfig
from wheredd.console import console
from wheredd.errors import DatabaseNotFoundError, UnsupportedFormatError
from wheredd.info import wheredd_db_path
from wheredd.types import ExportFormat
from wheredd.utils import sql_literal

SUPPORTED_FORMATS = get_args(ExportFormat)


def _resolve_dest(dest_path: Path | str) -> Path:
    dest_path = Path(dest_path)
    ext = dest_path.suffix.lstrip('.')
    if not ext:
        return dest_path.with_name(f'{dest_path.name}.{SUPPORTED_FORMATS[0]}')
    if ext.lower() not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f'Unsupported output file format: {dest_path}. '
            'Only Parquet format is supported. Please provide a .parquet file extension.'
        )
    return dest_path


def carbon_proj_db_to_file(
    dest_path: Path | str = 'forest_carbon_boundaries.parquet',
    db_path: Path | str | None = None,
    *,
    config: WhereddConfig | None = None,
) -> Path:
    """Export the carbon project table to a zstd compressed Parquet file.

    Parameters
    ----------
    dest_path : Path | str, default 'forest_carbon_boundaries.parquet'
        Output file. A path without extension gets '.parquet' appended.
    db_path : Path | str, optional
        Database to export. Defaults to the most recently built database.
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    Path
        Path of the written file.

    Raises
    ------
    UnsupportedFormatError
        If ``dest_path`` has an extension other than '.parquet'.
    DatabaseNotFoundError
        If there is no database to export.
    """
    config = config if config is not None else WhereddConfig()
    dest_path = _resolve_dest(dest_path)

    db_path = Path(db_path) if db_path is not None else wheredd_db_path(config)
    if not db_path.exists():
        raise DatabaseNotFoundError(f'No wheredd database found at {db_path}')

    dest_path.parent.mkdir(parents=True, exist_ok=True)
    console.log(f'Exporting {config.table_name} from {db_path} to {dest_path}')
    with duckdb.connect(str(db_path), read_only=True) as con:
        con.execute(
            f'COPY {config.table_name} TO {sql_literal(dest_path)} '
            "(FORMAT 'parquet', COMPRESSION 'zstd');"
        )

    return dest_path
