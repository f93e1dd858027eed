from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

from wheredd.errors import InvalidArgumentError

REMOTE_PREFIXES = ('http://', 'https://', 's3://', 'gs://', 'gcs://')


def install_load_extensions(
    spatial: bool = True, httpfs: bool = True, con: Any | None = None
) -> None:
    """
    Installs and applies duckdb extensions.

    Parameters
    ----------
    spatial : bool, optional
        Install and load SPATIAL extension, by default True
    httpfs : bool, optional
        Install and load HTTPFS extension, by default True
    con : duckdb.DuckDBPyConnection | None
        Connection to apply extensions to. If None, uses duckdb's default

    """
    import duckdb

    statements = []
    if spatial:
        statements.append('INSTALL SPATIAL; LOAD SPATIAL;')
    if httpfs:
        statements.append('INSTALL httpfs; LOAD httpfs;')
    if not statements:
        return
    ext_str = ' '.join(statements)
    if con is None:
        duckdb.sql(ext_str)
    else:
        con.execute(ext_str)


def is_remote(location: str | Path) -> bool:
    """Whether a file location has to be fetched over the network."""
    return str(location).lower().startswith(REMOTE_PREFIXES)


def sql_literal(value: str | Path) -> str:
    """Quote a value as a SQL string literal."""
    text = str(value).replace("'", "''")
    return f"'{text}'"


def sql_list(values: Iterable[str | Path]) -> str:
    """Comma separated SQL string literals."""
    return ', '.join(sql_literal(v) for v in values)


def validate_choices(
    values: str | Enum | Iterable[str | Enum], choices: Iterable[str], name: str
) -> list[str]:
    """
    Check that every value is one of the allowed choices.

    A bare string (or enum member) is treated as a single value. Order and
    duplicates are preserved.

    Parameters
    ----------
    values : str | Enum | Iterable[str | Enum]
        Value(s) to validate.
    choices : Iterable[str]
        Allowed values.
    name : str
        Argument name used in the error message.

    Returns
    -------
    list[str]
        The validated values as plain strings.

    Raises
    ------
    InvalidArgumentError
        If no value is given or any value is not an allowed choice.
    """
    if isinstance(values, (str, Enum)):
        values = [values]
    normalized = [v.value if isinstance(v, Enum) else v for v in values]
    allowed = list(choices)
    if not normalized:
        raise InvalidArgumentError(f'`{name}` must contain at least one of: {", ".join(allowed)}')
    invalid = [v for v in normalized if v not in allowed]
    if invalid:
        raise InvalidArgumentError(
            f'Invalid `{name}` value(s): {", ".join(map(repr, invalid))}. '
            f'Must be one of: {", ".join(allowed)}'
        )
    return normalized


def remove_database(db_path: Path) -> None:
    """Delete a DuckDB database file together with its write-ahead log."""
    for path in (db_path, db_path.with_name(f'{db_path.name}.wal')):
        path.unlink(missing_ok=True)


def format_bytes(size: int) -> str:
    """Human readable file size, e.g. ``'12.3 MB'``."""
    value = float(size)
    for unit in ('B', 'KB', 'MB', 'GB', 'TB'):
        if value < 1024 or unit == 'TB':
            break
        value /= 1024
    if unit == 'B':
        return f'{int(value)} B'
    return f'{value:.1f} {unit}'
