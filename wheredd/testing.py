"""Small synthetic datasets mimicking the raw and released parquet files.

Used by the test suite to exercise the build pipeline without network access.
"""

from pathlib import Path
from typing import Any

from wheredd.types import ROLE_COLUMNS
from wheredd.utils import sql_literal

SQUARE = 'POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0))'
SQUARE_3D = 'POLYGON Z ((0 0 5, 1 0 5, 1 1 5, 0 1 5, 0 0 5))'
BOWTIE = 'POLYGON ((0 0, 2 2, 2 0, 0 2, 0 0))'
MIXED_COLLECTION = 'GEOMETRYCOLLECTION (POLYGON ((0 0, 1 0, 1 1, 0 0)), LINESTRING (0 0, 5 5))'
POINTS = 'MULTIPOINT ((10 50), (11 51))'
LINE = 'LINESTRING (0 0, 1 1)'
EMPTY_POLYGON = 'POLYGON EMPTY'
# repairs to a MULTILINESTRING
COLLAPSED_RING = 'POLYGON ((0 0, 1 1, 2 2, 0 0))'

DEFAULT_RECORD: dict[str, str | None] = {
    'id': 'VCS0',
    'project_name': 'Test project',
    'registry_name': 'Verra',
    'methodology': 'VM0007',
    'project_type': 'REDD',
    'country': 'France',
    'project_developer': 'Forest Developer Ltd',
    'project_start_date': '01/01/2010',
    'project_end_date': '12/31/2040',
    'entry_date': '06/05/2024',
    'processing_approach': 'digitized',
    'pd_declined': 'No',
    'project_area': None,
    'accounting_region': None,
    'reference_region': None,
}

# 3 + 0 + 2 + 1 output rows
EUROPE_RECORDS: list[dict[str, Any]] = [
    {
        'id': 'VCS100',
        'project_name': 'Alpine Forest',
        'country': 'France',
        'project_start_date': '01/15/2012',
        'project_end_date': 'unknown',
        'project_area': SQUARE_3D,
        'accounting_region': BOWTIE,
        'reference_region': MIXED_COLLECTION,
    },
    {'id': 'VCS200', 'country': 'Austria'},
    {
        'id': 'VCS300',
        'country': 'Germany',
        'project_area': SQUARE,
        'accounting_region': EMPTY_POLYGON,
        'reference_region': POINTS,
    },
    {
        'id': 'VCS050',
        'country': 'France',
        'project_area': SQUARE,
        'accounting_region': LINE,
    },
]
EUROPE_ROWS = 6

AFRICA_RECORDS: list[dict[str, Any]] = [
    {
        'id': 'GS10',
        'country': 'Kenya',
        'registry_name': 'Gold Standard',
        'project_area': SQUARE,
        'accounting_region': SQUARE,
    },
]
AFRICA_ROWS = 2

# (id, area_role, continent, country) rows of a pre-processed release file
RELEASE_ROWS: list[tuple[str, str, str, str]] = [
    ('VCS9', 'project', 'oceania', 'Australia'),
    ('VCS2', 'project', 'europe', 'Spain'),
    ('VCS1', 'accounting', 'europe', 'Spain'),
    ('VCS3', 'project', 'europe', 'Finland'),
    ('VCS4', 'project', 'africa', 'Ghana'),
]


def record_select(record: dict[str, Any]) -> str:
    """SELECT producing one raw (wide) source record. Needs the spatial extension."""
    record = {**DEFAULT_RECORD, **record}
    items = []
    for name, value in record.items():
        if name in ROLE_COLUMNS:
            expr = 'NULL::GEOMETRY' if value is None else f'ST_GeomFromText({sql_literal(value)})'
        else:
            expr = f'{sql_literal(value)}::VARCHAR'
        items.append(f'{expr} AS {name}')
    return 'SELECT ' + ', '.join(items)


def write_source_parquet(con: Any, path: Path, records: list[dict[str, Any]]) -> Path:
    """
    Write raw source records to a parquet file.

    Parameters
    ----------
    con : duckdb.DuckDBPyConnection
        Connection with the spatial extension loaded.
    path : Path
        Output file, named after its continent (e.g. ``europe.parquet``).
    records : list[dict]
        Records overriding :data:`DEFAULT_RECORD` fields.
    """
    union = '\nUNION ALL\n'.join(record_select(record) for record in records)
    con.execute(f"COPY ({union}) TO {sql_literal(path)} (FORMAT 'parquet');")
    return path


def write_release_parquet(
    con: Any, path: Path, rows: list[tuple[str, str, str, str]] = RELEASE_ROWS
) -> Path:
    """Write a minimal pre-processed release file with a dummy WKB geometry."""
    values = ',\n'.join(
        f"({', '.join(sql_literal(v) for v in row)}, '\\x01'::BLOB)" for row in rows
    )
    con.execute(
        f"""
        COPY (
            SELECT * FROM (VALUES {values}) AS t(id, area_role, continent, country, geometry)
        ) TO {sql_literal(path)} (FORMAT 'parquet');
        """
    )
    return path
