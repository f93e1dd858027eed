"""Geometry cleaning stage of the source build.

Each raw role geometry is forced to 2D, reduced to a single geometry family
(points or polygons), repaired with ST_MakeValid and reduced again, since the
repair can emit parts of other families (e.g. collapsed rings become lines).
A repaired value of the wrong dimension is dropped (NULL).
Repair runs after ST_Force2D because dropping Z can introduce new
self-intersections.
"""

from collections.abc import Iterable

# ST_CollectionExtract type codes
POINT_TYPE = 1
POLYGON_TYPE = 3

# ST_Dimension of the geometry family kept for each type code
TYPE_DIMENSIONS = {POINT_TYPE: 0, POLYGON_TYPE: 2}

CLEAN_SUFFIX = '_clean'


def clean_column_name(column: str) -> str:
    return f'{column}{CLEAN_SUFFIX}'


def _extract_valid(geometry: str, type_code: int) -> str:
    extracted = f'ST_CollectionExtract(ST_Force2D({geometry}), {type_code})'
    repaired = f'ST_CollectionExtract(ST_MakeValid({extracted}), {type_code})'
    # extraction leaves non-collections as they are, so a ring collapsed to a
    # line by the repair is caught here
    dimension = TYPE_DIMENSIONS[type_code]
    return f'CASE WHEN ST_Dimension({repaired}) = {dimension} THEN {repaired} END'


def geometry_clean_clause(column: str) -> str:
    """
    SQL expression producing the cleaned version of one geometry column.

    Point-like values keep their point parts, polygon-like values and
    collections keep their polygon parts. Other geometry types (lines) and
    NULL become NULL. The result column is named ``<column>_clean``.

    Parameters
    ----------
    column : str
        Name of the raw geometry column.

    Returns
    -------
    str
        A ``CASE ... END AS <column>_clean`` select-list item.
    """
    geometry = f'{column}::GEOMETRY'
    geometry_type = f'ST_GeometryType({geometry})::VARCHAR'
    return (
        'CASE\n'
        f"  WHEN {geometry_type} LIKE '%POINT%'\n"
        f'    THEN {_extract_valid(geometry, POINT_TYPE)}\n'
        f"  WHEN {geometry_type} LIKE '%POLYGON%' OR {geometry_type} LIKE '%COLLECTION%'\n"
        f'    THEN {_extract_valid(geometry, POLYGON_TYPE)}\n'
        f'END AS {clean_column_name(column)}'
    )


def clean_clauses(columns: Iterable[str]) -> str:
    """Select-list items cleaning every column in ``columns``."""
    return ',\n'.join(geometry_clean_clause(column) for column in columns)


def cleaned_cte(columns: Iterable[str], source: str = 'source') -> str:
    """
    SELECT replacing the raw geometry columns of ``source`` with cleaned ones.

    Parameters
    ----------
    columns : Iterable[str]
        Raw geometry columns to clean.
    source : str, default 'source'
        Relation to select from.
    """
    columns = list(columns)
    return (
        f'SELECT * EXCLUDE ({", ".join(columns)}),\n'
        f'{clean_clauses(columns)}\n'
        f'FROM {source}'
    )
