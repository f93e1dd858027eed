"""Wide to long pivot of cleaned role geometries.

Every source record carries three geometry columns (project area, accounting
region, reference region). The pivot emits one row per non-empty geometry,
tagged with its ``area_role``, so a record yields between zero and three rows.
"""

from collections.abc import Mapping

from wheredd.pipeline.geometry import clean_column_name
from wheredd.types import ROLE_COLUMNS, AreaRole
from wheredd.utils import sql_literal

DATE_FORMAT = '%m/%d/%Y'
DATE_COLUMNS = ('project_start_date', 'project_end_date', 'entry_date')

# Output schema, in column order
OUTPUT_COLUMNS = (
    'id',
    'project_name',
    'area_role',
    'registry_name',
    'methodology',
    'project_type',
    'continent',
    'country',
    'project_developer',
    'project_start_date',
    'project_end_date',
    'entry_date',
    'processing_approach',
    'pd_declined',
    'filename',
    'geometry',
)


def _select_item(output: str, column: str, role: AreaRole) -> str:
    if output == 'area_role':
        return f'{sql_literal(role.value)} AS area_role'
    if output in DATE_COLUMNS:
        return f'TRY_STRPTIME({output}, {sql_literal(DATE_FORMAT)})::DATE AS {output}'
    if output == 'geometry':
        return f'ST_AsWKB({clean_column_name(column)})::BLOB AS geometry'
    return output


def pivot_select(column: str, role: AreaRole | str, source: str = 'cleaned') -> str:
    """
    SELECT emitting the rows of a single area role.

    Parameters
    ----------
    column : str
        Raw geometry column name. Its cleaned counterpart is read.
    role : AreaRole | str
        Label written to ``area_role``.
    source : str, default 'cleaned'
        Relation holding the cleaned geometry columns.

    Returns
    -------
    str
        SELECT statement over ``source`` dropping null and empty geometries.
    """
    role = AreaRole(role)
    clean = clean_column_name(column)
    items = ',\n       '.join(_select_item(output, column, role) for output in OUTPUT_COLUMNS)
    return (
        f'SELECT {items}\n'
        f'  FROM {source}\n'
        f' WHERE {clean} IS NOT NULL\n'
        f'   AND NOT ST_IsEmpty({clean})'
    )


def pivot_union(
    roles: Mapping[str, AreaRole] = ROLE_COLUMNS, source: str = 'cleaned'
) -> str:
    """UNION ALL of :func:`pivot_select` over every role column."""
    return '\n\nUNION ALL\n\n'.join(
        pivot_select(column, role, source=source) for column, role in roles.items()
    )
