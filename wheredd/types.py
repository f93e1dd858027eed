from enum import Enum
from typing import Literal


class Continent(str, Enum):
    """Continents the source data is partitioned by."""

    AFRICA = 'africa'
    ASIA = 'asia'
    EUROPE = 'europe'
    NORTH_AMERICA = 'north_america'
    OCEANIA = 'oceania'
    SOUTH_AMERICA = 'south_america'


class BuildSource(str, Enum):
    """Where the database is built from."""

    RELEASE = 'release'
    SOURCE = 'source'


class AreaRole(str, Enum):
    PROJECT = 'project'
    ACCOUNTING = 'accounting'
    REFERENCE = 'reference'


CONTINENTS: tuple[str, ...] = tuple(c.value for c in Continent)

# raw geometry column -> area_role label
ROLE_COLUMNS: dict[str, AreaRole] = {
    'project_area': AreaRole.PROJECT,
    'accounting_region': AreaRole.ACCOUNTING,
    'reference_region': AreaRole.REFERENCE,
}

ExportFormat = Literal['parquet']
