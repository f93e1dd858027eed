from collections.abc import Iterable
from pathlib import Path

import duckdb
import geopandas as gpd
import shapely

from wheredd.config import WhereddConfig
from wheredd.errors import DatabaseNotFoundError
from wheredd.info import wheredd_db_path
from wheredd.types import CONTINENTS, AreaRole, Continent
from wheredd.utils import validate_choices


def carbon_proj_read(
    db_path: Path | str | None = None,
    *,
    continents: str | Continent | Iterable[str | Continent] | None = None,
    area_roles: str | AreaRole | Iterable[str | AreaRole] | None = None,
    crs: str = 'EPSG:4326',
    config: WhereddConfig | None = None,
) -> gpd.GeoDataFrame:
    """Read carbon project boundaries from the database into a GeoDataFrame.

    Parameters
    ----------
    db_path : Path | str, optional
        Database to read. Defaults to the most recently built database.
    continents : str | Continent | Iterable, optional
        Only return rows from these continents.
    area_roles : str | AreaRole | Iterable, optional
        Only return rows with these area roles ('project', 'accounting',
        'reference').
    crs : str, default 'EPSG:4326'
        Coordinate reference system of the stored geometries.
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    gpd.GeoDataFrame
        One row per project per area role, ordered by continent, country and id.

    Example
    -------
    >>> gdf = carbon_proj_read(continents='europe', area_roles='project')
    >>> gdf.plot()
    """
    config = config if config is not None else WhereddConfig()

    filters: list[str] = []
    params: list[str] = []
    if continents is not None:
        values = validate_choices(continents, CONTINENTS, 'continents')
        filters.append(f'continent IN ({", ".join("?" * len(values))})')
        params.extend(values)
    if area_roles is not None:
        values = validate_choices(area_roles, [r.value for r in AreaRole], 'area_roles')
        filters.append(f'area_role IN ({", ".join("?" * len(values))})')
        params.extend(values)

    db_path = Path(db_path) if db_path is not None else wheredd_db_path(config)
    if not db_path.exists():
        raise DatabaseNotFoundError(f'No wheredd database found at {db_path}')

    query = f'SELECT * FROM {config.table_name}'
    if filters:
        query += ' WHERE ' + ' AND '.join(filters)
    query += ' ORDER BY continent, country, id'

    with duckdb.connect(str(db_path), read_only=True) as con:
        df = con.execute(query, params).df()

    geometry = shapely.from_wkb(df.pop('geometry').map(bytes))
    return gpd.GeoDataFrame(df, geometry=geometry, crs=crs)
