"""CREATE TABLE statements for the two build paths."""

from collections.abc import Sequence

from wheredd.pipeline.geometry import cleaned_cte
from wheredd.pipeline.pivot import pivot_union
from wheredd.types import ROLE_COLUMNS
from wheredd.utils import sql_list, sql_literal

ORDER_BY = 'ORDER BY continent, country, id'

# continent name is the source file stem, e.g. .../north_america.parquet
CONTINENT_FROM_FILENAME = r"regexp_extract(filename, '([^/]+)\.parquet$', 1)"


def release_table_query(table_name: str, location: str, continents: Sequence[str]) -> str:
    """
    Load the pre-processed release file, keeping the requested continents.

    Parameters
    ----------
    table_name : str
        Table to create.
    location : str
        URL or path of the release parquet file.
    continents : Sequence[str]
        Continents to keep.
    """
    return f"""
    CREATE TABLE {table_name} AS
        SELECT *
          FROM read_parquet({sql_literal(location)})
         WHERE continent IN ({sql_list(continents)})
      {ORDER_BY};
    """


def source_table_query(table_name: str, locations: Sequence[str]) -> str:
    """
    Load the raw per-continent files, clean their geometries and pivot to long format.

    Parameters
    ----------
    table_name : str
        Table to create.
    locations : Sequence[str]
        URLs or paths of the raw parquet files, one per continent.
    """
    return f"""
    CREATE TABLE {table_name} AS
    SELECT * FROM (
        WITH source AS (
            SELECT *,
                   {CONTINENT_FROM_FILENAME} AS continent
              FROM read_parquet([{sql_list(locations)}], filename = true)
        ),
        cleaned AS (
            {cleaned_cte(ROLE_COLUMNS)}
        )
        {pivot_union(ROLE_COLUMNS)}
    )
    {ORDER_BY};
    """
