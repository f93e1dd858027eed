import duckdb
import pytest

from wheredd.config import WhereddConfig
from wheredd.testing import (
    AFRICA_RECORDS,
    EUROPE_RECORDS,
    write_release_parquet,
    write_source_parquet,
)
from wheredd.utils import install_load_extensions


@pytest.fixture(autouse=True)
def cache_dir(tmp_path, monkeypatch):
    """Give every test its own cache directory so the user cache is never touched."""
    path = tmp_path / 'cache'
    monkeypatch.setenv('WHEREDD_CACHE_DIR', str(path))
    return path


@pytest.fixture
def config(cache_dir):
    return WhereddConfig(cache_dir=cache_dir)


@pytest.fixture(scope='session')
def spatial_available():
    """Whether the DuckDB spatial extension can be installed and loaded."""
    con = duckdb.connect()
    try:
        install_load_extensions(spatial=True, httpfs=False, con=con)
    except duckdb.Error:
        return False
    finally:
        con.close()
    return True


@pytest.fixture
def spatial_con(spatial_available):
    """In-memory DuckDB connection with the spatial extension loaded."""
    if not spatial_available:
        pytest.skip('DuckDB spatial extension is not available')
    con = duckdb.connect()
    install_load_extensions(spatial=True, httpfs=False, con=con)
    yield con
    con.close()


@pytest.fixture
def write_source_file(tmp_path, spatial_con):
    """Factory fixture writing a raw (wide) source parquet file for a continent.

    Usage in tests:
        def test_something(write_source_file):
            path = write_source_file('europe', EUROPE_RECORDS)
    """
    source_dir = tmp_path / 'source'
    source_dir.mkdir(exist_ok=True)

    def _write(continent: str, records: list[dict]) -> str:
        path = write_source_parquet(spatial_con, source_dir / f'{continent}.parquet', records)
        return str(path)

    return _write


@pytest.fixture
def source_files(write_source_file):
    """Raw source files for europe and africa, keyed by continent."""
    return {
        'europe': write_source_file('europe', EUROPE_RECORDS),
        'africa': write_source_file('africa', AFRICA_RECORDS),
    }


@pytest.fixture
def release_file(tmp_path):
    """A pre-processed (long format) release file covering three continents."""
    with duckdb.connect() as con:
        path = write_release_parquet(con, tmp_path / 'forest_carbon_boundaries.parquet')
    return str(path)
