from pathlib import Path

import dotenv
import pooch
import pydantic
import pydantic_settings

from wheredd.console import console


def _default_cache_dir() -> Path:
    return Path(pooch.os_cache('wheredd'))


class WhereddConfig(pydantic_settings.BaseSettings):
    """Configuration for building and locating the wheredd database."""

    cache_dir: Path = pydantic.Field(
        default_factory=_default_cache_dir,
        description='Per-user cache directory. Holds the info record and the default database',
    )
    db_name: str = pydantic.Field(
        default='wheredd_db', description='Database file name, without extension'
    )
    table_name: str = pydantic.Field(
        default='carbon_projects', description='Name of the table holding project boundaries'
    )
    source_base_url: str = pydantic.Field(
        default='https://data.source.coop/cecil/forest-carbon-boundaries',
        description='Base URL of the per-continent source parquet files',
    )
    release_repo: str = pydantic.Field(
        default='belian-earth/wheredd', description='GitHub repository hosting data releases'
    )
    release_asset: str = pydantic.Field(
        default='forest_carbon_boundaries.parquet',
        description='File name of the pre-processed release asset',
    )
    github_api_url: str = pydantic.Field(
        default='https://api.github.com', description='GitHub REST API root'
    )
    github_token: str | None = pydantic.Field(
        default=None, description='Optional token used when listing release tags'
    )
    request_timeout: pydantic.PositiveFloat = pydantic.Field(
        default=30.0, description='Timeout in seconds for HTTP requests'
    )
    debug: bool = pydantic.Field(default=False, description='Enable debug logging')

    model_config = {'env_prefix': 'wheredd_', 'case_sensitive': False}

    @property
    def info_path(self) -> Path:
        """Location of the cached database info record."""
        return self.cache_dir / 'wheredd_info.json'

    def db_path(self, dest: Path | str | None = None, db_name: str | None = None) -> Path:
        """Resolve the database file path for a destination directory and name."""
        directory = Path(dest) if dest is not None else self.cache_dir
        return directory / f'{db_name or self.db_name}.duckdb'


def load_config(file_path: Path | None = None) -> WhereddConfig:
    """Load wheredd configuration from an env file (dotenv) or current environment."""
    if file_path is None:
        return WhereddConfig()
    dotenv.load_dotenv(file_path)
    config = WhereddConfig()
    if config.debug:
        console.log(f'Loaded configuration from {file_path}')
    return config
