# flake8: noqa
import importlib.metadata

# get the version of the package
__version__ = importlib.metadata.version('wheredd')
from wheredd.dep_versions import show_versions
from wheredd.errors import (
    CorruptInfoError,
    DatabaseNotFoundError,
    DataSourceError,
    InvalidArgumentError,
    UnsupportedFormatError,
    WhereddError,
)
from wheredd.urls import carbon_proj_release_url, carbon_proj_source_urls
from wheredd.build import carbon_proj_db
from wheredd.export import carbon_proj_db_to_file
from wheredd.info import wheredd_db_path, wheredd_info
from wheredd.read import carbon_proj_read
