import importlib
import platform
import sys

DEPENDENCIES = (
    'duckdb',
    'geopandas',
    'pandas',
    'pooch',
    'pydantic',
    'pydantic_settings',
    'requests',
    'rich',
    'shapely',
    'typer',
)


def _version(mod) -> str:
    # pydantic only exposes VERSION on older releases
    return getattr(mod, '__version__', None) or str(mod.VERSION)


def get_sys_info() -> list[tuple[str, str]]:
    """Python interpreter and platform details."""
    return [
        ('python', sys.version.replace('\n', ' ')),
        ('python-bits', f'{sys.maxsize.bit_length() + 1}'),
        ('OS', platform.system()),
        ('OS-release', platform.release()),
        ('machine', platform.machine()),
    ]


def get_dep_versions(deps=DEPENDENCIES) -> list[tuple[str, str | None]]:
    """
    Versions of the given modules.

    A module that cannot be imported is reported as None, one without a
    readable version as 'installed'.
    """
    blob = []
    for modname in deps:
        try:
            mod = sys.modules.get(modname) or importlib.import_module(modname)
        except Exception:
            blob.append((modname, None))
            continue
        try:
            blob.append((modname, _version(mod)))
        except Exception:
            blob.append((modname, 'installed'))
    return blob


def show_versions(file=sys.stdout):
    """print the versions of wheredd and its dependencies.
       Adapted from xarray/util/print_versions.py

    Parameters
    ----------
    file : file-like, optional
        print to the given file-like object. Defaults to sys.stdout.
    """
    from wheredd import __version__

    print('\nINSTALLED VERSIONS', file=file)
    print('------------------', file=file)
    for key, value in get_sys_info():
        print(f'{key}: {value}', file=file)

    print('', file=file)
    print(f'wheredd: {__version__}', file=file)
    for key, value in sorted(get_dep_versions()):
        print(f'{key}: {value}', file=file)
