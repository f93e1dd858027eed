import io
import sys
from unittest import mock

from wheredd.dep_versions import get_dep_versions, get_sys_info, show_versions


def test_show_versions_handles_import_error() -> None:
    """Modules that can't be imported are reported as None."""
    with mock.patch('importlib.import_module') as mock_import:
        mock_import.side_effect = ImportError('Module not found')
        versions = dict(get_dep_versions(('not_a_real_module_xyz',)))

    assert versions == {'not_a_real_module_xyz': None}


def test_show_versions_with_existing_modules() -> None:
    """Already imported modules are used as is."""
    output = io.StringIO()
    mock_module = mock.MagicMock(__version__='2.0.0')

    with mock.patch.dict(sys.modules, {'duckdb': mock_module}):
        show_versions(file=output)

    assert 'duckdb: 2.0.0' in output.getvalue()


def test_show_versions_handles_version_error() -> None:
    """Modules without a version attribute are reported as installed."""
    output = io.StringIO()
    mock_module = mock.MagicMock(spec=[])

    with mock.patch.dict(sys.modules, {'requests': mock_module}):
        show_versions(file=output)

    assert 'requests: installed' in output.getvalue()


def test_show_versions_reports_package_and_system() -> None:
    output = io.StringIO()
    show_versions(file=output)
    result = output.getvalue()

    assert 'INSTALLED VERSIONS' in result
    assert 'wheredd: ' in result
    assert 'python: ' in result


def test_get_sys_info_keys() -> None:
    keys = [key for key, _ in get_sys_info()]
    assert keys[0] == 'python'
    assert 'OS' in keys
