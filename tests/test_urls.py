import itertools
from unittest.mock import MagicMock, patch

import pytest
import requests

from wheredd.config import WhereddConfig
from wheredd.errors import DataSourceError, InvalidArgumentError
from wheredd.types import CONTINENTS, Continent
from wheredd.urls import carbon_proj_release_url, carbon_proj_source_urls, list_release_tags

BASE_URL = 'https://data.source.coop/cecil/forest-carbon-boundaries'

ALL_SUBSETS = [
    list(subset)
    for size in range(1, len(CONTINENTS) + 1)
    for subset in itertools.combinations(CONTINENTS, size)
]


def _releases_response(*tags, next_url=None):
    response = MagicMock()
    response.json.return_value = [{'tag_name': tag, 'name': tag} for tag in tags]
    response.raise_for_status.return_value = None
    response.links = {'next': {'url': next_url, 'rel': 'next'}} if next_url else {}
    return response


# ============= Source URLs =============


def test_source_url_single_continent():
    assert carbon_proj_source_urls('africa') == [f'{BASE_URL}/africa.parquet']


def test_source_urls_default_all_continents():
    urls = carbon_proj_source_urls()
    assert len(urls) == 6
    assert all('source.coop' in url for url in urls)


@pytest.mark.parametrize('continents', ALL_SUBSETS, ids='-'.join)
def test_source_urls_one_per_continent_in_order(continents):
    urls = carbon_proj_source_urls(continents)
    assert len(urls) == len(continents)
    for url, continent in zip(urls, continents):
        assert url.endswith(f'/{continent}.parquet')


def test_source_urls_preserve_given_order():
    urls = carbon_proj_source_urls(['south_america', 'asia'])
    assert urls == [f'{BASE_URL}/south_america.parquet', f'{BASE_URL}/asia.parquet']


def test_source_urls_accept_enum_members():
    urls = carbon_proj_source_urls([Continent.EUROPE, 'oceania'])
    assert urls == [f'{BASE_URL}/europe.parquet', f'{BASE_URL}/oceania.parquet']


def test_source_urls_custom_base_url():
    config = WhereddConfig(source_base_url='https://example.com/data/')
    urls = carbon_proj_source_urls('asia', config=config)
    assert urls == ['https://example.com/data/asia.parquet']


@pytest.mark.parametrize(
    'continents',
    ['invalid_continent', ['africa', 'atlantis'], ['Europe'], []],
)
def test_source_urls_reject_invalid_continents(continents):
    with pytest.raises(InvalidArgumentError):
        carbon_proj_source_urls(continents)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError, match='atlantis'):
        carbon_proj_source_urls('atlantis')


# ============= Release URL =============


@patch('wheredd.urls.requests.get')
def test_release_url_latest_does_not_query_github(mock_get):
    url = carbon_proj_release_url()
    assert url == (
        'https://github.com/belian-earth/wheredd/releases/latest/download/'
        'forest_carbon_boundaries.parquet'
    )
    mock_get.assert_not_called()


@patch('wheredd.urls.requests.get')
def test_release_url_known_tag(mock_get):
    mock_get.return_value = _releases_response('v0.2.0', 'v0.1.0')

    url = carbon_proj_release_url('v0.1.0')

    assert url == (
        'https://github.com/belian-earth/wheredd/releases/download/v0.1.0/'
        'forest_carbon_boundaries.parquet'
    )
    called_url = mock_get.call_args.args[0]
    assert called_url == 'https://api.github.com/repos/belian-earth/wheredd/releases'


@patch('wheredd.urls.requests.get')
def test_release_url_unknown_tag(mock_get):
    mock_get.return_value = _releases_response('v0.2.0')
    with pytest.raises(InvalidArgumentError, match='nonexistent_tag_12345'):
        carbon_proj_release_url('nonexistent_tag_12345')


@patch('wheredd.urls.requests.get')
def test_list_release_tags_deduplicates(mock_get):
    mock_get.return_value = _releases_response('v0.2.0', 'v0.2.0', 'v0.1.0')
    assert list_release_tags() == ['v0.2.0', 'v0.1.0']


@patch('wheredd.urls.requests.get')
def test_list_release_tags_sends_token(mock_get):
    mock_get.return_value = _releases_response()
    list_release_tags(config=WhereddConfig(github_token='secret'))
    headers = mock_get.call_args.kwargs['headers']
    assert headers['Authorization'] == 'Bearer secret'


@patch('wheredd.urls.requests.get')
def test_list_release_tags_network_error(mock_get):
    mock_get.side_effect = requests.ConnectionError('offline')
    with pytest.raises(DataSourceError, match='belian-earth/wheredd'):
        carbon_proj_release_url('v0.1.0')


@patch('wheredd.urls.requests.get')
def test_list_release_tags_http_error(mock_get):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError('404 Not Found')
    mock_get.return_value = response
    with pytest.raises(DataSourceError):
        list_release_tags()


@pytest.mark.integration
def test_release_url_live():
    tags = list_release_tags()
    if not tags:
        pytest.skip('No GitHub releases available yet')
    url = carbon_proj_release_url(tags[0])
    assert 'github' in url
    assert url.endswith('forest_carbon_boundaries.parquet')


@patch('wheredd.urls.requests.get')
def test_list_release_tags_follows_pages(mock_get):
    next_url = 'https://api.github.com/repositories/1/releases?per_page=100&page=2'
    mock_get.side_effect = [
        _releases_response('v1.1.0', 'v1.0.0', next_url=next_url),
        _releases_response('v0.1.0'),
    ]

    assert list_release_tags() == ['v1.1.0', 'v1.0.0', 'v0.1.0']
    assert mock_get.call_count == 2
    second = mock_get.call_args_list[1]
    assert second.args[0] == next_url
    assert second.kwargs['params'] is None


@patch('wheredd.urls.requests.get')
def test_release_url_tag_on_later_page(mock_get):
    mock_get.side_effect = [
        _releases_response('v2.0.0', next_url='https://api.github.com/next'),
        _releases_response('v0.0.1'),
    ]
    url = carbon_proj_release_url('v0.0.1')
    assert url.endswith('/releases/download/v0.0.1/forest_carbon_boundaries.parquet')


@patch('wheredd.urls.requests.get')
def test_list_release_tags_invalid_json(mock_get):
    response = _releases_response()
    response.json.side_effect = requests.JSONDecodeError('Expecting value', '<html>', 0)
    mock_get.return_value = response
    with pytest.raises(DataSourceError, match='belian-earth/wheredd'):
        carbon_proj_release_url('v1')


@patch('wheredd.urls.requests.get')
def test_list_release_tags_unexpected_payload(mock_get):
    response = _releases_response()
    response.json.return_value = {'message': 'API rate limit exceeded'}
    mock_get.return_value = response
    with pytest.raises(DataSourceError, match='Unexpected response'):
        list_release_tags()
