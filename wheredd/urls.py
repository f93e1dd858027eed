"""Locations of the forest carbon boundary data files.

Raw per-continent files are maintained by the CECIL project on Source
Cooperative:
https://source.coop/cecil/forest-carbon-boundaries/

Pre-processed (cleaned, long format) files are attached to GitHub releases of
the wheredd repository.
"""

from collections.abc import Iterable

import requests

from wheredd.config import WhereddConfig
from wheredd.console import console
from wheredd.errors import DataSourceError, InvalidArgumentError
from wheredd.types import CONTINENTS, Continent
from wheredd.utils import validate_choices


def carbon_proj_source_urls(
    continents: str | Continent | Iterable[str | Continent] = CONTINENTS,
    *,
    config: WhereddConfig | None = None,
) -> list[str]:
    """Get URLs of the raw carbon project parquet files.

    Parameters
    ----------
    continents : str | Continent | Iterable, default all continents
        Continent name(s) to get URLs for. Valid values are 'africa', 'asia',
        'europe', 'north_america', 'oceania' and 'south_america'.
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    list[str]
        One URL per continent, in the order given.

    Raises
    ------
    InvalidArgumentError
        If any continent is not recognised.

    Examples
    --------
    >>> carbon_proj_source_urls(['africa', 'asia'])
    ['https://data.source.coop/cecil/forest-carbon-boundaries/africa.parquet',
     'https://data.source.coop/cecil/forest-carbon-boundaries/asia.parquet']
    """
    continents = validate_choices(continents, CONTINENTS, 'continents')
    config = config if config is not None else WhereddConfig()
    base_url = config.source_base_url.rstrip('/')
    return [f'{base_url}/{continent}.parquet' for continent in continents]


def list_release_tags(*, config: WhereddConfig | None = None) -> list[str]:
    """List tags of the data releases published on GitHub.

    Raises
    ------
    DataSourceError
        If the GitHub API cannot be reached or returns an error.
    """
    config = config if config is not None else WhereddConfig()
    url = f'{config.github_api_url.rstrip("/")}/repos/{config.release_repo}/releases'
    headers = {'Accept': 'application/vnd.github+json'}
    if config.github_token:
        headers['Authorization'] = f'Bearer {config.github_token}'

    if config.debug:
        console.log(f'Listing releases from {url}')
    tags = []
    params = {'per_page': 100}
    while url:
        try:
            response = requests.get(
                url, headers=headers, params=params, timeout=config.request_timeout
            )
            response.raise_for_status()
            releases = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise DataSourceError(
                f'Could not list releases of {config.release_repo}: {exc}'
            ) from exc
        if not isinstance(releases, list):
            raise DataSourceError(
                f'Unexpected response listing releases of {config.release_repo}: {releases!r}'
            )

        for release in releases:
            tag = release.get('tag_name') if isinstance(release, dict) else None
            if tag and tag not in tags:
                tags.append(tag)

        # the next page link already carries the query string
        url = response.links.get('next', {}).get('url')
        params = None
    return tags


def carbon_proj_release_url(tag: str = 'latest', *, config: WhereddConfig | None = None) -> str:
    """Get the download URL of the pre-processed release file.

    Parameters
    ----------
    tag : str, default 'latest'
        Release tag. Anything other than 'latest' must match an existing
        release tag (e.g. 'v0.2.0').
    config : WhereddConfig, optional
        Configuration object. Creates default if None.

    Returns
    -------
    str
        Direct download URL of ``forest_carbon_boundaries.parquet``.

    Raises
    ------
    InvalidArgumentError
        If ``tag`` is not an existing release tag.
    DataSourceError
        If the release tags cannot be listed.
    """
    config = config if config is not None else WhereddConfig()
    base = f'https://github.com/{config.release_repo}/releases'
    if tag == 'latest':
        return f'{base}/latest/download/{config.release_asset}'

    tags = list_release_tags(config=config)
    if tag not in tags:
        raise InvalidArgumentError(
            f'Unknown release tag {tag!r}. Must be one of: {", ".join([*tags, "latest"])}'
        )
    return f'{base}/download/{tag}/{config.release_asset}'
