"""
GitHub release listing adapter.

This module provides the release-listing collaborator of the resolution
engine: it talks to the GitHub REST API and turns releases and their files
into `Release` and `Asset` records. It performs no classification itself;
`list_release_installables` hands the assets to `core.aggregation`.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import requests

from constants import GITHUB_API_URL, RELEASES_PER_PAGE
from core.aggregation import aggregate
from core.exceptions import GitHubAPIError, ReleaseNotFoundError
from core.labels import LabelTables
from core.models import AppReference, Asset, Release, ReleaseItem
from models import AssetRecord

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Client for listing the releases of a GitHub repository.

    Attributes:
        api_url: Base URL of the REST API.
        session: The requests session used for every call. A token, when
            given, is sent as a bearer Authorization header.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_url: str = GITHUB_API_URL,
        timeout: int = 30,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def list_releases(self, ref: AppReference) -> list[Release]:
        """Return the most recent releases of the referenced repository."""
        return [
            _release_from_json(ref, data) for data in self._fetch_release_data(ref)
        ]

    def list_release_assets(self, ref: AppReference) -> list[Asset]:
        """
        Return the files of the referenced release.

        The release whose tag equals `ref.version` is used, or the most recent
        one when no version was requested.

        Raises:
            ReleaseNotFoundError: If no release matches.
            GitHubAPIError: If the API call fails.
        """
        for data in self._fetch_release_data(ref):
            if not ref.version or data.get("tag_name") == ref.version:
                assets = build_release_assets(ref, data)
                logger.debug(
                    "release %s has %d assets", data.get("tag_name"), len(assets)
                )
                return assets

        raise ReleaseNotFoundError(ref.version)

    def list_release_installables(
        self, ref: AppReference, labels: LabelTables
    ) -> list[ReleaseItem]:
        """Return the release files grouped into installables."""
        return aggregate(self.list_release_assets(ref), labels)

    def _fetch_release_data(self, ref: AppReference) -> list[dict[str, Any]]:
        url = f"{self.api_url}/repos/{ref.org}/{ref.repo}/releases"
        logger.debug("fetching %s", url)
        try:
            response = self.session.get(
                url,
                params={"per_page": RELEASES_PER_PAGE},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise GitHubAPIError(
                message=f"GitHub returned HTTP {status} listing releases of "
                f"{ref.org}/{ref.repo}",
                original_exception=e,
            ) from e
        except (requests.RequestException, ValueError) as e:
            raise GitHubAPIError(
                message=f"Failed to list releases of {ref.org}/{ref.repo}",
                original_exception=e,
            ) from e

        if not isinstance(data, list):
            raise GitHubAPIError(message="Unexpected response listing releases")
        return data


def build_release_assets(ref: AppReference, release: dict[str, Any]) -> list[Asset]:
    """Convert the assets of a release API object into `Asset` records."""
    ret = []
    for gha in release.get("assets") or []:
        record: AssetRecord = {
            "name": gha.get("name", ""),
            "download_url": gha.get("browser_download_url", ""),
            "size": int(gha.get("size") or 0),
            "author": (gha.get("uploader") or {}).get("login", ""),
            "created_at": parse_timestamp(gha.get("created_at")),
            "updated_at": parse_timestamp(gha.get("updated_at")),
            "host": ref.host,
            "org": ref.org,
            "repo": ref.repo,
            "version": release.get("tag_name", ""),
            "label": gha.get("label") or "",
        }
        ret.append(Asset.from_record(record))
    return ret


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp from the API, None when missing or invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("unparsable timestamp %r", value)
        return None


def _release_from_json(ref: AppReference, data: dict[str, Any]) -> Release:
    return Release(
        host=ref.host,
        org=ref.org,
        repo=ref.repo,
        version=data.get("tag_name", ""),
        id=int(data.get("id") or 0),
        prerelease=bool(data.get("prerelease")),
        created_at=parse_timestamp(data.get("created_at")),
        author=(data.get("author") or {}).get("login", ""),
    )
