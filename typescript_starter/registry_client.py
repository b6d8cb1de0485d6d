"""
registry_client.py

Responsibility: Isolate all direct HTTP interaction.

This module must be the only place that:
- Constructs npm registry / GitHub REST endpoints
- Sends HTTP requests
- Interprets registry and GitHub response payloads

Everything else (version checks, identity lookup) receives the bound
methods of these clients as plain callables.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from typescript_starter import PACKAGE_NAME

LOG = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class RegistryError(RuntimeError):
    pass


class PackageNotFoundError(RegistryError):
    pass


class UsernameNotFoundError(RuntimeError):
    pass


class RegistryClient:
    def __init__(
        self,
        base_url: str = "https://registry.npmjs.org",
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()

    def _get(self, path: str) -> Any:
        url = f"{self._base_url}{path}"
        LOG.debug("GET %s", url)
        try:
            r = self._session.get(
                url,
                headers={"Accept": "application/json", "User-Agent": PACKAGE_NAME},
                timeout=DEFAULT_TIMEOUT,
            )
        except requests.RequestException as e:
            raise RegistryError(f"Registry request failed: {e}") from e
        if r.status_code == 404:
            raise PackageNotFoundError(f"Registry returned 404 for {path}")
        if r.status_code >= 400:
            raise RegistryError(f"Registry error {r.status_code} GET {path}")
        try:
            return r.json()
        except ValueError as e:
            raise RegistryError(f"Registry returned invalid JSON for {path}") from e

    def fetch_latest_version(self, package_name: str) -> str:
        """
        Return the `dist-tags.latest` version published for package_name.
        """
        # Scoped names keep their "@" but the slash must be encoded.
        data = self._get("/" + quote(package_name, safe="@"))
        latest = (data.get("dist-tags") or {}).get("latest") if isinstance(data, dict) else None
        if not isinstance(latest, str) or not latest:
            raise RegistryError(f"Registry document for {package_name} is malformed (no dist-tags.latest)")
        return latest


class GitHubClient:
    def __init__(
        self,
        api_base: str = "https://api.github.com",
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._api_base = api_base.rstrip("/")
        self._token = (token or "").strip()
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": PACKAGE_NAME,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def find_username(self, email: str) -> str:
        """
        Return the login of the GitHub user whose public email matches.
        """
        url = f"{self._api_base}/search/users"
        r = self._session.get(
            url,
            params={"q": f"{email} in:email"},
            headers=self._headers(),
            timeout=DEFAULT_TIMEOUT,
        )
        if r.status_code >= 400:
            raise UsernameNotFoundError(f"GitHub API error {r.status_code} GET /search/users")
        items = r.json().get("items") or []
        if not items or not items[0].get("login"):
            raise UsernameNotFoundError(f"No GitHub user found for {email}")
        return str(items[0]["login"])
