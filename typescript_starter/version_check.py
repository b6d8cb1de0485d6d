"""
Refuse to scaffold with a stale copy of the tool.
"""

from __future__ import annotations

import logging
from typing import Callable

from packaging.version import InvalidVersion, Version

from typescript_starter import PACKAGE_NAME
from typescript_starter.errors import InvalidVersionError, OutdatedToolError, RegistryLookupError
from typescript_starter.registry_client import RegistryClient, RegistryError

LOG = logging.getLogger(__name__)

LatestVersionFetcher = Callable[[str], str]


def _parse(version: str, origin: str) -> Version:
    try:
        return Version(version)
    except InvalidVersion as e:
        raise InvalidVersionError(version, origin) from e


def check_version(
    current_version: str,
    *,
    fetch_latest: LatestVersionFetcher | None = None,
    package_name: str = PACKAGE_NAME,
) -> str:
    """
    Compare current_version against the latest published release.

    Returns the latest version when current_version is equal or newer;
    raises OutdatedToolError when it is older, RegistryLookupError
    when the registry cannot answer, and InvalidVersionError when either
    version cannot be parsed.
    """
    fetch = fetch_latest or RegistryClient().fetch_latest_version
    try:
        latest = fetch(package_name)
    except RegistryError as e:
        raise RegistryLookupError(package_name, str(e)) from e

    installed = _parse(current_version, "installed")
    if installed < _parse(latest, "latest published"):
        raise OutdatedToolError(current_version, latest)

    LOG.debug("%s %s is up to date (latest: %s)", package_name, current_version, latest)
    return latest
