"""
Package registry lookups.

Reads the "latest" distribution tag of a package from an npm-compatible
registry. A package that was never published, or a registry that cannot be
reached, both yield no version rather than an error.
"""

import logging
from urllib.parse import quote

import requests
from semver import Version

from .versions import parse_version, strip_prerelease as _strip_prerelease

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


def package_metadata_url(registry_url: str, package_name: str) -> str:
    """
    Build the registry document URL for a package.

    Scoped names keep their ``@`` but have the separating slash encoded,
    e.g. ``@scope/name`` -> ``<registry>/@scope%2Fname``.
    """
    return f"{registry_url.rstrip('/')}/{quote(package_name, safe='@')}"


def extract_latest_version(document: object, strip_prerelease: bool = True) -> Version | None:
    """Pull ``dist-tags.latest`` out of a registry document."""
    if not isinstance(document, dict):
        return None
    dist_tags = document.get("dist-tags")
    if not isinstance(dist_tags, dict):
        return None
    latest = dist_tags.get("latest")
    if not isinstance(latest, str) or not latest:
        return None

    if strip_prerelease:
        latest = _strip_prerelease(latest)

    version = parse_version(latest)
    if version is None:
        logger.warning(f"Registry reported an invalid version: {latest!r}")
    return version


def fetch_latest_version(
    registry_url: str,
    package_name: str,
    strip_prerelease: bool = True,
    timeout: float = 30.0,
    session: requests.Session | None = None,
) -> Version | None:
    """
    Get the version currently tagged "latest" for a package.

    Args:
        registry_url: Base URL of the registry
        package_name: Package name, scoped or not
        strip_prerelease: Keep only the part of the version before the first hyphen
        timeout: Request timeout in seconds
        session: Optional requests session to issue the request with

    Returns:
        The published version, or None if there is none or it could not be read
    """
    url = package_metadata_url(registry_url, package_name)
    http = session or requests

    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning(f"Error fetching {url}: {e}")
        return None

    if response.status_code == 404:
        logger.info(f"Package {package_name} is not published on {registry_url}")
        return None
    if not response.ok:
        logger.warning(f"Registry returned status {response.status_code} for {package_name}")
        return None

    try:
        document = response.json()
    except ValueError as e:
        logger.warning(f"Registry returned a malformed document for {package_name}: {e}")
        return None

    return extract_latest_version(document, strip_prerelease=strip_prerelease)
