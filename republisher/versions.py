"""
Version helpers on top of the semver library.

Release tag eligibility and registry version normalization; parsing and
ordering are semver's.
"""

import re

from semver import Version

# Release tags are a bare "v" + three numeric components, nothing else.
_RELEASE_TAG_RE: re.Pattern[str] = re.compile(r"^v[0-9]+\.[0-9]+\.[0-9]+$")

TAG_PREFIX = "v"


def parse_version(text: str | None) -> Version | None:
    """Parse a version string, returning None when it is missing or invalid."""
    if not text:
        return None
    try:
        return Version.parse(text.strip())
    except ValueError:
        return None


def is_release_tag(name: str) -> bool:
    """
    Check whether a tag name denotes a plain release.

    The tag must look exactly like ``v<int>.<int>.<int>`` and what follows
    the prefix must be valid semver, which rules out leading zeros as well
    as pre-release and build suffixes (``v1.2.3-a``, ``v1.2.3+deno``).
    """
    return Version.is_valid(name[len(TAG_PREFIX):]) and bool(_RELEASE_TAG_RE.match(name))


def tag_to_version(name: str) -> Version:
    """Strip the single leading prefix character of a tag and parse the rest."""
    return Version.parse(name[len(TAG_PREFIX):])


def strip_prerelease(text: str) -> str:
    """Keep only the part of a version string before the first hyphen."""
    return text.split("-", 1)[0]
