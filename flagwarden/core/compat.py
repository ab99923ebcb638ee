"""Compatibility gating against installed distribution versions.

A flag may declare ``compatibility: {"pydantic": ">=2.0"}``.  The flag
is usable only if every listed distribution is installed and its
version falls inside the specifier set.  Anything that cannot be
checked (missing distribution, unparsable version or specifier) makes
the flag unusable; it never raises.
"""

from __future__ import annotations

import logging
from importlib import metadata
from typing import Callable, Dict, Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from flagwarden.core.models import FlagDefinition

logger = logging.getLogger(__name__)

# name -> installed version string, or None when not resolvable
VersionLookup = Callable[[str], Optional[str]]


def installed_version(dist_name: str) -> Optional[str]:
    """Return the installed version of *dist_name*, or ``None``."""
    try:
        return metadata.version(dist_name)
    except metadata.PackageNotFoundError:
        return None


class CachedVersionLookup:
    """Memoise a :data:`VersionLookup` for the duration of one resolution.

    The compatibility check runs several times per flag, so each
    distribution is looked up once.  Lookup failures are cached too.
    """

    def __init__(self, lookup: VersionLookup = installed_version) -> None:
        self._lookup = lookup
        self._cache: Dict[str, Optional[str]] = {}

    def __call__(self, dist_name: str) -> Optional[str]:
        if dist_name not in self._cache:
            try:
                self._cache[dist_name] = self._lookup(dist_name)
            except Exception as exc:
                logger.debug("Version lookup for '%s' failed: %s", dist_name, exc)
                self._cache[dist_name] = None
        return self._cache[dist_name]


def satisfies(version: str, constraint: str) -> bool:
    """Return True if *version* is inside the specifier set *constraint*."""
    try:
        return Version(version) in SpecifierSet(constraint)
    except (InvalidVersion, InvalidSpecifier) as exc:
        logger.debug("Cannot compare '%s' against '%s': %s", version, constraint, exc)
        return False


def is_usable(flag: FlagDefinition, versions: VersionLookup) -> bool:
    """Return True if every compatibility constraint of *flag* holds."""
    for dist_name, constraint in flag.compatibility.items():
        version = versions(dist_name)
        if version is None:
            logger.debug(
                "Flag '%s' unusable: '%s' is not installed.",
                flag.name,
                dist_name,
            )
            return False
        if not satisfies(version, constraint):
            logger.debug(
                "Flag '%s' unusable: %s %s does not satisfy '%s'.",
                flag.name,
                dist_name,
                version,
                constraint,
            )
            return False
    return True
