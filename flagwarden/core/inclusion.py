"""Transitive expansion of ``included_flags``.

Included flags are looked up in the full catalogue.  A parent flag
controls its dependents even when the user disabled them or they fall
outside the current command scope, but a dependent that fails its
compatibility check is still left out.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Set, Tuple

from flagwarden.core.compat import VersionLookup, is_usable
from flagwarden.core.models import FlagDefinition, FlagResolution, ResolutionSource

logger = logging.getLogger(__name__)


def index_catalogue(catalogue: Sequence[FlagDefinition]) -> Dict[str, FlagDefinition]:
    """Index *catalogue* by name; the first definition of a name wins."""
    index: Dict[str, FlagDefinition] = {}
    for flag in catalogue:
        index.setdefault(flag.name, flag)
    return index


def expand_included(
    resolutions: Tuple[FlagResolution, ...],
    catalogue_index: Mapping[str, FlagDefinition],
    versions: VersionLookup,
) -> Tuple[FlagResolution, ...]:
    """Return *resolutions* plus everything they include, transitively.

    The incoming resolutions keep their order and come first; included
    flags are appended depth-first, walking the enabled flags in turn.
    Duplicates by name are removed, keeping the first occurrence.
    """
    seen: Set[str] = set()
    expanded: List[FlagResolution] = []
    for resolution in resolutions:
        if resolution.name not in seen:
            seen.add(resolution.name)
            expanded.append(resolution)

    for resolution in tuple(expanded):
        # Explicit stack instead of recursion; reversed so the first
        # included name is visited first.
        stack: List[str] = list(reversed(resolution.flag.included_flags))
        while stack:
            included_name = stack.pop()
            if included_name in seen:
                continue
            included = catalogue_index.get(included_name)
            if included is None:
                logger.debug(
                    "Flag '%s' includes unknown flag '%s'; skipping.",
                    resolution.name,
                    included_name,
                )
                continue
            seen.add(included_name)
            if not is_usable(included, versions):
                logger.debug(
                    "Flag '%s' includes incompatible flag '%s'; skipping.",
                    resolution.name,
                    included_name,
                )
                continue
            expanded.append(FlagResolution(flag=included, source=ResolutionSource.INCLUDED))
            stack.extend(reversed(included.included_flags))

    return tuple(expanded)
