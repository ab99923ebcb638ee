"""Unknown-flag detection with "did you mean" suggestions."""

from __future__ import annotations

import logging
from typing import Collection, Iterable, List, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from flagwarden.constants import SUGGESTION_MAX_DISTANCE
from flagwarden.core.models import UnknownFlag

logger = logging.getLogger(__name__)

UNKNOWN_FLAGS_HEADER = "The following flag(s) found in your config are not known:"


def closest_name(name: str, candidates: Iterable[str]) -> Optional[str]:
    """Return the candidate nearest to *name* if it is close enough.

    An identical candidate is skipped.  On ties the earliest candidate
    wins.
    """
    best: Optional[str] = None
    best_distance = 0
    for candidate in candidates:
        if candidate == name:
            continue
        distance = Levenshtein.distance(name, candidate)
        if best is None or distance < best_distance:
            best = candidate
            best_distance = distance

    if best is not None and best_distance < SUGGESTION_MAX_DISTANCE:
        return best
    return None


def find_unknown_flags(
    config_names: Iterable[str],
    usable_names: Collection[str],
    catalogue_names: Sequence[str],
) -> List[UnknownFlag]:
    """Return configured names that are not usable catalogue flags.

    Suggestions are drawn from the whole catalogue, including flags that
    failed their compatibility check.
    """
    unknown: List[UnknownFlag] = []
    for name in config_names:
        if not name or name in usable_names:
            continue
        suggestion = closest_name(name, catalogue_names)
        unknown.append(UnknownFlag(name=name, did_you_mean=suggestion))
        logger.warning(
            "Unknown flag '%s' in config%s.",
            name,
            f" (did you mean '{suggestion}'?)" if suggestion else "",
        )
    return unknown


def format_unknown_flags(unknown: Sequence[UnknownFlag]) -> str:
    """Render the advisory warning for *unknown*; empty when there are none."""
    if not unknown:
        return ""
    message = UNKNOWN_FLAGS_HEADER
    for item in unknown:
        message += f"\n- {item.name}"
        if item.did_you_mean:
            message += f" (did you mean: {item.did_you_mean})"
    return message
