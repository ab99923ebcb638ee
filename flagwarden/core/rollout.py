"""Gradual rollout: deterministic per-site sampling.

The resolver only needs a callable ``(flag_name, percentage) -> bool``
(:class:`RolloutSampler`).  :class:`SiteSampler` is the default oracle:
it hashes a stable site identity together with the flag name into a
bucket in ``[0, 100)`` so a given site always gets the same answer for
the same flag and percentage.
"""

from __future__ import annotations

import hashlib
import logging
import os
from typing import Callable, Dict, Tuple

logger = logging.getLogger(__name__)

RolloutSampler = Callable[[str, float], bool]


def site_id_for_path(path: str) -> str:
    """Derive a stable site identity from a project directory."""
    abs_path = os.path.realpath(os.path.abspath(path))
    return hashlib.sha256(abs_path.encode("utf-8")).hexdigest()


class SiteSampler:
    """Hash-based rollout oracle bound to one site identity.

    Parameters
    ----------
    site_id:
        Any string that identifies the installation.  Use
        :func:`site_id_for_path` for a directory-based identity.
    """

    def __init__(self, site_id: str) -> None:
        if not site_id:
            raise ValueError("site_id must be a non-empty string")
        self.site_id = site_id

    def bucket(self, flag_name: str) -> int:
        """Return the site's bucket for *flag_name*, in ``[0, 100)``."""
        digest = hashlib.sha256(f"{self.site_id}:{flag_name}".encode("utf-8")).hexdigest()
        return int(digest[:8], 16) % 100

    def __call__(self, flag_name: str, percentage: float) -> bool:
        if percentage <= 0:
            return False
        if percentage >= 100:
            return True
        return self.bucket(flag_name) < percentage

    def __repr__(self) -> str:
        return f"SiteSampler(site_id={self.site_id[:12]!r})"


class RecordingSampler:
    """Wrap a sampler and remember each decision it made.

    Each decision is kept in ``decisions`` and logged at debug level.
    """

    def __init__(self, sampler: RolloutSampler) -> None:
        self._sampler = sampler
        self.decisions: Dict[str, Tuple[float, bool]] = {}

    def __call__(self, flag_name: str, percentage: float) -> bool:
        decision = bool(self._sampler(flag_name, percentage))
        self.decisions[flag_name] = (percentage, decision)
        logger.debug(
            "Rollout sample for '%s' at %s%%: %s",
            flag_name,
            percentage,
            "in" if decision else "out",
        )
        return decision


def never_sample(flag_name: str, percentage: float) -> bool:
    """Oracle that opts the site out of every rollout."""
    return False
