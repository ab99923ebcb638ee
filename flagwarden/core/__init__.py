"""Flag resolution core: models, policies and the resolution pipeline."""

from flagwarden.core.compat import CachedVersionLookup, installed_version, is_usable
from flagwarden.core.models import (
    ExecutionContext,
    FlagDefinition,
    FlagResolution,
    GradualRollout,
    ResolutionResult,
    ResolutionSource,
    UnknownFlag,
)
from flagwarden.core.resolver import resolve_flags
from flagwarden.core.rollout import RolloutSampler, SiteSampler, site_id_for_path

__all__ = [
    "CachedVersionLookup",
    "ExecutionContext",
    "FlagDefinition",
    "FlagResolution",
    "GradualRollout",
    "ResolutionResult",
    "ResolutionSource",
    "RolloutSampler",
    "SiteSampler",
    "UnknownFlag",
    "installed_version",
    "is_usable",
    "resolve_flags",
    "site_id_for_path",
]
