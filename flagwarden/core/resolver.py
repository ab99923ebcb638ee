"""Flag resolution pipeline.

:func:`resolve_flags` is the public entry point.  It runs the stages
below, each taking and returning an immutable tuple of
:class:`FlagResolution`:

1. compatibility filter over the catalogue (``available``)
2. unknown-flag detection (advisory only)
3. explicit enablement from the user config
4. gradual rollout via the sampling oracle
5. command / CI scope filter
6. transitive ``included_flags`` expansion

and finally renders the console message.  Nothing in here raises for
bad input; bad input just leads to fewer enabled flags.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence, Tuple

from flagwarden.core.compat import CachedVersionLookup, VersionLookup, installed_version, is_usable
from flagwarden.core.inclusion import expand_included, index_catalogue
from flagwarden.core.models import (
    ExecutionContext,
    FlagDefinition,
    FlagResolution,
    ResolutionResult,
    ResolutionSource,
)
from flagwarden.core.rollout import RolloutSampler, never_sample
from flagwarden.core.scope import filter_scope
from flagwarden.core.suggest import find_unknown_flags, format_unknown_flags
from flagwarden.display.messages import PlainRenderer, TextRenderer, build_message

logger = logging.getLogger(__name__)


def available_flags(
    catalogue: Sequence[FlagDefinition],
    versions: VersionLookup,
) -> Tuple[FlagDefinition, ...]:
    """Return the catalogue flags that pass their compatibility check."""
    return tuple(flag for flag in index_catalogue(catalogue).values() if is_usable(flag, versions))


def enable_from_config(
    available: Sequence[FlagDefinition],
    config: Mapping[str, bool],
) -> Tuple[FlagResolution, ...]:
    """Return resolutions for every available flag the user set to ``True``."""
    by_name = {flag.name: flag for flag in available}
    return tuple(
        FlagResolution(flag=by_name[name], source=ResolutionSource.CONFIG)
        for name, value in config.items()
        if value is True and name in by_name
    )


def _sample(sampler: RolloutSampler, flag_name: str, percentage: float) -> bool:
    try:
        return bool(sampler(flag_name, percentage))
    except Exception as exc:
        logger.warning("Rollout sampling failed for '%s': %s", flag_name, exc)
        return False


def apply_rollout(
    resolutions: Tuple[FlagResolution, ...],
    available: Sequence[FlagDefinition],
    config: Mapping[str, bool],
    sampler: RolloutSampler,
    versions: VersionLookup,
) -> Tuple[FlagResolution, ...]:
    """Add flags the site was sampled into, tagged as opted in.

    A flag the user already enabled keeps its place and just gains the
    opted-in tag.  A flag the user explicitly disabled is never sampled
    in.
    """
    result = list(resolutions)
    positions: Dict[str, int] = {r.name: i for i, r in enumerate(result)}

    for flag in available:
        if flag.gradual_rollout is None:
            continue
        if not _sample(sampler, flag.name, flag.gradual_rollout.percentage):
            continue
        if config.get(flag.name) is False or not is_usable(flag, versions):
            continue

        logger.info(
            "Flag '%s' enabled by gradual rollout (%s%%).",
            flag.name,
            flag.gradual_rollout.percentage,
        )
        if flag.name in positions:
            existing = result[positions[flag.name]]
            result[positions[flag.name]] = FlagResolution(
                flag=existing.flag, source=existing.source, opted_in=True
            )
        else:
            positions[flag.name] = len(result)
            result.append(
                FlagResolution(flag=flag, source=ResolutionSource.ROLLOUT, opted_in=True)
            )
    return tuple(result)


def resolve_flags(
    catalogue: Sequence[FlagDefinition],
    config: Optional[Mapping[str, bool]],
    context: ExecutionContext,
    *,
    versions: VersionLookup = installed_version,
    sampler: RolloutSampler = never_sample,
    renderer: Optional[TextRenderer] = None,
) -> ResolutionResult:
    """Work out which flags are active and explain the outcome.

    Parameters
    ----------
    catalogue:
        Every flag the host knows about, in display order.
    config:
        ``flag_name -> bool`` as declared by the user.  A missing name
        means "no opinion", not ``False``.
    context:
        The running command and whether this is a CI run.
    versions:
        Lookup for installed distribution versions.
    sampler:
        Gradual-rollout oracle; the default never samples a site in.
    renderer:
        Renders links and badges in the message.  Plain text by default.
    """
    config = dict(config or {})
    versions = CachedVersionLookup(versions)
    renderer = renderer or PlainRenderer()

    available = available_flags(catalogue, versions)
    available_names = {flag.name for flag in available}

    unknown = find_unknown_flags(config, available_names, [flag.name for flag in catalogue])

    resolutions = enable_from_config(available, config)
    resolutions = apply_rollout(resolutions, available, config, sampler, versions)
    resolutions = filter_scope(resolutions, context, versions)
    resolutions = expand_included(resolutions, index_catalogue(catalogue), versions)

    logger.info(
        "Resolved %d of %d available flag(s) for '%s': %s",
        len(resolutions),
        len(available),
        context.executing_command,
        ", ".join(r.name for r in resolutions) or "none",
    )

    return ResolutionResult(
        resolutions=resolutions,
        unknown_flags=tuple(unknown),
        unknown_flag_message=format_unknown_flags(unknown),
        message=build_message(resolutions, available, config, renderer),
    )
