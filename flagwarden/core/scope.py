"""Command and CI scoping of enabled flags."""

from __future__ import annotations

import logging
from typing import Tuple

from flagwarden.constants import ALL_COMMANDS
from flagwarden.core.compat import VersionLookup, is_usable
from flagwarden.core.models import ExecutionContext, FlagDefinition, FlagResolution

logger = logging.getLogger(__name__)


def is_for_command(flag: FlagDefinition, executing_command: str) -> bool:
    return flag.command == ALL_COMMANDS or flag.command == executing_command


def is_for_ci(flag: FlagDefinition, is_ci: bool) -> bool:
    return not (flag.no_ci and is_ci)


def in_scope(flag: FlagDefinition, context: ExecutionContext, versions: VersionLookup) -> bool:
    """Return True if *flag* applies to *context* and is still usable."""
    return (
        is_for_command(flag, context.executing_command)
        and is_for_ci(flag, context.is_ci)
        and is_usable(flag, versions)
    )


def filter_scope(
    resolutions: Tuple[FlagResolution, ...],
    context: ExecutionContext,
    versions: VersionLookup,
) -> Tuple[FlagResolution, ...]:
    """Drop every resolution whose flag is out of scope for *context*."""
    kept = []
    for resolution in resolutions:
        if in_scope(resolution.flag, context, versions):
            kept.append(resolution)
        else:
            logger.debug(
                "Flag '%s' dropped for command '%s' (ci=%s).",
                resolution.name,
                context.executing_command,
                context.is_ci,
            )
    return tuple(kept)
