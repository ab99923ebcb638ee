"""Environment probe: builds an :class:`ExecutionContext` from process state.

The resolver never looks at the environment itself; hosts call
:func:`detect_context` (or build the context by hand) and pass it in.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from flagwarden.constants import ALL_COMMANDS, EXECUTING_COMMAND_ENV
from flagwarden.core.models import ExecutionContext

logger = logging.getLogger(__name__)

# Variables set by common CI providers.  Presence is enough, except for
# the generic ones below which may be explicitly switched off.
_CI_VARS = (
    "BUILD_NUMBER",
    "RUN_ID",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "BUILDKITE",
    "CIRCLECI",
    "TRAVIS",
    "JENKINS_URL",
    "TF_BUILD",
    "TEAMCITY_VERSION",
    "CODEBUILD_BUILD_ID",
)
_GENERIC_CI_VARS = ("CI", "CONTINUOUS_INTEGRATION")
_FALSY = frozenset({"", "0", "false", "no", "off"})


def is_ci(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if *environ* (default: ``os.environ``) looks like a CI run."""
    env = os.environ if environ is None else environ
    for name in _GENERIC_CI_VARS:
        if name in env:
            return env[name].strip().lower() not in _FALSY
    return any(name in env for name in _CI_VARS)


def detect_context(
    command: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExecutionContext:
    """Build an :class:`ExecutionContext` for the current process.

    *command* wins over ``FLAGWARDEN_EXECUTING_COMMAND``.  With neither,
    the command is ``"all"`` so only flags scoped to every command
    apply.
    """
    env = os.environ if environ is None else environ
    executing_command = command or env.get(EXECUTING_COMMAND_ENV) or ALL_COMMANDS
    context = ExecutionContext(executing_command=executing_command, is_ci=is_ci(env))
    logger.debug("Execution context: %s", context)
    return context
