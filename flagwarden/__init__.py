"""
Flag Warden - a feature-flag resolution engine.

Flag Warden takes a closed catalogue of flag definitions, the flags a
user switched on or off, and the execution context, and works out which
flags are active. It explains the outcome in a console-ready message and
points out misspelled flag names.
"""

from flagwarden.constants import APP_NAME, APP_VERSION
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
from flagwarden.errors import CatalogueError, ConfigurationError, FlagWardenError

__version__ = APP_VERSION
__app_name__ = APP_NAME

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "CatalogueError",
    "ConfigurationError",
    "ExecutionContext",
    "FlagDefinition",
    "FlagResolution",
    "FlagWardenError",
    "GradualRollout",
    "ResolutionResult",
    "ResolutionSource",
    "UnknownFlag",
    "__app_name__",
    "__version__",
    "resolve_flags",
]
