"""Runtime data model for flag resolution.

Everything here is immutable.  A catalogue of :class:`FlagDefinition`
may be shared freely between resolution calls; each call produces a
fresh :class:`ResolutionResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from flagwarden.constants import ALL_COMMANDS


@dataclass(frozen=True)
class GradualRollout:
    """Share of installations (0-100) that get a flag switched on automatically."""

    percentage: float


@dataclass(frozen=True)
class FlagDefinition:
    """A single flag in the host's catalogue.

    ``compatibility`` maps a distribution name to a PEP 440 specifier
    set; the flag is only usable when every listed distribution is
    installed at a matching version.
    """

    name: str
    description: str = ""
    command: str = ALL_COMMANDS
    compatibility: Mapping[str, str] = field(default_factory=dict)
    no_ci: bool = False
    gradual_rollout: Optional[GradualRollout] = None
    included_flags: Tuple[str, ...] = ()
    experimental: bool = False
    umbrella_issue_url: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "compatibility", MappingProxyType(dict(self.compatibility)))
        object.__setattr__(self, "included_flags", tuple(self.included_flags))

    def __hash__(self) -> int:
        return hash(self.name)


@dataclass(frozen=True)
class ExecutionContext:
    """Where the resolution happens: the running command and whether it is CI."""

    executing_command: str
    is_ci: bool = False


class ResolutionSource(str, Enum):
    """How a flag entered the enabled set."""

    CONFIG = "config"
    ROLLOUT = "rollout"
    INCLUDED = "included"


@dataclass(frozen=True)
class FlagResolution:
    """An enabled flag together with the reason it is enabled."""

    flag: FlagDefinition
    source: ResolutionSource
    opted_in: bool = False

    @property
    def name(self) -> str:
        return self.flag.name


@dataclass(frozen=True)
class UnknownFlag:
    """A configured flag name that matches nothing usable in the catalogue."""

    name: str
    did_you_mean: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of :func:`flagwarden.resolve_flags`."""

    resolutions: Tuple[FlagResolution, ...] = ()
    unknown_flags: Tuple[UnknownFlag, ...] = ()
    unknown_flag_message: str = ""
    message: str = ""

    @property
    def enabled_flags(self) -> Tuple[FlagDefinition, ...]:
        return tuple(r.flag for r in self.resolutions)

    @property
    def enabled_names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.resolutions)

    @property
    def opted_in_flags(self) -> Tuple[FlagDefinition, ...]:
        return tuple(r.flag for r in self.resolutions if r.opted_in)

    def is_enabled(self, name: str) -> bool:
        """Return ``True`` if the named flag ended up active."""
        return any(r.name == name for r in self.resolutions)
