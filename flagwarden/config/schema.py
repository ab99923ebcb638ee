"""Pydantic models for catalogue and project config files."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from pydantic import BaseModel, ConfigDict, Field, field_validator

from flagwarden.constants import ALL_COMMANDS
from flagwarden.core.models import FlagDefinition, GradualRollout

# ── Catalogue ────────────────────────────────────────────────────────────


class GradualRolloutConfig(BaseModel):
    """Percentage of sites that get the flag switched on automatically."""

    percentage: float = Field(..., ge=0, le=100)


class FlagDefinitionConfig(BaseModel):
    """One catalogue entry as written in YAML."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Unique flag name.")
    description: str = ""
    command: str = Field(
        default=ALL_COMMANDS,
        min_length=1,
        description="Command the flag applies to, or 'all'.",
    )
    compatibility: Dict[str, str] = Field(
        default_factory=dict,
        description="Distribution name → PEP 440 specifier set.",
    )
    no_ci: bool = Field(default=False, description="Suppress the flag in CI runs.")
    gradual_rollout: Optional[GradualRolloutConfig] = None
    included_flags: List[str] = Field(default_factory=list)
    experimental: bool = False
    umbrella_issue_url: Optional[str] = None

    @field_validator("name", "command")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("compatibility")
    @classmethod
    def _validate_specifiers(cls, v: Dict[str, str]) -> Dict[str, str]:
        for dist_name, constraint in v.items():
            try:
                SpecifierSet(constraint)
            except InvalidSpecifier as exc:
                raise ValueError(
                    f"invalid version constraint '{constraint}' for '{dist_name}'"
                ) from exc
        return v

    def to_definition(self) -> FlagDefinition:
        """Convert to the immutable runtime model."""
        rollout = None
        if self.gradual_rollout is not None:
            rollout = GradualRollout(percentage=self.gradual_rollout.percentage)
        return FlagDefinition(
            name=self.name,
            description=self.description,
            command=self.command,
            compatibility=self.compatibility,
            no_ci=self.no_ci,
            gradual_rollout=rollout,
            included_flags=tuple(self.included_flags),
            experimental=self.experimental,
            umbrella_issue_url=self.umbrella_issue_url,
        )


class CatalogueConfig(BaseModel):
    """Top-level catalogue file::

        version: "1"
        flags:
          - name: FAST_DEV
            description: Enable all experiments aimed at faster dev builds
            included_flags: [LAZY_IMAGES]
    """

    version: str = "1"
    flags: List[FlagDefinitionConfig] = Field(default_factory=list)


# ── Project config ───────────────────────────────────────────────────────


class ProjectConfig(BaseModel):
    """The user's project config.  Only the flag-related keys are modelled."""

    model_config = ConfigDict(extra="ignore")

    flags: Dict[str, Any] = Field(
        default_factory=dict,
        description="Flag overrides (flag_name → enabled).",
    )
    site_id: Optional[str] = Field(
        default=None,
        description="Stable identity for gradual rollout sampling.",
    )

    @field_validator("flags", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v
