"""Catalogue and project config loading for Flag Warden."""

from flagwarden.config.loader import (
    load_catalogue,
    load_project_config,
    load_user_flags,
    parse_catalogue,
    user_flags,
)
from flagwarden.config.expansion import expand_env_vars
from flagwarden.config.schema import (
    CatalogueConfig,
    FlagDefinitionConfig,
    GradualRolloutConfig,
    ProjectConfig,
)

__all__ = [
    "CatalogueConfig",
    "FlagDefinitionConfig",
    "GradualRolloutConfig",
    "ProjectConfig",
    "expand_env_vars",
    "load_catalogue",
    "load_project_config",
    "load_user_flags",
    "parse_catalogue",
    "user_flags",
]
