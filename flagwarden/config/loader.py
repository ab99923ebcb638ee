"""Catalogue and project config loading and validation.

Loads YAML files, expands ``${ENV_VAR}`` placeholders, and validates
against the Pydantic models defined in :mod:`schema`.

Public API:

* :func:`load_catalogue` → ``Tuple[FlagDefinition, ...]``
* :func:`load_project_config` → :class:`ProjectConfig`
* :func:`load_user_flags` → ``Dict[str, bool]``
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Tuple

import yaml
from pydantic import ValidationError

from flagwarden.config.expansion import expand_env_vars
from flagwarden.config.schema import CatalogueConfig, ProjectConfig
from flagwarden.core.models import FlagDefinition
from flagwarden.errors import CatalogueError, ConfigurationError

logger = logging.getLogger(__name__)

# Recognised config file extensions.
_YAML_EXTS = frozenset({".yaml", ".yml"})


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Read and parse a YAML config file from *cfg_fpath*.

    Raises :class:`ConfigurationError` on I/O or parse errors.
    """
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _YAML_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}'. "
            "Only YAML files (.yaml, .yml) are supported."
        )

    if not os.path.exists(cfg_fpath):
        raise ConfigurationError(f"Configuration file does not exist: {cfg_fpath}")

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except Exception as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    # An empty file is an empty mapping.
    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            "Top-level configuration content must be a YAML mapping (dictionary)."
        )
    return raw_data


def _format_validation_errors(exc: ValidationError) -> str:
    """Format Pydantic validation errors into a readable multi-line string."""
    lines: List[str] = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        lines.append(f"  • {loc}: {err['msg']}")
    return "\n".join(lines)


# ── Catalogue ────────────────────────────────────────────────────────────


def parse_catalogue(raw_data: Mapping[str, Any]) -> Tuple[FlagDefinition, ...]:
    """Validate an already-parsed catalogue mapping.

    Raises:
        ConfigurationError: When validation fails (all errors reported).
        CatalogueError: When two flags share a name.
    """
    try:
        catalogue = CatalogueConfig.model_validate(raw_data)
    except ValidationError as exc:
        error_summary = _format_validation_errors(exc)
        raise ConfigurationError(
            f"Catalogue validation failed ({len(exc.errors())} error(s)):\n" f"{error_summary}"
        ) from exc

    seen: Dict[str, int] = {}
    for entry in catalogue.flags:
        seen[entry.name] = seen.get(entry.name, 0) + 1
    duplicates = [name for name, count in seen.items() if count > 1]
    if duplicates:
        raise CatalogueError("duplicate flag names", duplicates)

    known = set(seen)
    for entry in catalogue.flags:
        for included in entry.included_flags:
            if included not in known:
                # Tolerated: resolution skips names it cannot find.
                logger.warning(
                    "Flag '%s' includes '%s', which is not in the catalogue.",
                    entry.name,
                    included,
                )

    return tuple(entry.to_definition() for entry in catalogue.flags)


def load_catalogue(cfg_fpath: str) -> Tuple[FlagDefinition, ...]:
    """Load, expand and validate a catalogue file.

    Steps:
        1. Read YAML file
        2. Expand ``${VAR}`` environment variable references
        3. Validate against :class:`CatalogueConfig` (Pydantic)
        4. Convert entries to :class:`FlagDefinition`

    Raises:
        ConfigurationError: On file I/O errors, parse errors, or
            validation failures.
        CatalogueError: When two flags share a name.
    """
    logger.debug("Loading flag catalogue: %s", cfg_fpath)

    raw_data = _read_config_file(cfg_fpath)
    raw_data = expand_env_vars(raw_data)
    flags = parse_catalogue(raw_data)

    logger.info("Catalogue '%s' loaded. %d flag(s) defined.", cfg_fpath, len(flags))
    return flags


# ── Project config ───────────────────────────────────────────────────────


def load_project_config(cfg_fpath: str) -> ProjectConfig:
    """Load and return the :class:`ProjectConfig` model from *cfg_fpath*."""
    logger.debug("Loading project config: %s", cfg_fpath)

    raw_data = _read_config_file(cfg_fpath)
    raw_data = expand_env_vars(raw_data)

    try:
        return ProjectConfig.model_validate(raw_data)
    except ValidationError as exc:
        error_summary = _format_validation_errors(exc)
        raise ConfigurationError(
            f"Configuration validation failed ({len(exc.errors())} error(s)):\n" f"{error_summary}"
        ) from exc


def user_flags(raw_flags: Mapping[str, Any]) -> Dict[str, bool]:
    """Keep the boolean entries of a ``flags:`` mapping, warning on the rest."""
    flags: Dict[str, bool] = {}
    for key, value in raw_flags.items():
        if not isinstance(value, bool):
            logger.warning(
                "Feature flag '%s' has non-boolean value '%s'; skipping.",
                key,
                value,
            )
            continue
        flags[str(key)] = value
    return flags


def load_user_flags(cfg_fpath: str) -> Dict[str, bool]:
    """Return the user's ``flags:`` section from a project config file."""
    return user_flags(load_project_config(cfg_fpath).flags)
