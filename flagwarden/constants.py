"""Shared constants for Flag Warden."""

APP_NAME = "Flag Warden"
APP_VERSION = "0.1.0"

# Catalogue conventions
ALL_COMMANDS = "all"

# Unknown-flag suggestions are offered below this edit distance
SUGGESTION_MAX_DISTANCE = 4

# Environment probe
EXECUTING_COMMAND_ENV = "FLAGWARDEN_EXECUTING_COMMAND"
SITE_ID_ENV = "FLAGWARDEN_SITE_ID"

# Logging defaults
LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "WARNING"
