"""Custom exception classes for Flag Warden.

Resolution itself never raises: these cover the plumbing around it
(reading catalogues and project configs from disk).
"""

from typing import List, Optional


class FlagWardenError(Exception):
    """Base class for all custom exceptions in Flag Warden."""

    pass


class ConfigurationError(FlagWardenError):
    """Raised when loading or validating a YAML file fails."""

    pass


class CatalogueError(FlagWardenError):
    """
    Raised when a flag catalogue is structurally invalid,
    e.g. two definitions share a name.
    """

    def __init__(self, message: str, flag_names: Optional[List[str]] = None):
        self.flag_names = list(flag_names or [])

        full_msg = f"Invalid flag catalogue: {message}"
        if self.flag_names:
            full_msg += f" (flags: {', '.join(self.flag_names)})"
        super().__init__(full_msg)
