"""Error kinds raised by the scaffold flows."""
from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every failure that ends a scaffold flow."""


class NetworkError(ScaffoldError):
    """Transport failure while fetching the schema or downloading an archive."""


class ParseError(ScaffoldError):
    """The metadata document is not a valid key/value document."""


class ValidationError(ScaffoldError):
    """A required answer was declined or is outside its allowed set."""


class ExecutableNotFoundError(ScaffoldError):
    """Neither the wrapper script nor the global build tool could be started."""


class ProcessFailure(ScaffoldError):
    """The scaffold process ended with a status other than ``finished``."""

    def __init__(self, label: str, status: str):
        super().__init__(f"{label} ended with status: {status.strip()}")
        self.label = label
        self.status = status
