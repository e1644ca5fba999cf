"""Exit codes for mediadash CLI commands."""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL_ERROR = 1
    INPUT_ERROR = 2
    """Unknown config set or app, or wrong integration."""
    UPSTREAM_ERROR = 3
    """The service could not be reached or answered unexpectedly."""
