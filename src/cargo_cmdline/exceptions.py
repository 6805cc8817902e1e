"""Custom exception hierarchy for cargo-cmdline.

All exceptions that cross layer boundaries must inherit from
:class:`CargoCmdlineError`.  The CLI error boundary renders them as a
clean message plus an optional hint.

Hierarchy
---------
CargoCmdlineError
├── InvalidCommandError
├── InvalidWorkingDirectoryError
├── InvalidArgumentError
├── TargetSelectionError (also AssertionError)
├── LaunchCommandError
└── EnvironmentError
    └── CargoNotFoundError
"""

from __future__ import annotations


class CargoCmdlineError(Exception):
    """Base exception for all cargo-cmdline errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command-line values ---------------------------------------------------

class InvalidCommandError(CargoCmdlineError):
    """Raised when a Cargo subcommand name is empty or malformed."""


class InvalidWorkingDirectoryError(CargoCmdlineError):
    """Raised when a command line is given a relative working directory."""


class InvalidArgumentError(CargoCmdlineError):
    """Raised when a CLI descriptor (target, env pair, kind) cannot be parsed."""


# --- Target selection ------------------------------------------------------

class TargetSelectionError(CargoCmdlineError, AssertionError):
    """Raised when a target selection is empty or spans several packages.

    This is a caller bug rather than a recoverable condition: callers
    must group targets by package before asking for a command line.
    It subclasses :class:`AssertionError` so it reads as the broken
    precondition it is.
    """


class LaunchCommandError(CargoCmdlineError):
    """Raised when no subcommand can be derived for a target selection."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CargoCmdlineError):
    """Raised when a required runtime dependency is not available."""


class CargoNotFoundError(EnvironmentError):
    """Raised when the cargo binary cannot be located."""
