"""Well-known Cargo subcommands and subcommand-name validation.

The ``command`` of a command line stays a free-form string because
users install their own subcommands (``cargo-expand``, ``cargo-nextest``
and friends).  :class:`CargoCommand` is only a curated list of the
commands Cargo ships with, used for prompts and lookups.
"""

from __future__ import annotations

from enum import Enum

from cargo_cmdline.exceptions import InvalidCommandError


class CargoCommand(Enum):
    """Subcommands shipped with Cargo (or its standard rustup components)."""

    BUILD = "build"
    CHECK = "check"
    CLEAN = "clean"
    DOC = "doc"
    RUN = "run"
    TEST = "test"
    BENCH = "bench"
    UPDATE = "update"
    PUBLISH = "publish"
    INSTALL = "install"
    FMT = "fmt"
    CLIPPY = "clippy"


_WELL_KNOWN: frozenset[str] = frozenset(cmd.value for cmd in CargoCommand)


def is_well_known(command: str) -> bool:
    """Return ``True`` when *command* is one of :class:`CargoCommand`."""
    return command in _WELL_KNOWN


def validate_command(command: str) -> str:
    """Return *command* unchanged or raise :class:`InvalidCommandError`.

    A subcommand must be a single non-empty token.  Leading ``-`` would
    make Cargo parse it as a flag, leading ``+`` as a toolchain selector.
    """
    if not command:
        raise InvalidCommandError("Cargo subcommand must not be empty.")
    if any(ch.isspace() for ch in command):
        raise InvalidCommandError(
            f"Invalid Cargo subcommand: {command!r}",
            hint="Pass extra arguments separately, not inside the command name.",
        )
    if command.startswith(("-", "+")):
        raise InvalidCommandError(
            f"Invalid Cargo subcommand: {command!r}",
            hint="Flags and toolchain selectors are not subcommands.",
        )
    return command
