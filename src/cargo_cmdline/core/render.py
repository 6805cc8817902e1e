"""Render a :class:`CargoCommandLine` into a concrete invocation.

This is the pure half of launching Cargo: it decides the exact argv and
environment but never starts a process.

Rules
-----
* Channel ``DEFAULT`` adds no toolchain selector; any other channel
  becomes ``+<channel>`` right after the cargo binary.
* ``all_features`` adds ``--all-features`` to the tool flags unless the
  caller already passed it.
* ``nocapture`` only affects test harness commands (``test``,
  ``bench``), as the positional ``--nocapture``.
* Backtrace ``SHORT``/``FULL`` set ``RUST_BACKTRACE``; ``DEFAULT``
  leaves the environment alone.
* The printed form changes into the working directory and carries the
  environment as shell prefixes, so running it reproduces the
  invocation.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from cargo_cmdline.core import arguments
from cargo_cmdline.core.commands import CargoCommand
from cargo_cmdline.core.models import (
    BacktraceMode,
    CargoCommandLine,
    EnvMode,
    EnvironmentVariables,
    RustChannel,
)

BACKTRACE_VARIABLE: str = "RUST_BACKTRACE"

_HARNESS_COMMANDS: frozenset[str] = frozenset(
    {CargoCommand.TEST.value, CargoCommand.BENCH.value},
)


@dataclass(frozen=True, slots=True)
class Invocation:
    """A fully rendered Cargo invocation, ready for an executor."""

    argv: tuple[str, ...]
    working_directory: Path
    environment: EnvironmentVariables


def _render_arguments(cmdline: CargoCommandLine) -> tuple[str, ...]:
    args = cmdline.additional_arguments
    if cmdline.all_features and not arguments.has_tool_flag(args, "--all-features"):
        pre, post = arguments.split_on_double_dash(args)
        if arguments.SEPARATOR in args:
            args = (*pre, "--all-features", arguments.SEPARATOR, *post)
        else:
            args = (*pre, "--all-features")
    if cmdline.nocapture and cmdline.command in _HARNESS_COMMANDS:
        args = arguments.insert_positional_argument(args, "--nocapture")
    return tuple(args)


def _render_environment(cmdline: CargoCommandLine) -> EnvironmentVariables:
    env = cmdline.environment_variables
    if cmdline.backtrace_mode is BacktraceMode.DEFAULT:
        return env
    return env.with_override(BACKTRACE_VARIABLE, cmdline.backtrace_mode.value)


def render(cmdline: CargoCommandLine, cargo: str = "cargo") -> Invocation:
    """Render *cmdline* for the cargo binary at *cargo*."""
    argv: list[str] = [cargo]
    if cmdline.channel is not RustChannel.DEFAULT:
        argv.append(f"+{cmdline.channel.value}")
    argv.append(cmdline.command)
    argv.extend(_render_arguments(cmdline))

    return Invocation(
        argv=tuple(argv),
        working_directory=cmdline.working_directory,
        environment=_render_environment(cmdline),
    )


def format_shell(argv: Sequence[str]) -> str:
    """Quote *argv* for a POSIX shell."""
    return " ".join(shlex.quote(part) for part in argv)


def format_invocation(invocation: Invocation) -> str:
    """Quote *invocation* as one POSIX shell line.

    The line changes into the working directory first.  Environment
    overrides become ``NAME=VALUE`` prefixes, and an ``EXPLICIT``
    environment runs through ``env -i`` so nothing is inherited.
    """
    env = invocation.environment
    parts = ["cd", shlex.quote(str(invocation.working_directory)), "&&"]
    if env.mode is EnvMode.EXPLICIT:
        parts.extend(["env", "-i"])
    parts.extend(shlex.quote(f"{name}={value}") for name, value in env.overrides)
    parts.append(format_shell(invocation.argv))
    return " ".join(parts)
