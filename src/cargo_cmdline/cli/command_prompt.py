"""Interactive subcommand selection for the CLI layer.

Used when a target selection has no launch command of its own (unknown
target kinds).  The user picks one of the well-known Cargo subcommands
with questionary arrow keys.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cargo_cmdline.cli.console import console
from cargo_cmdline.core.commands import CargoCommand
from cargo_cmdline.core.protocols import TargetLike
from cargo_cmdline.exceptions import EnvironmentError, LaunchCommandError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _describe_selection(targets: Sequence[TargetLike]) -> str:
    """Render ``"pkg: name (kind), ..."`` for the prompt header."""
    described = ", ".join(
        f"{target.name} ({target.kind.value})" for target in targets
    )
    return f"{targets[0].package.name}: {described}"


def prompt_command(targets: Sequence[TargetLike]) -> str:
    """Ask the user which Cargo subcommand to run for *targets*.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during selection.
    LaunchCommandError
        If the user cancels the prompt (Esc / None return).
    """
    questionary = _import_questionary()

    console.print(
        f"[bold cyan]No launch command for[/bold cyan] {_describe_selection(targets)}"
    )

    choices = [
        questionary.Choice(title=command.value, value=command.value)
        for command in CargoCommand
    ]

    selected: str | None = questionary.select(
        "Select a Cargo subcommand:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise LaunchCommandError(
            "No subcommand selected.",
            hint="Pass --command explicitly to skip the prompt.",
        )

    return selected
