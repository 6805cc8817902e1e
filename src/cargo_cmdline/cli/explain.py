"""``--explain`` output — a field-by-field view of a rendered invocation.

Renders a Rich table on stderr, or an aligned plain-text table when
Rich is not installed.
"""

from __future__ import annotations

import sys

from cargo_cmdline.cli.console import console
from cargo_cmdline.core.models import CargoCommandLine
from cargo_cmdline.core.render import Invocation, format_shell


def explain_rows(
    cmdline: CargoCommandLine,
    invocation: Invocation,
) -> list[tuple[str, str]]:
    """Return ``(field, value)`` rows describing *cmdline*."""
    pre, post = cmdline.split_on_double_dash()
    env = invocation.environment
    rows: list[tuple[str, str]] = [
        ("Command", cmdline.command),
        ("Working directory", str(cmdline.working_directory)),
        ("Tool flags", format_shell(pre) or "—"),
        ("Positional", format_shell(post) or "—"),
        ("Channel", cmdline.channel.value),
        ("Backtrace", cmdline.backtrace_mode.value),
        ("All features", "yes" if cmdline.all_features else "no"),
        ("Nocapture", "yes" if cmdline.nocapture else "no"),
        ("Environment", env.mode.value),
    ]
    rows.extend((f"  {name}", value) for name, value in env.overrides)
    rows.append(("Argv", format_shell(invocation.argv)))
    return rows


def _print_plain_table(rows: list[tuple[str, str]]) -> None:
    """Render the rows without Rich."""
    print("\ncargo invocation", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    for label, value in rows:
        print(f"{label:<18} {value}", file=sys.stderr)
    print(file=sys.stderr)


def print_explanation(cmdline: CargoCommandLine, invocation: Invocation) -> None:
    rows = explain_rows(cmdline, invocation)
    try:
        from rich.markup import escape
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(rows)
        return

    table = Table(
        title="cargo invocation",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Field", style="bold", min_width=18)
    table.add_column("Value", min_width=20)
    for label, value in rows:
        table.add_row(escape(label), escape(value))

    console.print()
    console.print(table)
    console.print()
