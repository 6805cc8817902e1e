"""``cargo-cmdline doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the host can run the command lines cargo-cmdline builds.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It purely collects and
displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from cargo_cmdline.cli import exit_codes
from cargo_cmdline.cli.console import console
from cargo_cmdline.infra.toolchain_detector import detect_cargo, detect_rustup
from cargo_cmdline.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = major >= 3 and minor >= 10
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _cargo_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the cargo row.

    A missing cargo is only a warning: command lines can still be built
    and printed, just not run here.
    """
    status_obj = detect_cargo()
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "cargo", path_str, "[green]OK[/green]"
    return "cargo", "not found", "[yellow]WARN[/yellow]"


def _rustup_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the rustup row."""
    status_obj = detect_rustup()
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "rustup", path_str, "[green]OK[/green]"
    return "rustup", "not found (+channel selectors unavailable)", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the cargo-cmdline version row."""
    return "cargo-cmdline", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ncargo-cmdline doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<14} {value:<40} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _version_check(),
        _python_version_check(),
        _cargo_check(),
        _rustup_check(),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="cargo-cmdline doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # Show rustup install guidance when cargo is missing.
    cargo_status = detect_cargo()
    if not cargo_status.found and cargo_status.install_hint:
        if rich_available:
            console.print("[yellow]cargo is not installed.[/yellow]")
            console.print(f"Install it with rustup:\n\n  [bold]{cargo_status.install_hint}[/bold]\n")
        else:
            print("cargo is not installed.", file=sys.stderr)
            print(f"Install it with rustup:\n\n  {cargo_status.install_hint}\n", file=sys.stderr)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
