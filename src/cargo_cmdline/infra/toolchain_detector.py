"""Infrastructure: Rust toolchain detection and install guidance.

This module is responsible for locating ``cargo`` and ``rustup`` on
the host and providing installation guidance when they are missing.

Rules
-----
* Detection via the ``CARGO`` variable and :func:`shutil.which` only —
  no subprocess.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from cargo_cmdline.exceptions import CargoNotFoundError

CARGO_ENV_VAR: str = "CARGO"
"""Variable Cargo itself sets for subprocesses; honoured when present."""


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a toolchain detection probe.

    Attributes
    ----------
    name : str
        Tool name (``cargo`` or ``rustup``).
    found : bool
        Whether the tool was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_hint : str
        Installation guidance; empty when the tool is present.
    """

    name: str
    found: bool
    path: Path | None
    install_hint: str


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def _probe(name: str) -> ToolStatus:
    result = shutil.which(name)
    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_hint="",
        )
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_hint=_platform_install_hint(),
    )


def detect_cargo() -> ToolStatus:
    """Probe for a cargo binary.

    An explicit ``CARGO`` environment variable pointing at an existing
    file wins over the ``PATH`` lookup.
    """
    explicit = os.environ.get(CARGO_ENV_VAR)
    if explicit:
        candidate = Path(explicit)
        if candidate.is_file():
            return ToolStatus(
                name="cargo",
                found=True,
                path=candidate.resolve(),
                install_hint="",
            )
    return _probe("cargo")


def detect_rustup() -> ToolStatus:
    """Probe for rustup, which is needed for ``+channel`` selectors."""
    return _probe("rustup")


def require_cargo() -> Path:
    """Locate cargo or raise :class:`CargoNotFoundError`."""
    status = detect_cargo()
    if not status.found or status.path is None:
        raise CargoNotFoundError(
            "cargo is not installed or not on PATH.",
            hint=status.install_hint or None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_hint() -> str:
    """Return rustup install guidance appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return "winget install Rustlang.Rustup"
    if system in ("linux", "darwin"):
        return "curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh"
    return "Install Rust from https://rustup.rs/"
