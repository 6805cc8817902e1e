"""Infrastructure layer — host system integration.

This layer looks at the machine cargo-cmdline runs on (which Rust
tools are installed, where).  Nothing else in the package touches the
host.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from cargo_cmdline.infra.toolchain_detector import (
    ToolStatus,
    detect_cargo,
    detect_rustup,
    require_cargo,
)

__all__: list[str] = [
    "ToolStatus",
    "detect_cargo",
    "detect_rustup",
    "require_cargo",
]
