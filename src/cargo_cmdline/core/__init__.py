"""Core layer — pure value types and command-line construction.

Rules
-----
* No ``print()`` calls.
* No filesystem, network or process I/O.
* No imports from ``cli`` or ``infra``.
* Every transformation returns a new immutable value.
"""

from cargo_cmdline.core.arguments import (
    SEPARATOR,
    insert_positional_argument,
    prepend_argument,
    split_on_double_dash,
)
from cargo_cmdline.core.commands import CargoCommand, is_well_known, validate_command
from cargo_cmdline.core.factory import for_package, for_project, for_target, for_targets
from cargo_cmdline.core.launch import launch_command
from cargo_cmdline.core.models import (
    BacktraceMode,
    CargoCommandLine,
    CargoProject,
    CrateType,
    EnvironmentVariables,
    EnvMode,
    Package,
    RustChannel,
    Target,
    TargetKind,
    Workspace,
)
from cargo_cmdline.core.render import (
    Invocation,
    format_invocation,
    format_shell,
    render,
)

__all__: list[str] = [
    "SEPARATOR",
    "BacktraceMode",
    "CargoCommand",
    "CargoCommandLine",
    "CargoProject",
    "CrateType",
    "EnvMode",
    "EnvironmentVariables",
    "Invocation",
    "Package",
    "RustChannel",
    "Target",
    "TargetKind",
    "Workspace",
    "for_package",
    "for_project",
    "for_target",
    "for_targets",
    "format_invocation",
    "format_shell",
    "insert_positional_argument",
    "is_well_known",
    "launch_command",
    "prepend_argument",
    "render",
    "split_on_double_dash",
    "validate_command",
]
