"""CLI application entry point and command routing for cargo-cmdline.

This module is the **sole error boundary** for the entire application.
It catches :class:`~cargo_cmdline.exceptions.CargoCmdlineError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No command-line construction logic lives here — descriptors are parsed
  into core models and handed to the invocation factory.
* The rendered command is the only thing written to stdout.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from cargo_cmdline.cli import exit_codes
from cargo_cmdline.cli.console import console, emit
from cargo_cmdline.core import factory
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
from cargo_cmdline.core.render import format_invocation, render
from cargo_cmdline.exceptions import (
    CargoCmdlineError,
    InvalidArgumentError,
    LaunchCommandError,
)
from cargo_cmdline.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _common_options() -> argparse.ArgumentParser:
    """Options shared by every command-line building intent."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--backtrace",
        choices=[mode.value for mode in BacktraceMode],
        default=BacktraceMode.DEFAULT.value,
        help="RUST_BACKTRACE setting for the built program.",
    )
    common.add_argument("--all-features", action="store_true")
    common.add_argument(
        "--nocapture",
        action="store_true",
        help="Show test/bench output instead of capturing it.",
    )
    common.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Environment override (repeatable).",
    )
    common.add_argument(
        "--no-inherit-env",
        action="store_true",
        help="Use only the --env overrides, not the system environment.",
    )
    common.add_argument(
        "--positional",
        action="append",
        default=[],
        metavar="ARG",
        help="Add a positional program argument after '--' (repeatable).",
    )
    common.add_argument(
        "--prepend",
        action="append",
        default=[],
        metavar="ARG",
        help="Put ARG in front of all other arguments (repeatable).",
    )
    common.add_argument(
        "--cargo",
        default=None,
        help="cargo binary to render (default: 'cargo').",
    )
    common.add_argument(
        "--locate-cargo",
        action="store_true",
        help="Render the absolute path of the installed cargo.",
    )
    common.add_argument(
        "--explain",
        action="store_true",
        help="Print a field-by-field breakdown to stderr.",
    )
    common.add_argument(
        "extra",
        nargs="*",
        help="Extra Cargo arguments, after '--'.",
    )
    return common


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Intents:
    * ``cargo-cmdline targets``  — selected targets of one package
    * ``cargo-cmdline package``  — a whole package
    * ``cargo-cmdline project``  — a whole project
    * ``cargo-cmdline doctor``   — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="cargo-cmdline",
        description="Build unambiguous Cargo command lines.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="intent")
    common = _common_options()

    targets = subparsers.add_parser(
        "targets",
        parents=[common],
        help="Command line for selected targets of one package.",
    )
    targets.add_argument("--manifest-path", required=True, type=Path)
    targets.add_argument("--package", required=True)
    targets.add_argument(
        "--package-root",
        type=Path,
        default=None,
        help="Package root directory (default: the manifest directory).",
    )
    targets.add_argument(
        "--target",
        dest="targets",
        action="append",
        required=True,
        metavar="KIND:NAME[:CRATE_TYPE,...]",
        help="Target to select (repeatable), e.g. bin:server.",
    )
    targets.add_argument(
        "--command",
        default=None,
        help="Cargo subcommand (default: derived from the target kind).",
    )
    targets.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; fail when no subcommand can be derived.",
    )

    package = subparsers.add_parser(
        "package",
        parents=[common],
        help="Command line for a whole package.",
    )
    package.add_argument("--manifest-path", required=True, type=Path)
    package.add_argument("--package", required=True)
    package.add_argument("--command", required=True)

    project = subparsers.add_parser(
        "project",
        parents=[common],
        help="Command line for a whole project.",
    )
    project.add_argument("--manifest-path", required=True, type=Path)
    project.add_argument("--command", required=True)
    project.add_argument(
        "--channel",
        choices=[channel.value for channel in RustChannel],
        default=RustChannel.DEFAULT.value,
    )

    subparsers.add_parser("doctor", help="Check the Rust toolchain on this host.")
    return parser


# ---------------------------------------------------------------------------
# Descriptor parsing
# ---------------------------------------------------------------------------

def _parse_kind(raw: str) -> TargetKind:
    try:
        return TargetKind(raw.lower())
    except ValueError:
        valid = ", ".join(kind.value for kind in TargetKind)
        raise InvalidArgumentError(
            f"Unknown target kind: {raw!r}",
            hint=f"Use one of: {valid}",
        ) from None


def _parse_crate_types(raw: str) -> tuple[CrateType, ...]:
    crate_types: list[CrateType] = []
    for item in filter(None, raw.split(",")):
        try:
            crate_types.append(CrateType(item.lower()))
        except ValueError:
            raise InvalidArgumentError(f"Unknown crate type: {item!r}") from None
    return tuple(crate_types)


def parse_target(spec: str, package: Package) -> Target:
    """Parse ``KIND:NAME[:CRATE_TYPE,...]`` into a :class:`Target`.

    Without explicit crate types a target produces the artifact its kind
    implies: a library for ``lib``, an executable otherwise.
    """
    parts = spec.split(":")
    if len(parts) not in (2, 3) or not parts[1]:
        raise InvalidArgumentError(
            f"Invalid target descriptor: {spec!r}",
            hint="Expected KIND:NAME or KIND:NAME:CRATE_TYPE[,CRATE_TYPE]",
        )
    kind = _parse_kind(parts[0])
    if len(parts) == 3:
        crate_types = _parse_crate_types(parts[2])
    elif kind is TargetKind.LIB:
        crate_types = (CrateType.LIB,)
    else:
        crate_types = (CrateType.BIN,)
    return Target(name=parts[1], kind=kind, package=package, crate_types=crate_types)


def parse_env(pairs: Sequence[str], *, inherit: bool) -> EnvironmentVariables:
    """Parse ``NAME=VALUE`` pairs; later pairs override earlier ones."""
    env = EnvironmentVariables(mode=EnvMode.INHERIT if inherit else EnvMode.EXPLICIT)
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise InvalidArgumentError(
                f"Invalid environment override: {pair!r}",
                hint="Expected NAME=VALUE",
            )
        env = env.with_override(name, value)
    return env


# ---------------------------------------------------------------------------
# Intent dispatch
# ---------------------------------------------------------------------------

def _workspace(args: argparse.Namespace) -> Workspace:
    return Workspace(manifest_path=args.manifest_path.expanduser().resolve())


def _resolve_command(args: argparse.Namespace, targets: Sequence[Target]) -> str:
    """Pick the subcommand for a target selection.

    An explicit ``--command`` wins; otherwise the first target decides,
    as it does for the name that survives deduplication.  A first target
    without a launch command falls back to a prompt.
    """
    if args.command is not None:
        return args.command

    command = launch_command(targets[0])
    if command is not None:
        return command

    if args.no_input:
        raise LaunchCommandError(
            "No launch command for the selected targets.",
            hint="Pass --command explicitly.",
        )
    from cargo_cmdline.cli.command_prompt import prompt_command

    return prompt_command(targets)


def _build_targets(args: argparse.Namespace) -> CargoCommandLine:
    workspace = _workspace(args)
    root = (
        args.package_root.expanduser().resolve()
        if args.package_root is not None
        else workspace.manifest_directory
    )
    package = Package(name=args.package, root_directory=root, workspace=workspace)
    targets = [parse_target(spec, package) for spec in args.targets]
    return factory.for_targets(targets, _resolve_command(args, targets), args.extra)


def _build_package(args: argparse.Namespace) -> CargoCommandLine:
    workspace = _workspace(args)
    package = Package(
        name=args.package,
        root_directory=workspace.manifest_directory,
        workspace=workspace,
    )
    return factory.for_package(package, args.command, args.extra)


def _build_project(args: argparse.Namespace) -> CargoCommandLine:
    project = CargoProject(manifest_path=_workspace(args).manifest_path)
    return factory.for_project(
        project,
        args.command,
        args.extra,
        channel=RustChannel(args.channel),
    )


def _apply_options(
    cmdline: CargoCommandLine,
    args: argparse.Namespace,
) -> CargoCommandLine:
    """Layer the shared options on top of a factory-built command line."""
    cmdline = replace(
        cmdline,
        backtrace_mode=BacktraceMode(args.backtrace),
        all_features=args.all_features,
        nocapture=args.nocapture,
        environment_variables=parse_env(args.env, inherit=not args.no_inherit_env),
    )
    for arg in args.positional:
        cmdline = cmdline.with_positional_argument(arg)
    # Reversed so the first --prepend ends up first.
    for arg in reversed(args.prepend):
        cmdline = cmdline.prepend_argument(arg)
    return cmdline


def _cargo_binary(args: argparse.Namespace) -> str:
    if args.locate_cargo:
        from cargo_cmdline.infra.toolchain_detector import require_cargo

        return str(require_cargo())
    return args.cargo or "cargo"


_BUILDERS = {
    "targets": _build_targets,
    "package": _build_package,
    "project": _build_project,
}


def _handle_build(args: argparse.Namespace) -> int:
    """Build, render and print the command line for one intent."""
    cmdline = _apply_options(_BUILDERS[args.intent](args), args)
    invocation = render(cmdline, cargo=_cargo_binary(args))

    if args.explain:
        from cargo_cmdline.cli.explain import print_explanation

        print_explanation(cmdline, invocation)

    emit(format_invocation(invocation))
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from cargo_cmdline.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the cargo-cmdline CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.intent is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.intent == "doctor":
        return _handle_doctor()

    return _handle_build(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CargoCmdlineError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
