"""Invocation factory — command lines for targets, packages and projects.

Guarantees
----------
* Pure construction — no I/O, no ``print()``, no filesystem access.
* Output argument order is part of the contract: ``--package`` first,
  then target flags in first-seen order, then caller arguments.
* Only :func:`for_targets` can fail, and only on a broken precondition.
"""

from __future__ import annotations

from collections.abc import Sequence

from cargo_cmdline.core.models import CargoCommandLine, RustChannel, TargetKind
from cargo_cmdline.core.protocols import (
    PackageLike,
    ProjectLike,
    TargetLike,
)
from cargo_cmdline.exceptions import TargetSelectionError

_NAMED_FLAGS: dict[TargetKind, str] = {
    TargetKind.BIN: "--bin",
    TargetKind.TEST: "--test",
    TargetKind.EXAMPLE: "--example",
    TargetKind.BENCH: "--bench",
}


def target_flags(target: TargetLike) -> list[str]:
    """Return the Cargo flags selecting *target* within its package.

    ``--lib`` takes no name (a package has at most one library) and
    unknown targets select nothing.
    """
    if target.kind is TargetKind.LIB:
        return ["--lib"]
    flag = _NAMED_FLAGS.get(target.kind)
    if flag is None:
        return []
    return [flag, target.name]


def _common_package(targets: Sequence[TargetLike]) -> PackageLike:
    """Return the single package shared by *targets*.

    Raises
    ------
    TargetSelectionError
        When *targets* is empty or spans more than one package root.
    """
    if not targets:
        raise TargetSelectionError(
            "Cannot build a command line for an empty target selection.",
        )
    roots = {target.package.root_directory for target in targets}
    if len(roots) != 1:
        listed = ", ".join(sorted(str(root) for root in roots))
        raise TargetSelectionError(
            f"Targets span more than one package: {listed}",
            hint="Group targets by package and build one command line per package.",
        )
    return targets[0].package


def _distinct_by_name(targets: Sequence[TargetLike]) -> list[TargetLike]:
    """Keep the first target seen for every name, preserving order."""
    seen: dict[str, TargetLike] = {}
    for target in targets:
        seen.setdefault(target.name, target)
    return list(seen.values())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def for_targets(
    targets: Sequence[TargetLike],
    command: str,
    additional_arguments: Sequence[str] = (),
) -> CargoCommandLine:
    """Build a command line selecting *targets* of one package.

    Targets sharing a name collapse to the first one seen.  The working
    directory is the package's workspace root, so Cargo resolves the
    ``--package`` filter against the whole workspace.

    Raises
    ------
    TargetSelectionError
        When *targets* is empty or spans several packages.  Callers are
        expected to group targets by package beforehand.
    """
    pkg = _common_package(targets)

    target_args: list[str] = []
    for target in _distinct_by_name(targets):
        target_args.extend(target_flags(target))

    return CargoCommandLine(
        command,
        working_directory=pkg.workspace.manifest_path.parent,
        additional_arguments=(
            "--package", pkg.name, *target_args, *additional_arguments,
        ),
    )


def for_target(
    target: TargetLike,
    command: str,
    additional_arguments: Sequence[str] = (),
) -> CargoCommandLine:
    """Single-target shorthand for :func:`for_targets`."""
    return for_targets([target], command, additional_arguments)


def for_project(
    project: ProjectLike,
    command: str,
    additional_arguments: Sequence[str] = (),
    channel: RustChannel = RustChannel.DEFAULT,
) -> CargoCommandLine:
    """Build a command line for a whole project, without package filters."""
    return CargoCommandLine(
        command,
        working_directory=project.working_directory,
        additional_arguments=tuple(additional_arguments),
        channel=channel,
    )


def for_package(
    package: PackageLike,
    command: str,
    additional_arguments: Sequence[str] = (),
) -> CargoCommandLine:
    """Build a command line for every target of *package*."""
    return CargoCommandLine(
        command,
        working_directory=package.workspace.manifest_path.parent,
        additional_arguments=("--package", package.name, *additional_arguments),
    )
