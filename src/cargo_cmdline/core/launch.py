"""Target-kind to launch-subcommand mapping.

Pure and total: every target maps to a subcommand or to ``None``,
which tells the caller there is no sensible launch action to offer.
"""

from __future__ import annotations

from cargo_cmdline.core.commands import CargoCommand
from cargo_cmdline.core.models import CrateType, TargetKind
from cargo_cmdline.core.protocols import TargetLike

_BY_KIND: dict[TargetKind, CargoCommand] = {
    TargetKind.BIN: CargoCommand.RUN,
    TargetKind.LIB: CargoCommand.BUILD,
    TargetKind.TEST: CargoCommand.TEST,
    TargetKind.BENCH: CargoCommand.BENCH,
}


def launch_command(target: TargetLike) -> str | None:
    """Return the subcommand that launches *target*, or ``None``.

    Examples are run only when their single artifact is an executable;
    library-style examples (``crate-type = ["cdylib"]`` and the like)
    are built instead.
    """
    if target.kind is TargetKind.EXAMPLE:
        if tuple(target.crate_types) == (CrateType.BIN,):
            return CargoCommand.RUN.value
        return CargoCommand.BUILD.value

    command = _BY_KIND.get(target.kind)
    return command.value if command is not None else None
