"""Domain models for cargo-cmdline.

All models are **frozen** dataclasses — immutable value objects.  A
:class:`CargoCommandLine` is never mutated: every transformation returns
a new value, so concurrent callers can share instances freely.

The workspace types (:class:`Workspace`, :class:`Package`,
:class:`Target`, :class:`CargoProject`) mirror an already-resolved
Cargo workspace.  Nothing here reads manifests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from cargo_cmdline.core import arguments
from cargo_cmdline.core.commands import validate_command
from cargo_cmdline.exceptions import InvalidWorkingDirectoryError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class BacktraceMode(Enum):
    """How much of a panic backtrace the built program prints."""

    DEFAULT = "default"
    SHORT = "short"
    FULL = "full"


class RustChannel(Enum):
    """Toolchain release track used for an invocation."""

    DEFAULT = "default"
    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"
    DEV = "dev"


class TargetKind(Enum):
    BIN = "bin"
    LIB = "lib"
    TEST = "test"
    EXAMPLE = "example"
    BENCH = "bench"
    UNKNOWN = "unknown"


class CrateType(Enum):
    BIN = "bin"
    LIB = "lib"
    DYLIB = "dylib"
    STATICLIB = "staticlib"
    CDYLIB = "cdylib"
    RLIB = "rlib"
    PROC_MACRO = "proc-macro"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

class EnvMode(Enum):
    """Whether the process environment is inherited or replaced."""

    INHERIT = "inherit"
    """System environment plus the overrides."""

    EXPLICIT = "explicit"
    """Only the overrides."""


@dataclass(frozen=True, slots=True)
class EnvironmentVariables:
    """Tagged environment configuration for an invocation.

    The ambient process environment is **not** captured here; it is
    only consulted by :meth:`resolve` when the caller passes it in.
    """

    mode: EnvMode = EnvMode.INHERIT
    overrides: tuple[tuple[str, str], ...] = ()
    """Ordered ``(name, value)`` pairs, one per name."""

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, str],
        mode: EnvMode = EnvMode.INHERIT,
    ) -> EnvironmentVariables:
        return cls(mode=mode, overrides=tuple(mapping.items()))

    def as_dict(self) -> dict[str, str]:
        return dict(self.overrides)

    def with_override(self, name: str, value: str) -> EnvironmentVariables:
        """Return a copy with *name* set to *value*.

        An existing entry keeps its position and gets the new value.
        """
        if any(key == name for key, _ in self.overrides):
            updated = tuple(
                (key, value if key == name else old)
                for key, old in self.overrides
            )
        else:
            updated = (*self.overrides, (name, value))
        return replace(self, overrides=updated)

    def resolve(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Compute the final environment for a process.

        With :attr:`EnvMode.INHERIT` the overrides are layered on top of
        *base* (typically ``os.environ``); with :attr:`EnvMode.EXPLICIT`
        *base* is ignored.
        """
        if self.mode is EnvMode.EXPLICIT or base is None:
            return self.as_dict()
        merged = dict(base)
        merged.update(self.overrides)
        return merged


DEFAULT_ENVIRONMENT = EnvironmentVariables()


# ---------------------------------------------------------------------------
# Workspace model (read-only input)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Workspace:
    """A Cargo workspace, identified by its root manifest."""

    manifest_path: Path
    """Absolute path to the workspace ``Cargo.toml``."""

    @property
    def manifest_directory(self) -> Path:
        return self.manifest_path.parent


@dataclass(frozen=True, slots=True)
class Package:
    """A named collection of targets sharing one manifest."""

    name: str
    root_directory: Path
    workspace: Workspace


@dataclass(frozen=True, slots=True)
class Target:
    """A buildable or runnable unit within a :class:`Package`."""

    name: str
    kind: TargetKind
    package: Package
    crate_types: tuple[CrateType, ...] = ()
    """Artifact types the target produces (``crate-type`` in the manifest)."""


@dataclass(frozen=True, slots=True)
class CargoProject:
    """A Cargo project attached to the IDE or tool, rooted at a manifest."""

    manifest_path: Path
    presentable_name: str = ""

    @property
    def working_directory(self) -> Path:
        return self.manifest_path.parent


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CargoCommandLine:
    """Everything needed to invoke Cargo once.

    ``command`` is a free-form subcommand name so that user-installed
    subcommands work.  ``working_directory`` also selects which Cargo
    project the invocation resolves against.
    """

    command: str
    working_directory: Path
    additional_arguments: tuple[str, ...] = ()
    """Tool flags and positional arguments, split by an optional ``--``."""

    backtrace_mode: BacktraceMode = BacktraceMode.DEFAULT
    channel: RustChannel = RustChannel.DEFAULT
    environment_variables: EnvironmentVariables = DEFAULT_ENVIRONMENT
    all_features: bool = False
    nocapture: bool = False

    def __post_init__(self) -> None:
        validate_command(self.command)
        workdir = Path(self.working_directory)
        if not workdir.is_absolute():
            raise InvalidWorkingDirectoryError(
                f"Working directory must be absolute: {workdir}",
            )
        object.__setattr__(self, "working_directory", workdir)
        object.__setattr__(
            self, "additional_arguments", tuple(self.additional_arguments),
        )

    def split_on_double_dash(self) -> tuple[list[str], list[str]]:
        """Split :attr:`additional_arguments` around the first ``--``.

        For ``cargo run --release -- foo bar`` returns
        ``(["--release"], ["foo", "bar"])``.
        """
        return arguments.split_on_double_dash(self.additional_arguments)

    def with_positional_argument(self, arg: str) -> CargoCommandLine:
        """Add *arg* as a positional argument, right after ``--``.

        Returns ``self`` when *arg* is already positional.
        """
        updated = arguments.insert_positional_argument(
            self.additional_arguments, arg,
        )
        if updated == self.additional_arguments:
            return self
        return replace(self, additional_arguments=updated)

    def prepend_argument(self, arg: str) -> CargoCommandLine:
        """Put *arg* in front of all arguments, separator included."""
        return replace(
            self,
            additional_arguments=arguments.prepend_argument(
                self.additional_arguments, arg,
            ),
        )

