"""Protocols (interfaces) for the workspace model consumed by the core.

The invocation factory only reads a handful of attributes from an
already-resolved workspace model.  These protocols describe exactly
those attributes, so any external model (the dataclasses in
:mod:`cargo_cmdline.core.models`, an IDE's project model, a parsed
``cargo metadata`` document) satisfies them structurally — no explicit
inheritance required.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cargo_cmdline.core.models import CrateType, TargetKind


class WorkspaceLike(Protocol):
    """A workspace, known by the path of its root ``Cargo.toml``."""

    @property
    def manifest_path(self) -> Path: ...  # pragma: no cover


class PackageLike(Protocol):
    """A package belonging to exactly one workspace."""

    @property
    def name(self) -> str: ...  # pragma: no cover

    @property
    def root_directory(self) -> Path: ...  # pragma: no cover

    @property
    def workspace(self) -> WorkspaceLike: ...  # pragma: no cover


class TargetLike(Protocol):
    """A target belonging to exactly one package.

    ``crate_types`` is only consulted for example targets, to decide
    between ``run`` and ``build``.
    """

    @property
    def name(self) -> str: ...  # pragma: no cover

    @property
    def kind(self) -> TargetKind: ...  # pragma: no cover

    @property
    def package(self) -> PackageLike: ...  # pragma: no cover

    @property
    def crate_types(self) -> Sequence[CrateType]: ...  # pragma: no cover


class ProjectLike(Protocol):
    """A Cargo project; its working directory selects the project for Cargo."""

    @property
    def working_directory(self) -> Path: ...  # pragma: no cover
