"""Tests for the command-line building intents (cli/app.py).

The rendered command is read back from stdout; no process is started
and no Rust toolchain is needed.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cargo_cmdline.cli import exit_codes
from cargo_cmdline.cli.app import cli, main, parse_env, parse_target
from cargo_cmdline.core.models import (
    CrateType,
    EnvMode,
    Package,
    TargetKind,
    Workspace,
)
from cargo_cmdline.exceptions import (
    CargoNotFoundError,
    InvalidArgumentError,
    LaunchCommandError,
)

MANIFEST = "/work/Cargo.toml"
CD = f"cd {shlex.quote(str(Path(MANIFEST).resolve().parent))} && "

PACKAGE = Package(
    name="core",
    root_directory=Path("/work/core"),
    workspace=Workspace(manifest_path=Path(MANIFEST)),
)


def _run(argv: list[str], capsys: pytest.CaptureFixture[str]) -> str:
    code = main(argv)
    assert code == exit_codes.SUCCESS
    return capsys.readouterr().out.strip()


# ---------------------------------------------------------------------------
# Descriptor parsing
# ---------------------------------------------------------------------------

class TestParseTarget:
    def test_kind_and_name(self) -> None:
        target = parse_target("bin:server", PACKAGE)
        assert target.kind is TargetKind.BIN
        assert target.name == "server"
        assert target.package == PACKAGE
        assert target.crate_types == (CrateType.BIN,)

    def test_kind_is_case_insensitive(self) -> None:
        assert parse_target("TEST:it", PACKAGE).kind is TargetKind.TEST

    def test_lib_defaults_to_lib_crate(self) -> None:
        assert parse_target("lib:core", PACKAGE).crate_types == (CrateType.LIB,)

    def test_explicit_crate_types(self) -> None:
        target = parse_target("example:ffi:cdylib,rlib", PACKAGE)
        assert target.crate_types == (CrateType.CDYLIB, CrateType.RLIB)

    @pytest.mark.parametrize("spec", ["bin", "bin:", "a:b:c:d"])
    def test_malformed(self, spec: str) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_target(spec, PACKAGE)

    def test_unknown_kind_lists_valid_ones(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_target("binary:x", PACKAGE)
        assert exc_info.value.hint is not None
        assert "bin" in exc_info.value.hint

    def test_unknown_crate_type(self) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_target("example:x:wasm", PACKAGE)


class TestParseEnv:
    def test_pairs(self) -> None:
        env = parse_env(["A=1", "B=x=y"], inherit=True)
        assert env.overrides == (("A", "1"), ("B", "x=y"))
        assert env.mode is EnvMode.INHERIT

    def test_later_pair_wins(self) -> None:
        env = parse_env(["A=1", "A=2"], inherit=False)
        assert env.overrides == (("A", "2"),)
        assert env.mode is EnvMode.EXPLICIT

    def test_empty_value_allowed(self) -> None:
        assert parse_env(["A="], inherit=True).as_dict() == {"A": ""}

    @pytest.mark.parametrize("pair", ["A", "=1"])
    def test_malformed(self, pair: str) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_env([pair], inherit=True)


# ---------------------------------------------------------------------------
# targets
# ---------------------------------------------------------------------------

class TestTargetsIntent:
    def test_two_binaries(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "bin:a", "--target", "bin:b",
            ],
            capsys,
        )
        assert out == CD + "cargo run --package core --bin a --bin b"

    def test_command_derived_from_kind(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "test:integration",
            ],
            capsys,
        )
        assert out == CD + "cargo test --package core --test integration"

    def test_explicit_command_and_extras(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "bin:a", "--command", "build", "--", "--release",
            ],
            capsys,
        )
        assert out == CD + "cargo build --package core --bin a --release"

    def test_positional_and_prepend(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "test:it",
                "--positional", "my_filter", "--positional", "my_filter",
                "--prepend=-q", "--prepend=--locked",
            ],
            capsys,
        )
        assert out == CD + "cargo test -q --locked --package core --test it -- my_filter"

    def test_nocapture_and_all_features(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "test:it", "--nocapture", "--all-features",
            ],
            capsys,
        )
        assert out == CD + "cargo test --package core --test it --all-features -- --nocapture"

    def test_first_target_decides_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "bin:a", "--target", "test:b",
            ],
            capsys,
        )
        assert out == CD + "cargo run --package core --bin a --test b"

    def test_same_name_across_kinds(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "bin:a", "--target", "test:a",
            ],
            capsys,
        )
        assert out == CD + "cargo run --package core --bin a"

    def test_test_target_first(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "test:it", "--target", "bin:a",
            ],
            capsys,
        )
        assert out == CD + "cargo test --package core --test it --bin a"

    def test_unknown_kind_after_known_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "bench:speed", "--target", "unknown:x", "--no-input",
            ],
            capsys,
        )
        assert out == CD + "cargo bench --package core --bench speed"

    def test_unknown_kind_without_input_fails(self) -> None:
        with pytest.raises(LaunchCommandError):
            main(
                [
                    "targets", "--manifest-path", MANIFEST, "--package", "core",
                    "--target", "unknown:x", "--no-input",
                ]
            )

    @patch("cargo_cmdline.cli.command_prompt.prompt_command", return_value="check")
    def test_unknown_kind_prompts(
        self, mock_prompt: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        out = _run(
            [
                "targets", "--manifest-path", MANIFEST, "--package", "core",
                "--target", "unknown:x",
            ],
            capsys,
        )
        assert out == CD + "cargo check --package core"
        mock_prompt.assert_called_once()


# ---------------------------------------------------------------------------
# package / project
# ---------------------------------------------------------------------------

class TestPackageIntent:
    def test_arguments(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "package", "--manifest-path", MANIFEST, "--package", "cli",
                "--command", "test", "--", "--release",
            ],
            capsys,
        )
        assert out == CD + "cargo test --package cli --release"


class TestProjectIntent:
    def test_channel(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "project", "--manifest-path", MANIFEST,
                "--command", "build", "--channel", "nightly",
            ],
            capsys,
        )
        assert out == CD + "cargo +nightly build"

    def test_custom_cargo(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "project", "--manifest-path", MANIFEST,
                "--command", "clippy", "--cargo", "/opt/my cargo",
            ],
            capsys,
        )
        assert out == CD + "'/opt/my cargo' clippy"

    @patch("cargo_cmdline.infra.toolchain_detector.require_cargo")
    def test_locate_cargo(
        self, mock_require: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_require.return_value = Path("/usr/local/bin/cargo")
        out = _run(
            ["project", "--manifest-path", MANIFEST, "--command", "doc", "--locate-cargo"],
            capsys,
        )
        assert out == CD + f"{Path('/usr/local/bin/cargo')} doc"

    @patch("cargo_cmdline.infra.toolchain_detector.require_cargo")
    def test_locate_cargo_missing(self, mock_require: MagicMock) -> None:
        mock_require.side_effect = CargoNotFoundError("cargo is not installed or not on PATH.")
        with pytest.raises(CargoNotFoundError):
            main(["project", "--manifest-path", MANIFEST, "--command", "doc", "--locate-cargo"])

    def test_invalid_command(self) -> None:
        from cargo_cmdline.exceptions import InvalidCommandError

        with pytest.raises(InvalidCommandError):
            main(["project", "--manifest-path", MANIFEST, "--command", "+nightly"])


class TestEnvironmentOutput:
    def test_backtrace_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "package", "--manifest-path", MANIFEST, "--package", "cli",
                "--command", "test", "--backtrace", "short",
            ],
            capsys,
        )
        assert out == CD + "RUST_BACKTRACE=short cargo test --package cli"

    def test_env_values_are_quoted(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "project", "--manifest-path", MANIFEST, "--command", "run",
                "--env", "GREETING=hello world", "--env", "LEVEL=2",
            ],
            capsys,
        )
        assert out == CD + "'GREETING=hello world' LEVEL=2 cargo run"

    def test_no_inherit_env(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            [
                "project", "--manifest-path", MANIFEST, "--command", "build",
                "--no-inherit-env", "--env", "PATH=/usr/bin",
            ],
            capsys,
        )
        assert out == CD + "env -i PATH=/usr/bin cargo build"

    def test_no_inherit_env_without_overrides(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = _run(
            ["project", "--manifest-path", MANIFEST, "--command", "build", "--no-inherit-env"],
            capsys,
        )
        assert out == CD + "env -i cargo build"

    def test_manifest_directory_with_spaces(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        root = tmp_path / "my crate"
        out = _run(
            ["project", "--manifest-path", str(root / "Cargo.toml"), "--command", "check"],
            capsys,
        )
        assert out == f"cd {shlex.quote(str(root.resolve()))} && cargo check"


# ---------------------------------------------------------------------------
# --explain
# ---------------------------------------------------------------------------

class TestExplain:
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.markup": None})
    def test_plain_breakdown_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(
            [
                "package", "--manifest-path", MANIFEST, "--package", "cli",
                "--command", "test", "--backtrace", "full", "--env", "A=1",
                "--explain",
            ]
        )
        assert code == exit_codes.SUCCESS
        captured = capsys.readouterr()
        assert captured.out.strip() == CD + "A=1 RUST_BACKTRACE=full cargo test --package cli"
        assert "RUST_BACKTRACE" in captured.err
        assert "inherit" in captured.err
        assert "--package cli" in captured.err


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_known_error_exits_one(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            "sys.argv",
            ["cargo-cmdline", "targets", "--manifest-path", MANIFEST,
             "--package", "core", "--target", "nope:x"],
        )
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Unknown target kind" in err

    def test_keyboard_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _interrupt(argv: list[str] | None = None) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr("cargo_cmdline.cli.app.main", _interrupt)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error_exits_two(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(argv: list[str] | None = None) -> int:
            raise RuntimeError("boom")

        monkeypatch.setattr("cargo_cmdline.cli.app.main", _boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
