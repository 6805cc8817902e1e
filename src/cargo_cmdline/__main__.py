"""Allow ``python -m cargo_cmdline`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m cargo_cmdline`` behaves identically to the
``cargo-cmdline`` console script.
"""

from __future__ import annotations

from cargo_cmdline.cli.app import cli

if __name__ == "__main__":
    cli()
