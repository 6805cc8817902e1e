"""cargo-cmdline — build unambiguous Cargo invocations from intents.

Turns "run this binary", "test this package" or "build this project"
into an immutable command-line value with a strict layered architecture.
"""

from cargo_cmdline.version import __version__

__all__: list[str] = ["__version__"]
