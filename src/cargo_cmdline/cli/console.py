"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) and plain
command rendering remain functional even when Rich is not installed.

Diagnostics go to stderr; :func:`emit` is the only path to stdout and
carries the rendered command, so it can be piped or ``eval``-ed.
"""

from __future__ import annotations

import sys
from typing import Any

from cargo_cmdline.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Diagnostics channel, always on stderr.

	Keeping diagnostics here means the command line that :func:`emit`
	writes is the only thing a shell capturing stdout sees.
	"""

	def print(self, *objects: object) -> None:
		"""Print a diagnostic on stderr, through Rich when installed.

		Without Rich the objects go to stderr unrendered, markup included.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def emit(text: str) -> None:
	"""Write the rendered command line to stdout.

	No markup is interpreted and nothing else shares the stream.
	"""
	sys.stdout.write(text + "\n")
