"""Pure helpers for Cargo argument sequences.

Cargo arguments mix tool flags (``--release``, ``--package foo``) with
positional arguments forwarded to the built program.  The boundary is
the separator token ``--``; everything after its **first** occurrence is
positional.  The separator is matched as a whole token, the way a shell
would hand it to Cargo, never as a substring.

Every function here is a pure transformation — no I/O, no side effects.
"""

from __future__ import annotations

from collections.abc import Sequence

SEPARATOR: str = "--"
"""Token separating tool flags from positional program arguments."""


def split_on_double_dash(
    args: Sequence[str],
) -> tuple[list[str], list[str]]:
    """Split *args* into the parts before and after the first ``--``.

    For ``cargo run --release -- foo bar`` the arguments
    ``["--release", "--", "foo", "bar"]`` yield
    ``(["--release"], ["foo", "bar"])``.  Without a separator the whole
    sequence is returned as the first part and the second is empty.
    """
    items = list(args)
    try:
        idx = items.index(SEPARATOR)
    except ValueError:
        return items, []
    return items[:idx], items[idx + 1:]


def insert_positional_argument(
    args: Sequence[str],
    arg: str,
) -> tuple[str, ...]:
    """Return *args* with *arg* placed right after the separator.

    The separator is always (re-)emitted, and *arg* goes in front of any
    positional arguments already present.  When *arg* is already
    positional the arguments are returned unchanged, so repeated calls
    never stack duplicates.
    """
    pre, post = split_on_double_dash(args)
    if arg in post:
        return tuple(args)
    return (*pre, SEPARATOR, arg, *post)


def prepend_argument(args: Sequence[str], arg: str) -> tuple[str, ...]:
    """Return *args* with *arg* in front of everything, separator included."""
    return (arg, *args)


def has_tool_flag(args: Sequence[str], flag: str) -> bool:
    """Whether *flag* appears among the tool flags (before the separator)."""
    pre, _ = split_on_double_dash(args)
    return flag in pre
