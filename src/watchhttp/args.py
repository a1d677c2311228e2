"""Command line helpers: splitting tool flags from the user command and
parsing interval durations."""

from __future__ import annotations

import re

TERMINATOR = "--"

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
    "w": 7 * 86400.0,
    "y": 365 * 86400.0,
}

_SEGMENT = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h|d|w|y)"
_SEGMENT_RE = re.compile(_SEGMENT)
_DURATION_RE = re.compile(rf"([+-]?)((?:{_SEGMENT})+)")


class ArgsError(Exception):
    """Raised for invalid command line usage."""


def split_command(args: list[str]) -> tuple[list[str], bool]:
    """Split argv into the user command and whether tool flags are present.

    The command is everything after the first ``--``. Without a
    terminator the whole argv is the command, unless it starts with
    ``-``, in which case it is flags and there is no command.

    Returns:
        ``(command, has_flags)``; ``command`` is empty when missing.
    """
    try:
        idx = args.index(TERMINATOR)
    except ValueError:
        idx = -1

    has_flags = idx > 0

    start = idx + 1
    if start >= len(args):
        return [], has_flags

    if args[start].startswith("-"):
        return [], True

    return list(args[start:]), has_flags


def flag_args(args: list[str]) -> list[str]:
    """Tokens that hold tool flags, i.e. everything before ``--``."""
    if TERMINATOR in args:
        return args[: args.index(TERMINATOR)]
    return list(args)


def parse_duration(value: str) -> float:
    """Parse a duration such as ``1s``, ``300ms`` or ``1h30m`` into seconds.

    Units: ns, us, µs, ms, s, m, h, d, w, y. A bare ``0`` is accepted.

    Raises:
        ArgsError: If the string is not a valid duration.
    """
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return 0.0

    match = _DURATION_RE.fullmatch(text)
    if match is None:
        raise ArgsError(f"invalid duration {value!r}")

    sign, body = match.groups()[:2]
    seconds = sum(float(n) * _UNITS[unit] for n, unit in _SEGMENT_RE.findall(body))
    return -seconds if sign == "-" else seconds
