"""Small text helpers shared by the shell: numeric parsing and field splitting."""

from __future__ import annotations

import string
from itertools import takewhile

_LEADING_SPACE = " \t\n\v\f\r\x0e"
_ALNUM = frozenset(string.ascii_letters + string.digits)
_DIGITS = frozenset(string.digits)
_UINT32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - (1 << 32) if value >= (1 << 31) else value


def atoi(text: str) -> int:
    """Parse a leading integer the way the shell's exit status parser does.

    Leading whitespace is skipped. More than one sign character gives 0.
    Parsing stops at the first non-digit, and the result wraps to a
    signed 32-bit integer.
    """
    rest = text.lstrip(_LEADING_SPACE)
    unsigned = rest.lstrip("+-")
    signs = rest[: len(rest) - len(unsigned)]
    if len(signs) > 1:
        return 0
    value = 0
    for digit in takewhile(lambda ch: ch in _DIGITS, unsigned):
        value = (value * 10 + int(digit)) & _UINT32
    if signs == "-":
        value = -value
    return _to_int32(value)


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [field for field in text.split(sep) if field]


def is_alnum(ch: str) -> bool:
    """Return True if ``ch`` is a single ASCII letter or digit."""
    return len(ch) == 1 and ch in _ALNUM