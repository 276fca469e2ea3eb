"""
Element types accepted by value switches and their converters.

The set is closed: int, unsigned, float and str. Each converter takes the raw
token and returns the typed value, or raises ValueError when the whole token
does not spell a value of that type (no partial reads: "12abc" is not 12).

- int: decimal with an optional sign, or a 0x/0o/0b prefixed literal.
- unsigned: like int, negative values are rejected.
- float: decimal or scientific notation (".558", "1e-3"); no inf/nan, and
  literals overflowing to infinity ("1e999") are rejected.

Digits are ASCII only.
- str: the token itself; an empty token is rejected.
"""
import math
import re

_DECIMAL = re.compile(r"[+-]?\d+", re.ASCII)
_PREFIXED = re.compile(r"[+-]?0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)
_FLOATING = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _integer(token, /):
    if _DECIMAL.fullmatch(token):
        return int(token, 10)
    if _PREFIXED.fullmatch(token):
        return int(token, 0)
    raise ValueError("invalid literal for integer: %r" % token)


def unsigned(token, /):
    """
    Convert a token to a non-negative integer (hexadecimal allowed with 0x).
    """
    value = _integer(token)
    if value < 0:
        raise ValueError("invalid literal for unsigned integer: %r" % token)
    return value


def _floating(token, /):
    if not _FLOATING.fullmatch(token):
        raise ValueError("invalid literal for floating point: %r" % token)
    value = float(token)
    if not math.isfinite(value):
        raise ValueError("out of range for floating point: %r" % token)
    return value


def _text(token, /):
    if not token:
        raise ValueError("empty token for text")
    return token


_CONVERTERS = {
    int: (_integer, "integer"),
    unsigned: (unsigned, "unsigned integer"),
    float: (_floating, "floating point"),
    str: (_text, "text"),
}


def converter(type, /):
    """
    Return the converter for an element type; TypeError for anything outside the set.
    """
    try:
        return _CONVERTERS[type][0]
    except (KeyError, TypeError):
        raise TypeError("element type must be one of int, unsigned, float or str") from None


def typename(type, /):
    """
    Human-readable label of an element type, used in fault messages.
    """
    try:
        return _CONVERTERS[type][1]
    except (KeyError, TypeError):
        raise TypeError("element type must be one of int, unsigned, float or str") from None


__all__ = (
    "unsigned",
    "converter",
    "typename",
)
