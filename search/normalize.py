"""Canonical forms for CSS values used as token index keys."""

import re
from typing import Optional

VAR_REFERENCE_RE = re.compile(r"^var\(\s*(--[a-zA-Z0-9-_]+)(?:\s*,\s*.*)?\s*\)$", re.IGNORECASE | re.DOTALL)
HEX_COLOR_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
FUNCTIONAL_COLOR_RE = re.compile(r"^(rgb|rgba|hsl|hsla)\(", re.IGNORECASE)
DIMENSION_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)(px|rem|em|%|vh|vw|dvh|svh|lvh)$", re.IGNORECASE)
MULTI_PART_RE = re.compile(r"(box-shadow|drop-shadow|linear-gradient|radial-gradient|inset)", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")
_COMMA_RE = re.compile(r"\s*,\s*")


def referenced_variable(value: str) -> Optional[str]:
    """Return the variable named by a single ``var()`` expression, ignoring any fallback."""
    if not value:
        return None
    match = VAR_REFERENCE_RE.match(value.strip())
    return match.group(1) if match else None


def normalize_value(value: Optional[str]) -> Optional[str]:
    """Map a raw CSS value to its index key, or None when it cannot be indexed.

    Rules are tried in a fixed order and the first one that matches decides:
    variable reference, hex color, functional color, dimension, multi-part
    value, then the trimmed input unchanged.
    """
    if not value:
        return None
    s = value.strip()
    if not s:
        return None

    # var(--name, fallback) -> var(--name)
    var_name = referenced_variable(s)
    if var_name:
        return f"var({var_name})"

    if HEX_COLOR_RE.match(s):
        return _canonical_hex(s)

    if FUNCTIONAL_COLOR_RE.match(s):
        return _WHITESPACE_RE.sub("", s).lower()

    dimension = DIMENSION_RE.match(s)
    if dimension:
        return _format_number(float(dimension.group(1))) + dimension.group(2).lower()

    if MULTI_PART_RE.search(s) or "," in s:
        collapsed = _COMMA_RE.sub(",", s)
        return _WHITESPACE_RE.sub(" ", collapsed).strip()

    return s


def _canonical_hex(value: str) -> str:
    s = value.lower()
    if len(s) in (4, 5):
        s = "#" + "".join(c * 2 for c in s[1:])
    return s


def _format_number(num: float) -> str:
    if num.is_integer():
        return str(int(num))
    return f"{num:.4f}".rstrip("0").rstrip(".")
