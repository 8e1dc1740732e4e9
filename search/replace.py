"""Replacement text for swapping a literal CSS value with a design token."""

import re
from typing import List

from search.models import TokenRecord

PLACEHOLDER = "%"

_TOKEN_NAME_RE = re.compile(r"--[a-z0-9\-_]+", re.IGNORECASE)
_VAR_CALL_RE = re.compile(r"^var\(", re.IGNORECASE)


def replace_with_var(var_name: str) -> str:
    """Wrap a token name in ``var()``.

    Accepts ``var(--x)``, ``--x`` or ``x``; an existing ``var()`` call is
    returned as is so it never gets wrapped twice.
    """
    text = (var_name or "").strip()
    if _VAR_CALL_RE.match(text):
        return text

    match = _TOKEN_NAME_RE.search(text)
    if match:
        token = match.group(0)
    else:
        token = text if text.startswith("--") else f"--{text}"
    return f"var({token})"


def expand_pattern(pattern: str, alias: str) -> str:
    """Substitute the alias for every placeholder in a replacement pattern."""
    return pattern.replace(PLACEHOLDER, alias)


def replacement_options(record: TokenRecord) -> List[str]:
    """Candidate replacement texts for a record, ``var()`` form first."""
    options = [replace_with_var(record.name)]
    if record.alias:
        alias_text = expand_pattern(record.pattern, record.alias) if record.pattern else record.alias
        if alias_text not in options:
            options.append(alias_text)
    return options
