"""Decide which rule selectors hold design tokens."""

import re
from typing import Pattern, Sequence

from search.models import SCOPE_ROOT, SCOPE_SCOPED

ROOT_SELECTOR_RE = re.compile(r"^:root(\b|$)")
HTML_SELECTOR_RE = re.compile(r"^html(\b|$)")
DATA_THEME_RE = re.compile(r"\[data-theme\b", re.IGNORECASE)

ROOT_SELECTORS = {":root", "html"}


def is_indexable_selector(selector: str, class_whitelist: Sequence[Pattern] = ()) -> bool:
    """True when every comma-separated part of the group is allowed.

    Allowed parts are ``:root``, ``html``, anything carrying a ``data-theme``
    attribute matcher, and selectors matched by a whitelist expression.
    """
    parts = [part.strip() for part in selector.split(",")]
    return all(_is_allowed_part(part, class_whitelist) for part in parts)


def _is_allowed_part(part: str, class_whitelist: Sequence[Pattern]) -> bool:
    if not part:
        return False
    if ROOT_SELECTOR_RE.search(part) or HTML_SELECTOR_RE.search(part):
        return True
    if DATA_THEME_RE.search(part):
        return True
    return any(pattern.search(part) for pattern in class_whitelist)


def scope_kind_for(selector: str) -> str:
    return SCOPE_ROOT if selector in ROOT_SELECTORS else SCOPE_SCOPED
