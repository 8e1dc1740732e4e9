"""Index configuration: source patterns, roots and the class-selector whitelist."""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Pattern

logger = logging.getLogger(__name__)

DEFAULT_SOURCES = ["**/*.css", "**/*.pcss"]


@dataclass
class IndexConfig:
    """Settings the token index needs from its host."""
    sources: List[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    class_whitelist: List[str] = field(default_factory=list)
    roots: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IndexConfig":
        """Build a config from a loosely-typed mapping (YAML, tool arguments)."""
        if not isinstance(data, Mapping):
            raise ValueError("index configuration must be a mapping")

        unknown = set(data) - {"sources", "class_whitelist", "roots"}
        if unknown:
            raise ValueError(f"unknown configuration keys: {', '.join(sorted(unknown))}")

        values = {}
        for key in ("sources", "class_whitelist", "roots"):
            if data.get(key) is None:
                continue
            values[key] = _string_list(key, data[key])
        return cls(**values)

    def resolved_roots(self) -> List[str]:
        """Absolute root directories; the working directory when none are configured."""
        roots = self.roots or [os.getcwd()]
        return [os.path.abspath(os.path.expanduser(r)) for r in roots]

    def compile_whitelist(self) -> List[Pattern]:
        """Compile whitelist expressions, skipping (and logging) invalid ones."""
        compiled = []
        for expression in self.class_whitelist:
            try:
                compiled.append(re.compile(expression))
            except re.error as e:
                logger.warning(f"Ignoring invalid class whitelist pattern {expression!r}: {e}")
        return compiled


def _string_list(key: str, value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return list(value)
