"""Records stored by the token index."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

SCOPE_THEME = "theme"
SCOPE_ROOT = "root"
SCOPE_SCOPED = "scoped"


@dataclass(frozen=True)
class TokenRecord:
    """One custom-property declaration found in an indexable block."""
    name: str
    raw_value: str
    file: str
    offset: int
    selector: str
    scope_kind: str
    line: int = 0
    alias: Optional[str] = None
    pattern: Optional[str] = None
    referenced_variable: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str, int]:
        """Deduplication key: a declaration's exact source position."""
        return (self.file, self.name, self.offset)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FileSummary:
    """Per-file bookkeeping recorded after a successful parse."""
    path: str
    header_comment: str
    token_count: int
    last_modified: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class IndexUpdateResult:
    """Results from a full build or a single-file re-index."""
    files_indexed: int
    files_skipped: int
    tokens_added: int
    tokens_removed: int
    time_taken: float
