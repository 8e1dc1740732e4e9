"""Core logic for the design-token lookup server."""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from common_utils import get_index_config
from search.config import IndexConfig
from search.discovery import matches_sources
from search.models import TokenRecord
from search.normalize import normalize_value
from search.replace import replacement_options
from search.token_index import TokenIndex

logger = logging.getLogger(__name__)


class DesignTokenServer:
    """Main server class owning the token index and its lookups."""

    def __init__(self, config: Optional[IndexConfig] = None):
        self.index = TokenIndex(config or get_index_config())

    def ensure_index_ready(self) -> None:
        """Build lazily on first use."""
        if not self.index.is_ready():
            logger.info("Token index not built yet, building now")
            self.index.build()

    def build_index(
        self,
        sources: List[str] = None,
        class_whitelist: List[str] = None,
        roots: List[str] = None,
    ) -> Dict[str, Any]:
        """Implementation of build_index tool."""
        try:
            config = None
            if sources is not None or class_whitelist is not None or roots is not None:
                current = self.index.config
                config = IndexConfig.from_mapping({
                    "sources": current.sources if sources is None else sources,
                    "class_whitelist": current.class_whitelist if class_whitelist is None else class_whitelist,
                    "roots": current.roots if roots is None else roots,
                })
            result = self.index.build(config)
        except ValueError as e:
            logger.error(f"Build failed: {e}")
            return {"success": False, "error": str(e)}

        response = {"success": True}
        response.update(asdict(result))
        response["time_taken"] = round(result.time_taken, 2)
        return response

    def find_tokens(self, value: str, include_references: bool = True) -> Dict[str, Any]:
        """Tokens whose value equals a raw CSS value, plus tokens aliasing them."""
        normalized = normalize_value(value)
        if not normalized:
            return {"error": f"Not a recognizable CSS value: {value!r}"}

        self.ensure_index_ready()
        matches = self.index.find_by_value(normalized)
        response = {
            "value": value,
            "normalized": normalized,
            "matches": [self._record_dict(r) for r in matches],
        }
        if include_references:
            references = []
            seen = {r.key for r in matches}
            for record in matches:
                for ref in self.index.find_by_referenced_variable(record.name):
                    if ref.key not in seen:
                        seen.add(ref.key)
                        references.append(self._record_dict(ref))
            response["references"] = references
        if not matches:
            response["message"] = "No matching design token found"
        return response

    def find_references(self, variable: str) -> Dict[str, Any]:
        """Tokens defined as ``var(<variable>)``."""
        self.ensure_index_ready()
        name = variable.strip()
        if not name.startswith("--"):
            name = f"--{name}"
        refs = self.index.find_by_referenced_variable(name)
        return {"variable": name, "references": [self._record_dict(r) for r in refs]}

    def notify_file_changed(self, path: str) -> Dict[str, Any]:
        """Re-index a single saved stylesheet."""
        config = self.index.config
        if not matches_sources(path, config.sources, config.resolved_roots()):
            return {"success": False, "message": f"Not a configured token source: {path}"}
        if not self.index.is_ready():
            result = self.index.build()
        else:
            result = self.index.on_file_change(path)
        response = {"success": True}
        response.update(asdict(result))
        response["time_taken"] = round(result.time_taken, 2)
        return response

    def list_token_files(self) -> Dict[str, Any]:
        """All indexed files, most tokens first."""
        self.ensure_index_ready()
        summaries = sorted(
            self.index.get_all_file_summaries(),
            key=lambda s: s.token_count,
            reverse=True,
        )
        return {
            "count": len(summaries),
            "total_tokens": sum(s.token_count for s in summaries),
            "files": [s.to_dict() for s in summaries],
        }

    def get_file_summary(self, path: str) -> Dict[str, Any]:
        self.ensure_index_ready()
        summary = self.index.get_file_summary(path)
        if summary is None:
            return {"error": f"File not indexed: {path}"}
        return summary.to_dict()

    def get_index_status(self) -> Dict[str, Any]:
        config = self.index.config
        status = {
            "ready": self.index.is_ready(),
            "sources": list(config.sources),
            "class_whitelist": list(config.class_whitelist),
            "roots": config.resolved_roots(),
        }
        status.update(self.index.get_stats())
        return status

    @staticmethod
    def _record_dict(record: TokenRecord) -> Dict[str, Any]:
        data = record.to_dict()
        data["replacements"] = replacement_options(record)
        return data
