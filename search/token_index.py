"""Reverse index from normalized CSS values to design-token declarations."""

import logging
import os
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional

from parsing.token_collector import TokenCollector
from search.config import IndexConfig
from search.discovery import discover_sources
from search.models import FileSummary, IndexUpdateResult, TokenRecord
from search.normalize import normalize_value

logger = logging.getLogger(__name__)


class TokenIndex:
    """In-memory token index with file-level incremental updates.

    All state is owned here: callers receive copies, never the backing
    maps. Every public method takes the same lock, so a build and a
    single-file update never interleave.
    """

    def __init__(self, config: Optional[IndexConfig] = None):
        self.config = config or IndexConfig()
        self._by_value: Dict[str, List[TokenRecord]] = {}
        self._mtimes: Dict[str, float] = {}
        self._summaries: Dict[str, FileSummary] = {}
        self._collector = TokenCollector(self.config.compile_whitelist())
        self._ready = False
        self._lock = threading.RLock()

    def is_ready(self) -> bool:
        return self._ready

    def build(self, config: Optional[IndexConfig] = None) -> IndexUpdateResult:
        """Clear everything and index every configured source file."""
        start_time = time.time()
        with self._lock:
            if config is not None:
                self.config = config
            self._by_value.clear()
            self._mtimes.clear()
            self._summaries.clear()
            self._collector = TokenCollector(self.config.compile_whitelist())

            files = discover_sources(self.config.sources, self.config.resolved_roots())
            files_indexed = 0
            tokens_added = 0
            for file_path in files:
                added = self._index_file(file_path)
                if added is None:
                    continue
                files_indexed += 1
                tokens_added += added

            self._ready = True

        result = IndexUpdateResult(
            files_indexed=files_indexed,
            files_skipped=len(files) - files_indexed,
            tokens_added=tokens_added,
            tokens_removed=0,
            time_taken=time.time() - start_time,
        )
        logger.info(
            f"Indexed {tokens_added} tokens from {files_indexed} files "
            f"({result.files_skipped} skipped) in {result.time_taken:.2f}s"
        )
        return result

    def on_file_change(self, path: str) -> IndexUpdateResult:
        """Purge one file's entries and index it again from scratch."""
        start_time = time.time()
        file_path = os.path.abspath(path)
        with self._lock:
            removed = self._remove_file_entries(file_path)
            added = self._index_file(file_path)

        result = IndexUpdateResult(
            files_indexed=0 if added is None else 1,
            files_skipped=1 if added is None else 0,
            tokens_added=added or 0,
            tokens_removed=removed,
            time_taken=time.time() - start_time,
        )
        logger.info(f"Re-indexed {file_path}: -{removed} +{result.tokens_added} tokens")
        return result

    def find_by_value(self, normalized_value: str) -> List[TokenRecord]:
        with self._lock:
            return list(self._by_value.get(normalized_value, ()))

    def find_by_referenced_variable(self, name: str) -> List[TokenRecord]:
        """Every record whose value is ``var(<name>)``, with or without fallback."""
        with self._lock:
            return [
                record
                for bucket in self._by_value.values()
                for record in bucket
                if record.referenced_variable == name
            ]

    def get_all_file_summaries(self) -> List[FileSummary]:
        with self._lock:
            return list(self._summaries.values())

    def get_file_summary(self, path: str) -> Optional[FileSummary]:
        with self._lock:
            return self._summaries.get(os.path.abspath(path))

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "total_tokens": sum(len(bucket) for bucket in self._by_value.values()),
                "distinct_values": len(self._by_value),
                "files_indexed": len(self._summaries),
            }

    # ---------- internals ----------

    def _index_file(self, file_path: str) -> Optional[int]:
        """Index one file; the number of inserted records, or None when skipped."""
        try:
            stat = os.stat(file_path)
            previous = self._mtimes.get(file_path)
            if previous is not None and stat.st_mtime <= previous:
                logger.debug(f"Unchanged since last index, skipping {file_path}")
                return None
            text = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {file_path}: {e}")
            return None
        self._mtimes[file_path] = stat.st_mtime

        collected = self._collector.collect(text, file_path)
        if collected is None:
            return None

        added = 0
        for record in collected.records:
            if self._insert(record):
                added += 1

        self._summaries[file_path] = FileSummary(
            path=file_path,
            header_comment=collected.header_comment,
            token_count=added,
            last_modified=stat.st_mtime,
        )
        return added

    def _insert(self, record: TokenRecord) -> bool:
        normalized = normalize_value(record.raw_value)
        if not normalized:
            return False
        bucket = self._by_value.get(normalized)
        if bucket is None:
            self._by_value[normalized] = [record]
            return True
        if any(existing.key == record.key for existing in bucket):
            return False
        bucket.append(record)
        return True

    def _remove_file_entries(self, file_path: str) -> int:
        removed = 0
        for value in list(self._by_value):
            bucket = self._by_value[value]
            kept = [record for record in bucket if record.file != file_path]
            removed += len(bucket) - len(kept)
            if kept:
                self._by_value[value] = kept
            else:
                del self._by_value[value]
        self._mtimes.pop(file_path, None)
        self._summaries.pop(file_path, None)
        return removed
