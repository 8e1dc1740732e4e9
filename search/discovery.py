"""Resolve configured glob patterns to stylesheet paths."""

import fnmatch
import glob
import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)


def discover_sources(patterns: Sequence[str], roots: Sequence[str]) -> List[str]:
    """Return absolute paths of regular files matching any pattern under any root.

    Results are deduplicated and keep first-seen order.
    """
    found: Dict[str, None] = {}
    for root in roots:
        for pattern in patterns:
            try:
                matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
            except OSError as e:
                logger.debug(f"Glob {pattern!r} failed under {root}: {e}")
                continue
            for match in matches:
                path = os.path.abspath(os.path.join(root, match))
                if path not in found and os.path.isfile(path):
                    found[path] = None
    logger.debug(f"Discovered {len(found)} source files for patterns {list(patterns)}")
    return list(found)


def matches_sources(path: str, patterns: Sequence[str], roots: Sequence[str]) -> bool:
    """Check whether a single path falls under the configured source patterns."""
    abs_path = os.path.abspath(path)
    candidates = [abs_path.replace('\\', '/')]
    for root in roots:
        try:
            candidates.append(Path(abs_path).relative_to(os.path.abspath(root)).as_posix())
        except ValueError:
            continue

    for norm_path in candidates:
        for pattern in patterns:
            norm_pattern = pattern.replace('\\', '/')
            # 1. Direct match
            if fnmatch.fnmatch(norm_path, norm_pattern):
                return True
            # 2. Match as sub-path (unanchored)
            if not norm_pattern.startswith('/') and not norm_pattern.startswith('./'):
                if fnmatch.fnmatch(norm_path, "*/" + norm_pattern):
                    return True
            # 3. Match on filename
            if fnmatch.fnmatch(Path(norm_path).name, norm_pattern.rsplit('/', 1)[-1]):
                if '/' not in norm_pattern or norm_pattern.startswith('**/'):
                    return True
    return False
