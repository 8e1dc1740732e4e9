"""Comment scanning: alias/pattern directives and file header text.

Directives are written inside ordinary CSS comments directly above a
custom-property declaration::

    /* @rm-prefix radius [%] */
    /* @alias card-radius */
    --radius-card: 12px;

Supported forms:

- ``@alias <name> <pattern>``  alias and replacement pattern together
- ``@alias <name>``            alias only
- ``@pattern <pattern>``       pattern only
- ``@rm-prefix <prefix> [<pattern>]``  derive the alias from the property
  name by dropping ``<prefix>-``

The scan walks upward from the declaration, skipping blank lines, and
stops at the first line of code. For each field the nearest directive wins.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

HEADER_COMMENT_MAX_LENGTH = 200
CUSTOM_PROPERTY_PREFIX = "--"
PREFIX_SEPARATOR = "-"

ALIAS_WITH_PATTERN_RE = re.compile(r"@alias\s+([\w-]+)\s+(\S*%.*?)\s*$")
ALIAS_RE = re.compile(r"@alias\s+([\w-]+)")
PATTERN_RE = re.compile(r"@pattern\s+(.+?)\s*$")
RM_PREFIX_RE = re.compile(r"@rm-prefix\s+([\w-]+)(?:\s+(.+?))?\s*$")

LINE_BLANK = "blank"
LINE_COMMENT = "comment"
LINE_CODE = "code"


@dataclass
class CommentMetadata:
    alias: Optional[str] = None
    pattern: Optional[str] = None


def classify_lines(text: str) -> List[Tuple[str, str]]:
    """Label every source line as blank, comment or code.

    Comment lines carry their comment body with the ``/*``, ``*/``, ``//``
    and leading ``*`` markers removed. Block-comment state is tracked from
    the top of the file, so the interior of a multi-line comment counts as
    comment even when it does not start with ``*``. A line mixing code and
    comment is code.
    """
    result: List[Tuple[str, str]] = []
    in_block = False
    for line in text.split("\n"):
        stripped = line.strip()
        if in_block:
            end = stripped.find("*/")
            if end == -1:
                result.append((LINE_COMMENT, _clean_body(stripped)))
                continue
            in_block = False
            if stripped[end + 2:].strip():
                result.append((LINE_CODE, ""))
            else:
                result.append((LINE_COMMENT, _clean_body(stripped[:end])))
            continue

        if not stripped:
            result.append((LINE_BLANK, ""))
        elif stripped.startswith("//"):
            result.append((LINE_COMMENT, _clean_body(stripped[2:])))
        elif stripped.startswith("/*"):
            end = stripped.find("*/", 2)
            if end == -1:
                in_block = True
                result.append((LINE_COMMENT, _clean_body(stripped[2:])))
            elif stripped[end + 2:].strip():
                result.append((LINE_CODE, ""))
            else:
                result.append((LINE_COMMENT, _clean_body(stripped[2:end])))
        else:
            result.append((LINE_CODE, ""))
    return result


def _clean_body(body: str) -> str:
    return body.strip().lstrip("*").strip()


def preceding_comments(
    text: str, line: int, classified: Optional[List[Tuple[str, str]]] = None
) -> List[str]:
    """Comment bodies directly above a 1-based line, nearest first."""
    lines = classified if classified is not None else classify_lines(text)
    bodies = []
    for kind, body in reversed(lines[:max(line - 1, 0)]):
        if kind == LINE_BLANK:
            continue
        if kind == LINE_CODE:
            break
        bodies.append(body)
    return bodies


def parse_directives(comment_bodies: List[str], property_name: str) -> CommentMetadata:
    """Resolve alias and pattern from comment bodies ordered nearest first."""
    alias = None
    pattern = None
    rm_prefix = None
    rm_pattern = None

    for body in comment_bodies:
        combined = ALIAS_WITH_PATTERN_RE.search(body)
        if combined:
            if alias is None:
                alias = combined.group(1)
            if pattern is None:
                pattern = combined.group(2)
            continue

        match = ALIAS_RE.search(body)
        if match:
            if alias is None:
                alias = match.group(1)
            continue

        match = PATTERN_RE.search(body)
        if match:
            if pattern is None:
                pattern = match.group(1)
            continue

        match = RM_PREFIX_RE.search(body)
        if match and rm_prefix is None:
            rm_prefix = match.group(1)
            rm_pattern = match.group(2)

    if alias is None and rm_prefix:
        alias = strip_prefix(property_name, rm_prefix)
    if pattern is None and rm_pattern:
        pattern = rm_pattern
    return CommentMetadata(alias=alias, pattern=pattern)


def strip_prefix(property_name: str, prefix: str) -> str:
    """``--radius-size-s`` with prefix ``radius`` becomes ``size-s``."""
    name = property_name
    if name.startswith(CUSTOM_PROPERTY_PREFIX):
        name = name[len(CUSTOM_PROPERTY_PREFIX):]
    if not prefix.endswith(PREFIX_SEPARATOR):
        prefix += PREFIX_SEPARATOR
    if name.startswith(prefix):
        name = name[len(prefix):]
    return name


def extract_comment_metadata(
    text: str,
    line: int,
    property_name: str,
    classified: Optional[List[Tuple[str, str]]] = None,
) -> CommentMetadata:
    return parse_directives(preceding_comments(text, line, classified), property_name)


def extract_header_comment(text: str, max_length: int = HEADER_COMMENT_MAX_LENGTH) -> str:
    """Leading comment block of a file, space-joined and truncated."""
    bodies = []
    for kind, body in classify_lines(text):
        if kind == LINE_CODE:
            break
        if kind == LINE_BLANK:
            if bodies:
                break
            continue
        if body:
            bodies.append(body)
    return " ".join(bodies)[:max_length]
