"""Walk a stylesheet's syntax tree and collect design-token declarations."""

import logging
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence

from tree_sitter import Node

from parsing.comments import classify_lines, extract_comment_metadata, extract_header_comment
from parsing.css_parser import get_node_text, iter_nodes, parse_css, regenerate
from parsing.selectors import is_indexable_selector, scope_kind_for
from search.models import SCOPE_THEME, TokenRecord
from search.normalize import referenced_variable

logger = logging.getLogger(__name__)

THEME_AT_RULE = "theme"
CUSTOM_PROPERTY_PREFIX = "--"

_VALUE_SKIP_TYPES = {";", "important", "comment", "js_comment"}


@dataclass
class CollectedFile:
    """Token candidates and header text from one parsed stylesheet."""
    records: List[TokenRecord] = field(default_factory=list)
    header_comment: str = ""


class TokenCollector:
    """Extracts custom-property declarations from theme blocks and allowed rules."""

    def __init__(self, class_whitelist: Sequence[Pattern] = ()):
        self.class_whitelist = list(class_whitelist)

    def collect(self, text: str, file_path: str) -> Optional[CollectedFile]:
        """Collect candidate records; None when the file's block structure is broken.

        Rules and declarations the grammar could only recover from are
        skipped one by one, everything around them is still collected.
        """
        source = text.encode("utf-8")
        tree = parse_css(source)
        if tree is None:
            logger.warning(f"Skipping {file_path}: unbalanced CSS blocks")
            return None

        context = _FileContext(text, source, file_path)
        collected = CollectedFile(header_comment=extract_header_comment(text))

        for node in iter_nodes(tree.root_node):
            if node.type == "at_rule":
                selector = self._theme_selector(node, source)
                if selector is not None:
                    collected.records.extend(self._collect_block(node, context, selector, SCOPE_THEME))
            elif node.type == "rule_set":
                selectors = _child_of_type(node, "selectors")
                if selectors is None or selectors.has_error:
                    continue
                selector = regenerate([selectors], source)
                if not is_indexable_selector(selector, self.class_whitelist):
                    continue
                collected.records.extend(
                    self._collect_block(node, context, selector, scope_kind_for(selector))
                )

        logger.debug(f"Collected {len(collected.records)} token candidates from {file_path}")
        return collected

    def _theme_selector(self, node: Node, source: bytes) -> Optional[str]:
        """``theme`` or ``theme inline`` for @theme blocks, None for any other at-rule."""
        keyword = _child_of_type(node, "at_keyword")
        if keyword is None or get_node_text(keyword, source) != "@" + THEME_AT_RULE:
            return None
        prelude = [
            child for child in node.children
            if child is not keyword and child.type not in ("block", "comment", "js_comment")
        ]
        if any(child.has_error for child in prelude):
            return None
        qualifiers = regenerate(prelude, source).split() if prelude else []
        return " ".join([THEME_AT_RULE] + qualifiers)

    def _collect_block(
        self, node: Node, context: "_FileContext", selector: str, scope_kind: str
    ) -> List[TokenRecord]:
        block = _child_of_type(node, "block")
        if block is None:
            return []
        records = []
        for child in block.children:
            if child.type != "declaration":
                continue
            if child.has_error:
                logger.debug(f"Skipping malformed declaration at {context.file_path}:{child.start_point[0] + 1}")
                continue
            record = self._record_from_declaration(child, context, selector, scope_kind)
            if record is not None:
                records.append(record)
        return records

    def _record_from_declaration(
        self, decl: Node, context: "_FileContext", selector: str, scope_kind: str
    ) -> Optional[TokenRecord]:
        prop = _child_of_type(decl, "property_name")
        if prop is None:
            return None
        name = get_node_text(prop, context.source)
        if not name.startswith(CUSTOM_PROPERTY_PREFIX):
            return None

        value_nodes = []
        seen_colon = False
        for child in decl.children:
            if not seen_colon:
                seen_colon = child.type == ":"
                continue
            if child.type not in _VALUE_SKIP_TYPES:
                value_nodes.append(child)
        value = regenerate(value_nodes, context.source)

        line = decl.start_point[0] + 1
        metadata = extract_comment_metadata(context.text, line, name, context.lines)
        return TokenRecord(
            name=name,
            raw_value=value,
            file=context.file_path,
            offset=context.char_offset(decl.start_byte),
            selector=selector,
            scope_kind=scope_kind,
            line=line,
            alias=metadata.alias,
            pattern=metadata.pattern,
            referenced_variable=referenced_variable(value),
        )


class _FileContext:
    """Source views shared by every declaration of one file."""

    def __init__(self, text: str, source: bytes, file_path: str):
        self.text = text
        self.source = source
        self.file_path = file_path
        self.lines = classify_lines(text)
        self._char_starts: Optional[List[int]] = None
        if len(source) != len(text):
            self._char_starts = _char_start_bytes(text)

    def char_offset(self, byte_offset: int) -> int:
        if self._char_starts is None:
            return byte_offset
        return bisect_left(self._char_starts, byte_offset)


def _char_start_bytes(text: str) -> List[int]:
    """UTF-8 byte offset at which each character of ``text`` starts."""
    starts = []
    position = 0
    for ch in text:
        starts.append(position)
        position += len(ch.encode("utf-8"))
    return starts


def _child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None
