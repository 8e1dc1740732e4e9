"""tree-sitter CSS parsing and node text helpers."""

import logging
from functools import lru_cache
from typing import Iterable, Iterator, List, Optional

import tree_sitter_css as tscss
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# Value-level nodes whose text is emitted whole when regenerating.
ATOMIC_NODE_TYPES = {
    "color_value",
    "integer_value",
    "float_value",
    "string_value",
    "plain_value",
    "property_name",
    "function_name",
    "tag_name",
    "class_name",
    "id_name",
    "attribute_name",
    "keyword_query",
    "important",
}

_NO_SPACE_AFTER = {"(", ",", "["}
_NO_SPACE_BEFORE = {")", ",", "]"}


@lru_cache(maxsize=1)
def get_css_language() -> Language:
    """Load the CSS grammar once per process."""
    return Language(tscss.language())


def parse_css(source: bytes) -> Optional[Tree]:
    """Parse CSS source; None when its block structure is broken.

    Local syntax errors (an unknown at-rule prelude, a wildcard property
    name, an empty value) leave ERROR or MISSING nodes in an otherwise
    usable tree. Callers skip those nodes and keep the rest.
    """
    parser = Parser(get_css_language())
    tree = parser.parse(source)
    if tree.root_node.has_error and has_broken_structure(tree.root_node):
        return None
    return tree


def has_broken_structure(root: Node) -> bool:
    """True when braces do not pair up: a block left open or a stray close."""
    depth = 0
    for node in iter_nodes(root):
        if node.type == "}" and node.is_missing:
            return True
        if node.child_count:
            continue
        if node.type == "{":
            depth += 1
        elif node.type == "}":
            depth -= 1
            if depth < 0:
                return True
    return depth != 0


def iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order traversal in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def get_node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def regenerate(nodes: Iterable[Node], source: bytes) -> str:
    """Re-emit canonical text for a run of sibling nodes.

    Whitespace between tokens collapses to a single space, commas and
    brackets are written tight, and comments are dropped.
    """
    tokens = []
    for node in nodes:
        tokens.extend(_leaf_tokens(node))

    parts: List[str] = []
    prev = None
    for node in tokens:
        text = get_node_text(node, source)
        if (
            prev is not None
            and prev.end_byte < node.start_byte
            and parts[-1] not in _NO_SPACE_AFTER
            and text not in _NO_SPACE_BEFORE
        ):
            parts.append(" ")
        parts.append(text)
        prev = node
    return "".join(parts).strip()


def _leaf_tokens(node: Node) -> List[Node]:
    if node.type in ("comment", "js_comment"):
        return []
    if node.type in ATOMIC_NODE_TYPES or node.child_count == 0:
        return [node]
    leaves: List[Node] = []
    for child in node.children:
        leaves.extend(_leaf_tokens(child))
    return leaves
