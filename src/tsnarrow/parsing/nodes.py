"""Small helpers over tree-sitter nodes used by every walker."""

from __future__ import annotations

from typing import Any, Iterator, Optional

import tree_sitter

Node = tree_sitter.Node

FUNCTION_KINDS = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "generator_function_declaration",
})

STRING_KINDS = frozenset({"string", "template_string"})


def node_text(node: Optional[Any]) -> str:
    """Return the source text of *node*, or '' for a missing node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def walk(node: Any) -> Iterator[Any]:
    """Yield *node* and every descendant in document (pre-)order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def ancestors(node: Any, *, include_self: bool = False) -> Iterator[Any]:
    """Yield the parents of *node*, innermost first."""
    current = node if include_self else node.parent
    while current is not None:
        yield current
        current = current.parent


def nearest_ancestor(node: Any, kinds: frozenset[str]) -> Optional[Any]:
    for candidate in ancestors(node):
        if candidate.type in kinds:
            return candidate
    return None


def operator_of(node: Any) -> str:
    """Operator token of a binary expression ('' if absent)."""
    op = node.child_by_field_name("operator")
    return op.type if op is not None else ""


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text
