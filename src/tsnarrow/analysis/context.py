"""Usage-context classifier for ``any`` annotations.

A best-effort oracle: each test walks ancestor kinds or inspects source
text, and the first test that succeeds decides the tag. Nothing here is a
soundness guarantee.
"""

from __future__ import annotations

from typing import Any, Callable, List, Tuple

from tsnarrow.parsing.nodes import FUNCTION_KINDS, ancestors, node_text, operator_of

JSX_KINDS = frozenset({
    "jsx_element",
    "jsx_attribute",
    "jsx_opening_element",
    "jsx_self_closing_element",
})

OBJECT_KINDS = frozenset({
    "object",
    "object_type",
    "interface_body",
    "interface_declaration",
})

COMPARISON_OPERATORS = frozenset({"==", "===", "!=", "!==", "<", ">", "<=", ">="})
ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/", "%"})

# Identifiers whose presence on the left of a member access marks DOM code.
DOM_MARKERS = ("document", "Element")


def _has_ancestor_kind(node: Any, kinds: frozenset[str]) -> bool:
    return any(a.type in kinds for a in ancestors(node, include_self=True))


def _under_binary_operator(node: Any, operators: frozenset[str]) -> bool:
    for current in ancestors(node, include_self=True):
        parent = current.parent
        if parent is None:
            return False
        if parent.type == "binary_expression" and operator_of(parent) in operators:
            return True
    return False


def in_jsx(node: Any) -> bool:
    return _has_ancestor_kind(node, JSX_KINDS)


def in_comparison(node: Any) -> bool:
    return _under_binary_operator(node, COMPARISON_OPERATORS)


def in_arithmetic(node: Any) -> bool:
    return _under_binary_operator(node, ARITHMETIC_OPERATORS)


def in_function(node: Any) -> bool:
    return _has_ancestor_kind(node, FUNCTION_KINDS)


def in_dom(node: Any) -> bool:
    for current in ancestors(node, include_self=True):
        if current.parent is None:
            break
        if current.type == "member_expression":
            target = node_text(current.child_by_field_name("object"))
            if any(marker in target for marker in DOM_MARKERS):
                return True
    return False


def in_array(node: Any) -> bool:
    parent = node.parent
    if parent is None:
        return False
    if parent.type == "array_type":
        return True
    return parent.parent is not None and parent.parent.type == "array"


def in_object(node: Any) -> bool:
    return _has_ancestor_kind(node, OBJECT_KINDS)


CONTEXT_TESTS: List[Tuple[str, Callable[[Any], bool]]] = [
    ("jsx", in_jsx),
    ("comparison", in_comparison),
    ("arithmetic", in_arithmetic),
    ("function", in_function),
    ("dom", in_dom),
    ("array", in_array),
    ("object", in_object),
]


def classify(node: Any) -> str:
    """Return exactly one context tag for *node*; 'unknown' if no test fires."""
    for tag, test in CONTEXT_TESTS:
        if test(node):
            return tag
    return "unknown"
