"""Type guessing from usage, initializers and names.

All guesses are first-found, not best-found: the walker stops at the first
usage that implies a type, in source order. A parameter used as
``"id: " + x`` before ``x.name`` is reported as ``string``.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Pattern, Tuple

from tsnarrow.parsing.nodes import (
    FUNCTION_KINDS,
    STRING_KINDS,
    nearest_ancestor,
    node_text,
    operator_of,
    walk,
)

RECORD_TYPE = "Record<string, unknown>"
UNKNOWN_ARRAY = "unknown[]"
FUNCTION_TYPE = "(...args: unknown[]) => unknown"
REACT_NODE = "React.ReactNode"

EQUALITY_OPERATORS = frozenset({"==", "===", "!=", "!=="})
ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/", "%"})

_NUMERIC_RE = re.compile(
    r"""
    [-+]?\s*
    (?:
        0[xX][0-9a-fA-F]+
      | 0[bB][01]+
      | 0[oO][0-7]+
      | (?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?
      | Infinity
    )
    """,
    re.VERBOSE,
)

NAME_HEURISTICS: List[Tuple[Pattern[str], str]] = [
    # A bare lowercase "id" suffix would also catch words like "valid" or "grid".
    (re.compile(r"^id$|(?:Id|ID|_id|-id)$|(?i:key|uuid|guid)$"), "string"),
    (
        re.compile(
            r"^(?:is|has|should|can)[A-Z]"
            r"|(?i:enabled|visible|active|selected|checked)$"
        ),
        "boolean",
    ),
    (
        re.compile(
            r"(?i:count|length|index|size|width|height|amount|sum|total"
            r"|limit|offset|duration)$"
        ),
        "number",
    ),
    (
        re.compile(r"^(?:created|updated|deleted)[A-Z]|(?i:date|time|timestamp)$"),
        "Date | string",
    ),
    (
        re.compile(
            r"(?i:items|records|results|data|list|collection|array|elements"
            r"|rows|entries)$"
        ),
        UNKNOWN_ARRAY,
    ),
    (
        re.compile(r"^on[A-Z]|(?i:handler|callback|fn|func|function|action)$"),
        FUNCTION_TYPE,
    ),
    (
        re.compile(
            r"(?i:options|config|settings|props|attributes|params|parameters"
            r"|metadata|context|state)$"
        ),
        RECORD_TYPE,
    ),
]


def is_numeric_literal(text: str) -> bool:
    return _NUMERIC_RE.fullmatch(text.strip()) is not None


def infer_from_name(name: str) -> Optional[str]:
    """Guess a type from a property or binding name alone."""
    for pattern, guess in NAME_HEURISTICS:
        if pattern.search(name):
            return guess
    return None


def infer_from_initializer(value: Any) -> Optional[str]:
    """Guess a type from the literal a field or variable is initialised with."""
    if value is None:
        return None
    kind = value.type
    if kind == "number" or (kind == "unary_expression" and is_numeric_literal(node_text(value))):
        return "number"
    if kind in STRING_KINDS:
        return "string"
    if kind in ("true", "false"):
        return "boolean"
    if kind == "array":
        return UNKNOWN_ARRAY
    if kind == "object":
        return RECORD_TYPE
    if kind in FUNCTION_KINDS:
        return FUNCTION_TYPE
    return None


def _literal_type(other: Any) -> Optional[str]:
    """Type implied by the literal a value is compared against."""
    text = node_text(other)
    if text in ("true", "false"):
        return "boolean"
    if is_numeric_literal(text):
        return "number"
    if other.type in STRING_KINDS:
        return "string"
    return None


def _other_operand(binary: Any, name: str) -> Optional[Any]:
    left = binary.child_by_field_name("left")
    right = binary.child_by_field_name("right")
    if left is None or right is None:
        return None
    if node_text(left) == name:
        return right
    if node_text(right) == name:
        return left
    return None


def _infer_at(node: Any, name: str) -> Optional[str]:
    """Apply the ordered usage tests to one node of a function body."""
    kind = node.type
    if kind == "binary_expression":
        op = operator_of(node)
        other = _other_operand(node, name)
        if other is None:
            return None
        if op in EQUALITY_OPERATORS:
            return _literal_type(other)
        if op in ARITHMETIC_OPERATORS:
            if op == "+" and other.type in STRING_KINDS:
                return "string"
            return "number"
        return None

    if kind == "member_expression":
        if node_text(node.child_by_field_name("object")) == name:
            return RECORD_TYPE
        return None

    if kind == "subscript_expression":
        if node_text(node.child_by_field_name("object")) == name:
            index = node.child_by_field_name("index")
            if index is not None and index.type == "number":
                return UNKNOWN_ARRAY
            return RECORD_TYPE
        return None

    if kind == "call_expression":
        if node_text(node.child_by_field_name("function")) == name:
            return FUNCTION_TYPE
    return None


def infer_parameter_type(parameter: Any, name: str) -> Optional[str]:
    """Walk the enclosing function body for the first usage of *name*."""
    function = nearest_ancestor(parameter, FUNCTION_KINDS)
    if function is None:
        return None
    body = function.child_by_field_name("body")
    if body is None:
        return None
    for node in walk(body):
        guess = _infer_at(node, name)
        if guess is not None:
            return guess
    return None


def infer_from_usage_context(node: Any) -> Optional[str]:
    """Guess the type of an expression from the expression that contains it."""
    parent = node.parent
    if parent is None:
        return None
    kind = parent.type

    if kind == "binary_expression":
        op = operator_of(parent)
        left = parent.child_by_field_name("left")
        right = parent.child_by_field_name("right")
        other = right if left == node else left
        if other is None:
            return None
        if op in EQUALITY_OPERATORS:
            return _literal_type(other)
        if op in ARITHMETIC_OPERATORS:
            if op == "+" and other.type in STRING_KINDS:
                return "string"
            return "number"
        return None

    if kind == "call_expression":
        return FUNCTION_TYPE if parent.child_by_field_name("function") == node else None

    if kind == "member_expression":
        return RECORD_TYPE if parent.child_by_field_name("object") == node else None

    if kind == "subscript_expression":
        return UNKNOWN_ARRAY if parent.child_by_field_name("object") == node else None

    if kind == "spread_element":
        return RECORD_TYPE

    if kind == "jsx_expression" and parent.parent is not None:
        if parent.parent.type == "jsx_element":
            return REACT_NODE
    return None
