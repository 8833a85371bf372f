"""Surface patterns: the local text a rule is matched against.

The pattern is synthesised from the declaration that owns the annotation:
``data: any`` for a named parameter or field, ``items: any[]`` for an array
element of a named declaration, ``Promise<any>`` for a generic type
argument, and plain ``any`` for everything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tsnarrow.parsing.nodes import node_text, strip_quotes

DECLARATION_KINDS = {
    "required_parameter": "parameter",
    "optional_parameter": "parameter",
    "property_signature": "field",
    "public_field_definition": "field",
    "variable_declarator": "variable",
}

# Destructuring patterns have no single name and fall back to a bare pattern.
NAME_KINDS = frozenset({
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "string",
})

# Parameters name their binding "pattern"; every other declaration "name".
_NAME_FIELDS = {
    "required_parameter": "pattern",
    "optional_parameter": "pattern",
}


@dataclass(frozen=True)
class SurfacePattern:
    text: str
    kind: str  # parameter | field | variable | array_element | type_reference | bare
    parent_kind: Optional[str] = None
    declaration: Any = None
    name: Optional[str] = None


def declaration_name(declaration: Any) -> Optional[str]:
    name_node = declaration.child_by_field_name(_NAME_FIELDS.get(declaration.type, "name"))
    if name_node is None or name_node.type not in NAME_KINDS:
        return None
    return strip_quotes(node_text(name_node))


def _named_declaration(annotation: Any) -> tuple[Any, Optional[str]]:
    """Return (declaration, name) for a type_annotation node, if it has one."""
    declaration = annotation.parent
    if declaration is None or declaration.type not in DECLARATION_KINDS:
        return None, None
    return declaration, declaration_name(declaration)


def surface_pattern(node: Any) -> SurfacePattern:
    parent = node.parent
    if parent is None:
        return SurfacePattern("any", "bare")

    if parent.type == "type_annotation":
        declaration, name = _named_declaration(parent)
        if declaration is not None and name:
            return SurfacePattern(
                f"{name}: any",
                DECLARATION_KINDS[declaration.type],
                declaration.type,
                declaration,
                name,
            )
        grand = parent.parent.type if parent.parent is not None else None
        return SurfacePattern("any", "bare", grand)

    if parent.type == "array_type":
        holder = parent.parent
        if holder is not None and holder.type == "type_annotation":
            declaration, name = _named_declaration(holder)
            if declaration is not None and name:
                return SurfacePattern(
                    f"{name}: any[]", "array_element", declaration.type, declaration, name
                )
        return SurfacePattern("any[]", "array_element", "array_type")

    if parent.type == "type_arguments" and parent.parent is not None:
        if parent.parent.type == "generic_type":
            return SurfacePattern(node_text(parent.parent), "type_reference", "generic_type")

    return SurfacePattern("any", "bare", parent.type)


def element_type(replacement: str) -> str:
    """Type to put in an element position, given a rule's array replacement."""
    text = replacement.strip()
    if text.endswith("[]"):
        return text[:-2]
    if any(token in text for token in ("|", "&", "=>")):
        return f"({text})"
    return text
