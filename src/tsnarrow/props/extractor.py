"""Structural prop extraction for React components.

Finds a component by name (function declaration, arrow-valued binding,
memo-wrapped function or class), then builds its props from three sources
in order: the declared props type, destructuring of the props object, and
member accesses on it. Placeholders still ``unknown`` at the end are
refined by name.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Set, Tuple

from tsnarrow.analysis.inference import (
    infer_from_initializer,
    infer_from_name,
    infer_from_usage_context,
)
from tsnarrow.errors import ComponentNotFound
from tsnarrow.parsing.nodes import node_text, operator_of, strip_quotes, walk
from tsnarrow.parsing.tree import SourceUnit
from tsnarrow.props.models import UNKNOWN, ComponentProps, PropDescriptor

PropMap = Dict[str, PropDescriptor]

FUNCTION_VALUE_KINDS = frozenset({"arrow_function", "function_expression", "function"})
PARAMETER_KINDS = frozenset({"required_parameter", "optional_parameter"})
GUARD_OPERATORS = frozenset({"&&", "||"})

# Error-boundary hooks receive error info, not props.
SKIPPED_CLASS_METHODS = frozenset({"componentDidCatch", "getDerivedStateFromError"})

CLASS_PROPS = "this.props"


def _is_guarded(node: Any) -> bool:
    """True if *node* is the tested operand of a conditional or short-circuit."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type == "ternary_expression":
        return parent.child_by_field_name("condition") == node
    if parent.type == "binary_expression" and operator_of(parent) in GUARD_OPERATORS:
        return parent.child_by_field_name("left") == node
    return False


def _jsdoc(member: Any) -> str:
    previous = member.prev_named_sibling
    if previous is None or previous.type != "comment":
        return ""
    text = node_text(previous)
    if not text.startswith("/**"):
        return ""
    body = text[3:-2] if text.endswith("*/") else text[3:]
    lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
    return " ".join(line for line in lines if line)


def _annotation_type(annotation: Optional[Any]) -> Optional[Any]:
    """Unwrap a ``type_annotation`` node to the type it carries."""
    if annotation is None:
        return None
    if annotation.type == "type_annotation":
        return annotation.named_children[0] if annotation.named_children else None
    return annotation


class PropExtractor:
    """Builds a component's props from one parsed file."""

    def __init__(self, unit: SourceUnit) -> None:
        self.unit = unit

    # ---- lookup ----

    def find_component(self, name: str) -> Optional[Tuple[str, Any]]:
        return self._find_component(name, set())

    def _find_component(self, name: str, seen: Set[str]) -> Optional[Tuple[str, Any]]:
        if name in seen:
            return None
        seen.add(name)

        for node in walk(self.unit.root):
            if node.type in ("function_declaration", "class_declaration"):
                if node_text(node.child_by_field_name("name")) != name:
                    continue
                kind = "class" if node.type == "class_declaration" else "function"
                return kind, node

            if node.type != "variable_declarator":
                continue
            if node_text(node.child_by_field_name("name")) != name:
                continue
            value = node.child_by_field_name("value")
            if value is None:
                continue
            if value.type in FUNCTION_VALUE_KINDS:
                return "arrow", value
            if value.type == "call_expression" and "memo" in node_text(
                value.child_by_field_name("function")
            ):
                arguments = value.child_by_field_name("arguments")
                if arguments is None or not arguments.named_children:
                    continue
                wrapped = arguments.named_children[0]
                if wrapped.type in FUNCTION_VALUE_KINDS:
                    return "memo", wrapped
                if wrapped.type == "identifier":
                    inner = self._find_component(node_text(wrapped), seen)
                    if inner is not None:
                        return "memo", inner[1]
        return None

    def extract(self, name: str) -> ComponentProps:
        """Return the props of component *name*. Raises ComponentNotFound."""
        found = self.find_component(name)
        if found is None:
            raise ComponentNotFound(name)

        kind, node = found
        props: PropMap = {}
        if node.type == "class_declaration":
            self._analyze_class(node, props)
        else:
            self._analyze_function(node, props)

        for prop in props.values():
            if prop.upgradable:
                guess = infer_from_name(prop.name)
                if guess:
                    prop.type = guess

        return ComponentProps(name=name, kind=kind, props=list(props.values()))

    # ---- function components ----

    def _analyze_function(self, function: Any, props: PropMap) -> None:
        body = function.child_by_field_name("body")
        parameter = function.child_by_field_name("parameter")
        if parameter is None:
            parameters = function.child_by_field_name("parameters")
            if parameters is None:
                return
            candidates = [p for p in parameters.named_children if p.type in PARAMETER_KINDS]
            if not candidates:
                return
            parameter = candidates[0]

        if parameter.type in PARAMETER_KINDS:
            pattern = parameter.child_by_field_name("pattern")
            declared = _annotation_type(parameter.child_by_field_name("type"))
            if declared is not None:
                self._collect_declared(declared, props, set())
        else:
            pattern = parameter

        if pattern is None or body is None:
            return
        if pattern.type == "identifier":
            self._scan_usage(body, node_text(pattern), props)
        elif pattern.type == "object_pattern":
            self._collect_destructured(pattern, body, props)

    # ---- class components ----

    def _analyze_class(self, cls: Any, props: PropMap) -> None:
        for child in cls.children:
            if child.type != "class_heritage":
                continue
            if "Component" not in node_text(child):
                continue
            type_arguments = next((n for n in walk(child) if n.type == "type_arguments"), None)
            if type_arguments is not None and type_arguments.named_children:
                self._collect_declared(type_arguments.named_children[0], props, set())

        body = cls.child_by_field_name("body")
        if body is None:
            return
        for member in body.named_children:
            if member.type == "method_definition":
                if node_text(member.child_by_field_name("name")) in SKIPPED_CLASS_METHODS:
                    continue
                method_body = member.child_by_field_name("body")
                if method_body is not None:
                    self._scan_usage(method_body, CLASS_PROPS, props)
            elif member.type == "public_field_definition":
                value = member.child_by_field_name("value")
                if value is not None:
                    self._scan_usage(value, CLASS_PROPS, props)

    # ---- usage ----

    def _scan_usage(self, scope: Any, props_name: str, props: PropMap) -> None:
        """Record member accesses on *props_name* and destructuring of it."""
        for node in walk(scope):
            if node.type == "member_expression":
                if node_text(node.child_by_field_name("object")) != props_name:
                    continue
                name = node_text(node.child_by_field_name("property"))
                if not name:
                    continue
                guarded = _is_guarded(node)
                guess = None if guarded else infer_from_usage_context(node)
                prop = props.get(name)
                if prop is None:
                    props[name] = PropDescriptor(
                        name=name,
                        type=guess or UNKNOWN,
                        required=not guarded,
                    )
                elif prop.source != "declared":
                    if guarded:
                        prop.required = False
                    if guess and prop.upgradable:
                        prop.type = guess

            elif node.type == "variable_declarator":
                pattern = node.child_by_field_name("name")
                value = node.child_by_field_name("value")
                if pattern is None or pattern.type != "object_pattern":
                    continue
                if node_text(value) == props_name:
                    self._collect_destructured(pattern, scope, props)

    def _collect_destructured(self, pattern: Any, scope: Any, props: PropMap) -> None:
        bindings: Dict[str, str] = {}

        for element in pattern.named_children:
            default = None
            if element.type == "shorthand_property_identifier_pattern":
                name = binding = node_text(element)
            elif element.type == "object_assignment_pattern":
                name = binding = node_text(element.child_by_field_name("left"))
                default = element.child_by_field_name("right")
            elif element.type == "pair_pattern":
                name = strip_quotes(node_text(element.child_by_field_name("key")))
                value = element.child_by_field_name("value")
                if value is not None and value.type == "assignment_pattern":
                    default = value.child_by_field_name("right")
                    value = value.child_by_field_name("left")
                if value is None or value.type != "identifier":
                    continue
                binding = node_text(value)
            else:
                continue

            if not name:
                continue
            if name not in props:
                props[name] = PropDescriptor(
                    name=name,
                    type=infer_from_initializer(default) or UNKNOWN,
                    required=default is None,
                    source="destructured",
                )
            elif props[name].source != "declared" and default is not None:
                props[name].required = False
            bindings[binding] = name

        for binding, name in bindings.items():
            prop = props[name]
            if prop.upgradable:
                self._refine_from_references(scope, binding, prop)

    def _refine_from_references(self, scope: Any, binding: str, prop: PropDescriptor) -> None:
        """Upgrade an unknown placeholder from the first informative reference."""
        for node in walk(scope):
            if node.type != "identifier" or node_text(node) != binding:
                continue
            guess = infer_from_usage_context(node)
            if guess:
                prop.type = guess
                return

    # ---- declared types ----

    def _collect_declared(self, type_node: Any, props: PropMap, seen: Set[str]) -> None:
        kind = type_node.type
        if kind in ("object_type", "interface_body"):
            self._collect_members(type_node, props)
        elif kind == "type_identifier":
            self._resolve_named(node_text(type_node), props, seen)
        elif kind == "generic_type":
            self._resolve_named(node_text(type_node.child_by_field_name("name")), props, seen)
        elif kind in ("intersection_type", "parenthesized_type"):
            for part in type_node.named_children:
                self._collect_declared(part, props, seen)

    def _collect_members(self, container: Any, props: PropMap) -> None:
        for member in container.named_children:
            if member.type not in ("property_signature", "method_signature"):
                continue
            name = strip_quotes(node_text(member.child_by_field_name("name")))
            if not name or name in props:
                continue
            if member.type == "method_signature":
                parameters = node_text(member.child_by_field_name("parameters")) or "()"
                returns = _annotation_type(member.child_by_field_name("return_type"))
                type_text = f"{parameters} => {node_text(returns) or 'void'}"
            else:
                declared = _annotation_type(member.child_by_field_name("type"))
                type_text = node_text(declared) or UNKNOWN
            optional = any(child.type == "?" for child in member.children)
            props[name] = PropDescriptor(
                name=name,
                type=type_text,
                required=not optional,
                description=_jsdoc(member),
                source="declared",
            )

    def _resolve_named(self, name: str, props: PropMap, seen: Set[str]) -> None:
        """Resolve an interface or type alias declared in the same file."""
        if not name or name in seen:
            return
        seen.add(name)

        for node in walk(self.unit.root):
            if node_text(node.child_by_field_name("name")) != name:
                continue
            if node.type == "interface_declaration":
                body = node.child_by_field_name("body")
                if body is not None:
                    self._collect_members(body, props)
                for child in node.children:
                    if child.type != "extends_type_clause":
                        continue
                    for base in child.named_children:
                        self._collect_declared(base, props, seen)
                return
            if node.type == "type_alias_declaration":
                value = node.child_by_field_name("value")
                if value is not None:
                    self._collect_declared(value, props, seen)
                return


def extract_props(unit: SourceUnit, component: str) -> ComponentProps:
    return PropExtractor(unit).extract(component)
