"""Occurrence finder: locates every ``any`` annotation and resolves a type.

Resolution order for one occurrence: rule table, then usage inference for
parameters, then initializer and name heuristics for fields and variables,
then the configured default.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from tsnarrow.analysis.context import classify
from tsnarrow.analysis.inference import (
    infer_from_initializer,
    infer_from_name,
    infer_parameter_type,
)
from tsnarrow.analysis.models import EscapeHatchOccurrence
from tsnarrow.analysis.patterns import SurfacePattern, element_type, surface_pattern
from tsnarrow.parsing.nodes import node_text, walk
from tsnarrow.parsing.tree import SourceUnit
from tsnarrow.rules.models import ReplacementRule
from tsnarrow.rules.registry import RuleRegistry

ESCAPE_HATCH = "any"

Resolution = Tuple[str, str, Optional[str]]


def is_escape_hatch(node: Any) -> bool:
    return node.type == "predefined_type" and node_text(node) == ESCAPE_HATCH


def _from_rule(surface: SurfacePattern, rule: ReplacementRule) -> Resolution:
    if surface.kind == "array_element":
        return element_type(rule.replacement), "rule", rule.id
    return rule.replacement, "rule", rule.id


def _infer(surface: SurfacePattern) -> Optional[Tuple[str, str]]:
    if surface.name is None or surface.declaration is None:
        return None
    if surface.kind == "parameter":
        guess = infer_parameter_type(surface.declaration, surface.name)
        return (guess, "inference") if guess else None
    if surface.kind in ("field", "variable"):
        guess = infer_from_initializer(surface.declaration.child_by_field_name("value"))
        if guess:
            return guess, "initializer"
        guess = infer_from_name(surface.name)
        if guess:
            return guess, "name"
    return None


def resolve(
    node: Any,
    registry: RuleRegistry,
    default_replacement: str,
) -> Tuple[SurfacePattern, str, Resolution]:
    """Classify *node* and pick its replacement. Returns (surface, context, resolution)."""
    context = classify(node)
    surface = surface_pattern(node)

    rule = registry.find(surface.text, usage=context, parent_kind=surface.parent_kind)
    if rule is not None:
        return surface, context, _from_rule(surface, rule)

    inferred = _infer(surface)
    if inferred is not None:
        guess, source = inferred
        return surface, context, (guess, source, None)

    return surface, context, (default_replacement, "default", None)


def find_occurrences(
    unit: SourceUnit,
    registry: RuleRegistry,
    default_replacement: str,
) -> List[EscapeHatchOccurrence]:
    """Return every escape-hatch occurrence in *unit*, in document order."""
    occurrences: List[EscapeHatchOccurrence] = []
    text = unit.text

    for node in walk(unit.root):
        if not is_escape_hatch(node):
            continue

        surface, context, (replacement, source, rule_id) = resolve(
            node, registry, default_replacement
        )
        start = unit.char_offset(node.start_byte)
        end = unit.char_offset(node.end_byte)
        line_start = text.rfind("\n", 0, start) + 1

        occurrences.append(
            EscapeHatchOccurrence(
                line=node.start_point[0] + 1,
                column=start - line_start,
                start=start,
                end=end,
                pattern=surface.text,
                replacement=replacement,
                context=context,
                node_kind=node.type,
                parent_kind=surface.parent_kind,
                source=source,
                rule_id=rule_id,
            )
        )

    return occurrences
