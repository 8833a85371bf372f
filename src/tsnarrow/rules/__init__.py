"""Replacement rules: models, registry, built-in table."""

from tsnarrow.rules.models import ReplacementRule
from tsnarrow.rules.registry import RuleRegistry, build_registry

__all__ = ["ReplacementRule", "RuleRegistry", "build_registry"]
