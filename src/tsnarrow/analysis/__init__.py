"""Escape-hatch detection: context classification, inference, rewriting."""

from tsnarrow.analysis.engine import find_occurrences
from tsnarrow.analysis.fixer import apply_changes, plan_changes
from tsnarrow.analysis.models import (
    AnalysisResult,
    EscapeHatchOccurrence,
    FixChange,
    FixResult,
)

__all__ = [
    "AnalysisResult",
    "EscapeHatchOccurrence",
    "FixChange",
    "FixResult",
    "apply_changes",
    "find_occurrences",
    "plan_changes",
]
