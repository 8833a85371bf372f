"""Text rewriting for fix operations."""

from __future__ import annotations

from typing import Iterable, List

from tsnarrow.analysis.models import EscapeHatchOccurrence, FixChange


def plan_changes(occurrences: Iterable[EscapeHatchOccurrence], text: str) -> List[FixChange]:
    """Turn occurrences into edits, ordered right to left."""
    changes = [FixChange.from_occurrence(o, text) for o in occurrences]
    changes.sort(key=lambda c: c.start, reverse=True)
    return changes


def apply_changes(text: str, changes: Iterable[FixChange]) -> str:
    """Apply *changes* from the end of the text backwards.

    Working right to left keeps every earlier offset valid. Overlapping
    changes are rejected.
    """
    result = text
    boundary = len(text) + 1
    for change in sorted(changes, key=lambda c: c.start, reverse=True):
        if change.end > boundary:
            raise ValueError(
                f"Overlapping changes at {change.start}..{change.end} (line {change.line})"
            )
        result = result[:change.start] + change.replacement + result[change.end:]
        boundary = change.start
    return result
