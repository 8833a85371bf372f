"""Analysis and fix result models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EscapeHatchOccurrence:
    """One located ``any`` annotation and the type proposed in its place.

    ``start``/``end`` are character offsets into the file text; ``line`` is
    1-based and ``column`` 0-based.
    """

    line: int
    column: int
    start: int
    end: int
    pattern: str
    replacement: str
    context: str
    node_kind: str
    parent_kind: Optional[str] = None
    source: str = "default"  # rule | inference | initializer | name | default
    rule_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid occurrence span {self.start}..{self.end}")


@dataclass
class AnalysisResult:
    """Per-file analysis output. Cached as a plain dict."""

    file_path: str
    content_hash: str = ""
    occurrences: List[EscapeHatchOccurrence] = field(default_factory=list)
    success: bool = True
    error: Optional[Dict[str, str]] = None
    from_cache: bool = False

    @property
    def total(self) -> int:
        return len(self.occurrences)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "content_hash": self.content_hash,
            "occurrences": [asdict(o) for o in self.occurrences],
            "total": self.total,
            "success": self.success,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        return cls(
            file_path=data["file_path"],
            content_hash=data.get("content_hash", ""),
            occurrences=[EscapeHatchOccurrence(**o) for o in data.get("occurrences", [])],
            success=data.get("success", True),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class FixChange:
    """A single text edit. Lists of changes are applied right to left."""

    start: int
    end: int
    original: str
    replacement: str
    line: int
    column: int
    pattern: str

    @classmethod
    def from_occurrence(cls, occurrence: EscapeHatchOccurrence, text: str) -> "FixChange":
        return cls(
            start=occurrence.start,
            end=occurrence.end,
            original=text[occurrence.start:occurrence.end],
            replacement=occurrence.replacement,
            line=occurrence.line,
            column=occurrence.column,
            pattern=occurrence.pattern,
        )


@dataclass
class FixResult:
    file_path: str
    changes: List[FixChange] = field(default_factory=list)
    applied: bool = False
    dry_run: bool = False
    backup_path: Optional[str] = None
    success: bool = True
    error: Optional[Dict[str, str]] = None

    @property
    def total(self) -> int:
        return len(self.changes)

    @property
    def backup_created(self) -> bool:
        return self.backup_path is not None
