"""Batch job state and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FileOutcome:
    """What one worker reports back to the coordinator."""

    index: int
    path: str
    result: Optional[Any] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class BatchJobState:
    """Counters for one batch run. Only the coordinating coroutine mutates it."""

    total: int
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: List[Dict[str, str]] = field(default_factory=list)
    results: Dict[int, Any] = field(default_factory=dict)

    def record(self, outcome: FileOutcome) -> None:
        self.processed += 1
        if outcome.result is not None:
            self.results[outcome.index] = outcome.result
        if outcome.succeeded:
            self.succeeded += 1
        else:
            self.failed += 1
            self.errors.append({"file_path": outcome.path, "error": outcome.error or ""})


@dataclass
class BatchResult:
    operation: str
    total: int
    processed: int
    succeeded: int
    failed: int
    results: List[Any] = field(default_factory=list)
    errors: List[Dict[str, str]] = field(default_factory=list)
    progress_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failed == 0

    @classmethod
    def from_state(
        cls,
        operation: str,
        state: BatchJobState,
        progress_message: Optional[str] = None,
    ) -> "BatchResult":
        return cls(
            operation=operation,
            total=state.total,
            processed=state.processed,
            succeeded=state.succeeded,
            failed=state.failed,
            results=[state.results[i] for i in sorted(state.results)],
            errors=list(state.errors),
            progress_message=progress_message,
        )
