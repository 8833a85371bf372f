"""Concurrency-bounded batch processing."""

from tsnarrow.batch.driver import process_files, run_batch
from tsnarrow.batch.models import BatchJobState, BatchResult, FileOutcome
from tsnarrow.batch.progress import ProgressThrottle

__all__ = [
    "BatchJobState",
    "BatchResult",
    "FileOutcome",
    "ProgressThrottle",
    "process_files",
    "run_batch",
]
