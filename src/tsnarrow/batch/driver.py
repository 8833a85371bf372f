"""Windowed batch processing over asyncio.

Files are split into windows of at most ``concurrency`` paths. Each window
runs its files in worker threads and must settle completely before the
next window starts. Workers only report outcomes; the coordinating
coroutine owns the job state.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from tsnarrow.batch.models import BatchJobState, BatchResult, FileOutcome
from tsnarrow.batch.progress import ProgressCallback, ProgressThrottle, progress_message
from tsnarrow.config.schema import REPLACEMENT_CHOICES
from tsnarrow.logging import get_logger

if TYPE_CHECKING:
    from tsnarrow.service import Analyzer

log = get_logger("batch")

OPERATIONS = ("analyze", "fix")


def windows(files: Sequence[str], size: int) -> List[Sequence[str]]:
    return [files[i:i + size] for i in range(0, len(files), size)]


def _run_one(
    analyzer: "Analyzer",
    operation: str,
    path: str,
    replacement_default: Optional[str],
    dry_run: bool,
) -> Any:
    if operation == "fix":
        return analyzer.fix(path, replacement_default=replacement_default, dry_run=dry_run)
    return analyzer.analyze(path)


async def _process_file(
    analyzer: "Analyzer",
    operation: str,
    index: int,
    path: str,
    replacement_default: Optional[str],
    dry_run: bool,
) -> FileOutcome:
    try:
        result = await asyncio.to_thread(
            _run_one, analyzer, operation, path, replacement_default, dry_run
        )
    except Exception as exc:
        log.warning("file_failed", path=path, error=str(exc))
        return FileOutcome(index=index, path=path, error=str(exc))

    if not result.success:
        message = (result.error or {}).get("message", "unknown error")
        return FileOutcome(index=index, path=path, result=result, error=message)
    return FileOutcome(index=index, path=path, result=result)


async def process_files(
    analyzer: "Analyzer",
    files: Sequence[str],
    operation: str,
    *,
    replacement_default: Optional[str] = None,
    dry_run: bool = False,
    concurrency: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    """Run *operation* over *files* with at most *concurrency* in flight."""
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown batch operation: {operation}")
    if replacement_default is not None and replacement_default not in REPLACEMENT_CHOICES:
        raise ValueError(f"Unsupported replacement type: {replacement_default}")
    limit = concurrency if concurrency is not None else analyzer.config.batch.concurrency
    if limit <= 0:
        raise ValueError("concurrency must be positive")

    batch_cfg = analyzer.config.batch
    notify = on_progress if batch_cfg.progress_reporting else None
    throttle = ProgressThrottle(batch_cfg.progress_interval_ms)
    state = BatchJobState(total=len(files))
    last_message: Optional[str] = None
    started = time.perf_counter()

    log.info("batch_started", operation=operation, files=len(files), concurrency=limit)

    offset = 0
    for window in windows(files, limit):
        tasks = [
            asyncio.create_task(
                _process_file(analyzer, operation, offset + i, path, replacement_default, dry_run)
            )
            for i, path in enumerate(window)
        ]
        offset += len(window)

        for finished in asyncio.as_completed(tasks):
            outcome = await finished
            state.record(outcome)
            last_message = progress_message(state.processed, state.total, outcome.path)
            if notify is not None and throttle.ready():
                try:
                    notify(state.processed, state.total, outcome.path)
                except Exception as exc:
                    log.warning("progress_callback_failed", error=str(exc))

    log.info(
        "batch_completed",
        operation=operation,
        succeeded=state.succeeded,
        failed=state.failed,
        elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return BatchResult.from_state(operation, state, last_message)


def run_batch(
    analyzer: "Analyzer",
    files: Sequence[str],
    operation: str,
    *,
    replacement_default: Optional[str] = None,
    dry_run: bool = False,
    concurrency: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchResult:
    """Synchronous entry point around :func:`process_files`."""
    return asyncio.run(
        process_files(
            analyzer,
            list(files),
            operation,
            replacement_default=replacement_default,
            dry_run=dry_run,
            concurrency=concurrency,
            on_progress=on_progress,
        )
    )
