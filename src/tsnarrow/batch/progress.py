"""Throttled progress notifications for batch runs."""

from __future__ import annotations

import os
import time
from typing import Callable, Optional

ProgressCallback = Callable[[int, int, str], None]


def progress_message(processed: int, total: int, path: str) -> str:
    percent = round(processed / total * 100) if total else 100
    return f"Processing file {processed}/{total} ({percent}%): {os.path.basename(path)}"


class ProgressThrottle:
    """Lets at most one notification through per *interval_ms*.

    The first notification always fires.
    """

    def __init__(
        self,
        interval_ms: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval = interval_ms / 1000.0
        self.clock = clock
        self._last: Optional[float] = None

    def ready(self) -> bool:
        now = self.clock()
        if self._last is not None and now - self._last < self.interval:
            return False
        self._last = now
        return True
