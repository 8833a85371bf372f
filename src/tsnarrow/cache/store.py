"""File-backed result cache with a time-to-live.

One JSON document per key, named by the md5 of the key:
``{"timestamp": <epoch seconds>, "data": <value>}``. The cache is never a
source of truth. Every failure is logged and turns into a miss or a no-op.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Optional, Union

from tsnarrow.config.schema import TsNarrowConfig
from tsnarrow.errors import CacheFailure
from tsnarrow.logging import get_logger

log = get_logger("cache")

ENTRY_SUFFIX = ".json"


class ResultCache:
    def __init__(
        self,
        directory: Union[str, Path],
        ttl: float,
        *,
        enabled: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.ttl = ttl
        self.clock = clock
        self.enabled = enabled
        if self.enabled:
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                log.warning("cache_disabled", directory=str(self.directory), error=str(exc))
                self.enabled = False

    @classmethod
    def from_config(cls, config: TsNarrowConfig) -> "ResultCache":
        return cls(
            config.analysis.cache_dir,
            config.analysis.cache_ttl,
            enabled=config.analysis.cache_enabled,
        )

    def _entry_path(self, key: str) -> Path:
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}{ENTRY_SUFFIX}"

    def _read_entry(self, path: Path) -> dict:
        try:
            with open(path, encoding="utf-8") as f:
                entry = json.load(f)
        except (OSError, ValueError) as exc:
            raise CacheFailure(f"Unreadable cache entry {path.name}: {exc}") from exc
        if not isinstance(entry, dict) or "timestamp" not in entry or "data" not in entry:
            raise CacheFailure(f"Malformed cache entry {path.name}")
        return entry

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for *key*, or None on miss or expiry."""
        if not self.enabled:
            return None
        path = self._entry_path(key)
        if not path.is_file():
            return None
        try:
            entry = self._read_entry(path)
            if self.clock() - float(entry["timestamp"]) > self.ttl:
                path.unlink(missing_ok=True)
                log.debug("cache_expired", key=key)
                return None
        except (CacheFailure, OSError, TypeError, ValueError) as exc:
            log.warning("cache_read_failed", key=key, error=str(exc))
            return None
        log.debug("cache_hit", key=key)
        return entry["data"]

    def set(self, key: str, value: Any) -> None:
        """Persist *value* under *key*. Failures are logged, never raised."""
        if not self.enabled:
            return
        path = self._entry_path(key)
        entry = {"timestamp": self.clock(), "data": value}
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(entry, f)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            log.warning("cache_write_failed", key=key, error=str(exc))

    def clear(self) -> int:
        """Delete every cache entry. Returns the number removed."""
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.glob(f"*{ENTRY_SUFFIX}"):
            try:
                path.unlink()
                removed += 1
            except OSError as exc:
                log.warning("cache_clear_failed", entry=path.name, error=str(exc))
        log.info("cache_cleared", removed=removed, directory=str(self.directory))
        return removed
