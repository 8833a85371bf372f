"""File reading, writing and backups with a size ceiling."""

from __future__ import annotations

import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from tsnarrow.config.schema import TsNarrowConfig
from tsnarrow.errors import FileIOError, FileNotFound, FileTooLarge

PathLike = Union[str, Path]


def backup_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp safe for file names, e.g. ``2024-05-01T12-30-05-123Z``."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"


class FileAccessor:
    """Reads and writes source files for the analyzer.

    Text is read and written with ``newline=""`` so line endings survive a
    fix untouched.
    """

    def __init__(self, max_size_bytes: int, backup_dir: Optional[PathLike] = None) -> None:
        self.max_size_bytes = max_size_bytes
        self.backup_dir = Path(backup_dir) if backup_dir else None

    @classmethod
    def from_config(cls, config: TsNarrowConfig) -> "FileAccessor":
        return cls(config.analysis.max_file_size_kb * 1024, config.fix.backup_dir)

    def check_size(self, path: PathLike) -> int:
        p = Path(path)
        try:
            size = p.stat().st_size
        except FileNotFoundError as exc:
            raise FileNotFound(f"File not found: {p}") from exc
        except OSError as exc:
            raise FileIOError(f"Cannot stat {p}: {exc}") from exc
        if size > self.max_size_bytes:
            raise FileTooLarge(
                f"File {p} is {size} bytes, larger than the {self.max_size_bytes} byte limit"
            )
        return size

    def read(self, path: PathLike) -> str:
        p = Path(path)
        self.check_size(p)
        try:
            with open(p, encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise FileNotFound(f"File not found: {p}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FileIOError(f"Cannot read {p}: {exc}") from exc

    def write(self, path: PathLike, text: str) -> None:
        p = Path(path)
        try:
            with open(p, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as exc:
            raise FileIOError(f"Cannot write {p}: {exc}") from exc

    def backup(self, path: PathLike) -> Path:
        """Copy *path* to ``<name>.<timestamp>.bak``. Returns the backup path."""
        p = Path(path)
        directory = self.backup_dir or p.parent
        stem = f"{p.name}.{backup_timestamp()}"
        target = directory / f"{stem}.bak"
        counter = 1
        while target.exists():
            target = directory / f"{stem}-{counter}.bak"
            counter += 1
        try:
            directory.mkdir(parents=True, exist_ok=True)
            shutil.copy2(p, target)
        except OSError as exc:
            raise FileIOError(f"Cannot back up {p}: {exc}") from exc
        return target
