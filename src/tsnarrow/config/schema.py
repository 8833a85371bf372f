"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

ReplacementType = Literal["unknown", "Record<string, unknown>", "object"]

REPLACEMENT_CHOICES: tuple[str, ...] = ("unknown", "Record<string, unknown>", "object")

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def _default_cache_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "tsnarrow-cache")


def _default_concurrency() -> int:
    return os.cpu_count() or 1


@dataclass
class AnalysisConfig:
    max_file_size_kb: int = 10 * 1024
    cache_enabled: bool = True
    cache_dir: str = field(default_factory=_default_cache_dir)
    cache_ttl: int = 3600  # seconds
    ignore_patterns: List[str] = field(
        default_factory=lambda: ["**/node_modules/**", "**/dist/**", "**/build/**"]
    )


@dataclass
class FixConfig:
    default_replacement: ReplacementType = "unknown"
    create_backups: bool = True
    backup_dir: Optional[str] = None  # None = next to the fixed file


@dataclass
class BatchConfig:
    concurrency: int = field(default_factory=_default_concurrency)
    progress_reporting: bool = True
    progress_interval_ms: int = 200


@dataclass
class RulesConfig:
    disable: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: Literal["console", "json"] = "console"


@dataclass
class TsNarrowConfig:
    version: str = "1.0"
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    fix: FixConfig = field(default_factory=FixConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
