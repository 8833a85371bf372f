"""Load and validate configuration from .tsnarrow.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from tsnarrow.config.schema import (
    LOG_LEVELS,
    REPLACEMENT_CHOICES,
    AnalysisConfig,
    BatchConfig,
    FixConfig,
    LoggingConfig,
    RulesConfig,
    TsNarrowConfig,
)

CONFIG_FILENAME = ".tsnarrow.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(project_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = project_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: TsNarrowConfig) -> None:
    """Apply TSNARROW_* environment variable overrides. Bad values are ignored."""
    if val := os.environ.get("TSNARROW_DEFAULT_REPLACEMENT"):
        if val in REPLACEMENT_CHOICES:
            cfg.fix.default_replacement = val  # type: ignore[assignment]
    if val := os.environ.get("TSNARROW_CONCURRENCY"):
        try:
            n = int(val)
        except ValueError:
            n = 0
        if n > 0:
            cfg.batch.concurrency = n
    if val := os.environ.get("TSNARROW_CACHE_ENABLED"):
        if val.lower() in ("0", "false", "no"):
            cfg.analysis.cache_enabled = False
        elif val.lower() in ("1", "true", "yes"):
            cfg.analysis.cache_enabled = True
    if val := os.environ.get("TSNARROW_LOG_LEVEL"):
        if val.upper() in LOG_LEVELS:
            cfg.logging.level = val.upper()


def validate_config(cfg: TsNarrowConfig) -> None:
    """Raise ConfigError on values the analysis cannot run with."""
    if cfg.fix.default_replacement not in REPLACEMENT_CHOICES:
        raise ConfigError(
            f"fix.default_replacement must be one of {', '.join(REPLACEMENT_CHOICES)}"
        )
    if cfg.analysis.max_file_size_kb <= 0:
        raise ConfigError("analysis.max_file_size_kb must be positive")
    if cfg.analysis.cache_ttl <= 0:
        raise ConfigError("analysis.cache_ttl must be positive")
    if cfg.batch.concurrency <= 0:
        raise ConfigError("batch.concurrency must be positive")
    if cfg.batch.progress_interval_ms < 0:
        raise ConfigError("batch.progress_interval_ms must not be negative")
    if cfg.logging.level.upper() not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
    if cfg.logging.format not in ("console", "json"):
        raise ConfigError("logging.format must be 'console' or 'json'")


def load_config(
    project_root: Path,
    config_override: Optional[str] = None,
) -> TsNarrowConfig:
    """Load, validate, and return a TsNarrowConfig."""
    config_path = find_config_file(project_root, config_override)

    if config_path is None:
        cfg = TsNarrowConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = TsNarrowConfig(
                version=raw.get("version", "1.0"),
                analysis=_build_section(raw, AnalysisConfig, "analysis"),
                fix=_build_section(raw, FixConfig, "fix"),
                batch=_build_section(raw, BatchConfig, "batch"),
                rules=_build_section(raw, RulesConfig, "rules"),
                logging=_build_section(raw, LoggingConfig, "logging"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        validate_config(cfg)

    _merge_env_overrides(cfg)
    return cfg
