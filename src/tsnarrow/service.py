"""Operation surface — analyze, fix, generate interfaces, batch, clear cache.

Every per-file operation returns a result object with ``success`` and
``error`` instead of raising, so callers (the CLI, the batch driver) can
report partial failure.
"""

from __future__ import annotations

import hashlib
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from tsnarrow.analysis.engine import find_occurrences
from tsnarrow.analysis.fixer import apply_changes, plan_changes
from tsnarrow.analysis.models import AnalysisResult, FixResult
from tsnarrow.batch.driver import run_batch
from tsnarrow.batch.models import BatchResult
from tsnarrow.batch.progress import ProgressCallback
from tsnarrow.cache.store import ResultCache
from tsnarrow.config.schema import REPLACEMENT_CHOICES, TsNarrowConfig
from tsnarrow.errors import InvalidOption, TsNarrowError
from tsnarrow.files.accessor import FileAccessor
from tsnarrow.logging import get_logger
from tsnarrow.parsing.tree import content_hash, parse_source
from tsnarrow.props.extractor import PropExtractor
from tsnarrow.props.models import InterfaceResult
from tsnarrow.props.render import render_interface
from tsnarrow.rules.registry import RuleRegistry, build_registry

log = get_logger("analyzer")

PathLike = Union[str, Path]


def settings_fingerprint(default_replacement: str, registry: RuleRegistry) -> str:
    """Digest of every setting that changes an analysis result."""
    return hashlib.md5(
        f"{default_replacement}\x1f{registry.fingerprint()}".encode("utf-8")
    ).hexdigest()


def analysis_cache_key(path: PathLike, digest: str, settings: str) -> str:
    return f"analysis:{Path(path).resolve()}:{digest}:{settings}"


class Analyzer:
    """Stateless per call apart from the cache; safe to share across threads."""

    def __init__(
        self,
        config: TsNarrowConfig,
        cache: Optional[ResultCache] = None,
        files: Optional[FileAccessor] = None,
        registry: Optional[RuleRegistry] = None,
        *,
        project_root: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else ResultCache.from_config(config)
        self.files = files if files is not None else FileAccessor.from_config(config)
        self.registry = registry if registry is not None else build_registry(config, project_root)

    # ---- analyze ----

    def analyze(self, path: PathLike, *, use_cache: bool = True) -> AnalysisResult:
        start = time.perf_counter()
        try:
            text = self.files.read(path)
            default = self.config.fix.default_replacement
            key = analysis_cache_key(
                path, content_hash(text), settings_fingerprint(default, self.registry)
            )

            if use_cache:
                cached = self.cache.get(key)
                if cached is not None:
                    try:
                        result = AnalysisResult.from_dict(cached)
                    except (KeyError, TypeError, ValueError) as exc:
                        log.warning("cache_entry_invalid", path=str(path), error=str(exc))
                    else:
                        result.file_path = str(path)
                        result.from_cache = True
                        return result

            unit = parse_source(path, text)
            result = AnalysisResult(
                file_path=str(path),
                content_hash=unit.content_hash,
                occurrences=find_occurrences(unit, self.registry, default),
            )
        except TsNarrowError as exc:
            log.warning("analysis_failed", path=str(path), kind=exc.kind, error=str(exc))
            return AnalysisResult(file_path=str(path), success=False, error=exc.to_dict())

        self.cache.set(key, result.to_dict())
        log.info(
            "file_analyzed",
            path=str(path),
            occurrences=result.total,
            parse_errors=unit.error_count,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return result

    # ---- fix ----

    def fix(
        self,
        path: PathLike,
        *,
        replacement_default: Optional[str] = None,
        dry_run: bool = False,
        backup: Optional[bool] = None,
    ) -> FixResult:
        """Rewrite every ``any`` in *path*. Dry runs never touch the disk."""
        default = replacement_default or self.config.fix.default_replacement
        make_backup = self.config.fix.create_backups if backup is None else backup

        try:
            if default not in REPLACEMENT_CHOICES:
                raise InvalidOption(
                    f"replacement_default must be one of {', '.join(REPLACEMENT_CHOICES)}"
                )
            # Fix never reads from the cache.
            text = self.files.read(path)
            unit = parse_source(path, text)
            changes = plan_changes(find_occurrences(unit, self.registry, default), text)
            result = FixResult(file_path=str(path), changes=changes, dry_run=dry_run)
            if dry_run or not changes:
                return result

            if make_backup:
                result.backup_path = str(self.files.backup(path))
            self.files.write(path, apply_changes(text, changes))
            result.applied = True
        except TsNarrowError as exc:
            log.warning("fix_failed", path=str(path), kind=exc.kind, error=str(exc))
            return FixResult(
                file_path=str(path), dry_run=dry_run, success=False, error=exc.to_dict()
            )

        log.info(
            "file_fixed",
            path=str(path),
            changes=result.total,
            backup=result.backup_path,
        )
        return result

    # ---- interfaces ----

    def generate_interface(
        self,
        path: PathLike,
        component: str,
        output_path: Optional[PathLike] = None,
    ) -> InterfaceResult:
        try:
            unit = parse_source(path, self.files.read(path))
            extracted = PropExtractor(unit).extract(component)
            text = render_interface(component, extracted.props)
            if output_path is not None:
                self.files.write(output_path, text)
        except TsNarrowError as exc:
            log.warning(
                "interface_failed",
                path=str(path),
                component=component,
                kind=exc.kind,
                error=str(exc),
            )
            return InterfaceResult(
                component=component, file_path=str(path), success=False, error=exc.to_dict()
            )

        log.info(
            "interface_generated",
            path=str(path),
            component=component,
            props=len(extracted.props),
        )
        return InterfaceResult(
            component=component,
            component_kind=extracted.kind,
            props=extracted.props,
            interface_text=text,
            file_path=str(path),
            output_path=str(output_path) if output_path is not None else None,
        )

    # ---- batch & cache ----

    def batch(
        self,
        files: Sequence[str],
        operation: str,
        *,
        replacement_default: Optional[str] = None,
        dry_run: bool = False,
        concurrency: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        return run_batch(
            self,
            files,
            operation,
            replacement_default=replacement_default,
            dry_run=dry_run,
            concurrency=concurrency,
            on_progress=on_progress,
        )

    def clear_cache(self) -> int:
        return self.cache.clear()
