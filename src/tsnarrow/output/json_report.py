"""JSON reporter for scripting and CI."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict

from tsnarrow.analysis.models import AnalysisResult, FixResult
from tsnarrow.batch.models import BatchResult
from tsnarrow.props.models import InterfaceResult


def analysis_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    return {**result.to_dict(), "from_cache": result.from_cache}


def fix_to_dict(result: FixResult) -> Dict[str, Any]:
    return {
        "file_path": result.file_path,
        "changes": [asdict(c) for c in result.changes],
        "total_changes": result.total,
        "applied": result.applied,
        "dry_run": result.dry_run,
        "backup_created": result.backup_created,
        "backup_path": result.backup_path,
        "success": result.success,
        "error": result.error,
    }


def batch_to_dict(result: BatchResult) -> Dict[str, Any]:
    results = []
    for item in result.results:
        if isinstance(item, FixResult):
            results.append(fix_to_dict(item))
        else:
            results.append(analysis_to_dict(item))
    return {
        "operation": result.operation,
        "success": result.success,
        "total_files": result.total,
        "processed_files": result.processed,
        "successful_files": result.succeeded,
        "failed_files": result.failed,
        "errors": result.errors,
        "results": results,
        "progress": result.progress_message,
    }


def to_dict(result: Any) -> Dict[str, Any]:
    """Convert any operation result to a JSON-serialisable dict."""
    if isinstance(result, BatchResult):
        return batch_to_dict(result)
    if isinstance(result, FixResult):
        return fix_to_dict(result)
    if isinstance(result, InterfaceResult):
        return result.to_dict()
    return analysis_to_dict(result)


def render(result: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
