"""Error taxonomy shared by every per-file operation.

Each error carries a short ``kind`` string so results can report failures
in a structured way instead of aborting the process.
"""

from __future__ import annotations

from typing import Dict


class TsNarrowError(Exception):
    """Base class for all expected, per-file failures."""

    kind = "error"

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": str(self)}


class FileNotFound(TsNarrowError):
    kind = "not_found"


class FileTooLarge(TsNarrowError):
    kind = "too_large"


class FileIOError(TsNarrowError):
    kind = "io_failure"


class ParseFailure(TsNarrowError):
    kind = "parse_failure"


class CacheFailure(TsNarrowError):
    """Raised inside the cache only; never escapes ``ResultCache``."""

    kind = "cache_failure"


class ComponentNotFound(TsNarrowError):
    kind = "component_not_found"

    def __init__(self, component: str) -> None:
        super().__init__(f"Component {component} not found in file")
        self.component = component


class RuleError(TsNarrowError):
    """Raised when a replacement rule is malformed."""

    kind = "invalid_rule"


class InvalidOption(TsNarrowError):
    """Raised when an operation is called with an unsupported option value."""

    kind = "invalid_option"
