"""Replacement rule model: pattern stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from tsnarrow.errors import RuleError

ESCAPE_HATCH_RE = re.compile(r"\bany\b")


@dataclass(frozen=True)
class ReplacementRule:
    """One entry of the replacement table.

    ``pattern`` is a regex tested with ``fullmatch`` against a surface pattern
    such as ``data: any`` or ``items: any[]``. ``replacement`` is the type text
    that takes the annotation's place. ``usage`` and ``parent_kind`` are
    optional context constraints; ``None`` matches any context.
    """

    id: str
    pattern: str
    replacement: str
    description: str = ""
    usage: Optional[str] = None
    parent_kind: Optional[str] = None

    compiled_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if ESCAPE_HATCH_RE.search(self.replacement):
            raise RuleError(f"Rule {self.id} proposes 'any' as its own replacement")
        try:
            compiled = re.compile(self.pattern)
        except re.error as exc:
            raise RuleError(f"Rule {self.id} has an invalid pattern: {exc}") from exc
        object.__setattr__(self, "compiled_pattern", compiled)

    def matches(self, surface: str, *, usage: str, parent_kind: Optional[str]) -> bool:
        if self.compiled_pattern.fullmatch(surface) is None:
            return False
        if self.parent_kind is not None and self.parent_kind != parent_kind:
            return False
        if self.usage is not None and self.usage != usage:
            return False
        return True
