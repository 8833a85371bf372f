"""Syntax tree provider: tree-sitter with the TypeScript/TSX grammars.

The rest of the package only relies on node kind, parent, children, byte
span and text, so any recoverable parse (a tree with ERROR nodes) is usable.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

import tree_sitter
import tree_sitter_typescript

from tsnarrow.errors import ParseFailure

_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

# .ts files may contain <T>expr assertions that the TSX grammar rejects,
# so only JSX-capable extensions go through the TSX grammar.
_EXTENSION_LANGUAGES = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".jsx": "tsx",
    ".js": "tsx",
}


def content_hash(text: str) -> str:
    """Stable digest of a file's text, used as the cache-invalidation key."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def language_for_path(path: Union[str, Path]) -> str:
    return _EXTENSION_LANGUAGES.get(Path(path).suffix.lower(), "typescript")


@lru_cache(maxsize=None)
def get_language(name: str) -> tree_sitter.Language:
    try:
        return tree_sitter.Language(_GRAMMARS[name]())
    except KeyError as exc:
        raise ParseFailure(f"Unsupported language: {name}") from exc


@dataclass(frozen=True)
class SourceUnit:
    """One parsed file. Never mutated; a rewrite produces a new unit."""

    path: str
    text: str
    content_hash: str
    language: str
    tree: Any = field(repr=False, compare=False)
    error_count: int = 0
    data: bytes = field(default=b"", repr=False, compare=False)

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def char_offset(self, byte_offset: int) -> int:
        """Convert a tree-sitter byte offset into an index into ``text``."""
        if len(self.data) == len(self.text):
            return byte_offset
        return len(self.data[:byte_offset].decode("utf-8", errors="ignore"))


def _count_errors(root: Any) -> int:
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def parse_source(path: Union[str, Path], text: str, language: str | None = None) -> SourceUnit:
    """Parse *text* into a SourceUnit. Raises ParseFailure if no tree is produced."""
    lang = language or language_for_path(path)
    data = text.encode("utf-8")
    try:
        # Parser objects are not thread-safe; build one per call.
        parser = tree_sitter.Parser(get_language(lang))
        tree = parser.parse(data)
    except (ValueError, TypeError, RuntimeError) as exc:
        raise ParseFailure(f"Failed to parse {path}: {exc}") from exc

    if tree is None or tree.root_node is None:
        raise ParseFailure(f"Failed to parse {path}: no syntax tree produced")

    return SourceUnit(
        path=str(path),
        text=text,
        content_hash=content_hash(text),
        language=lang,
        tree=tree,
        error_count=_count_errors(tree.root_node),
        data=data,
    )
