"""Syntax tree provider and node helpers."""

from tsnarrow.parsing.tree import SourceUnit, content_hash, language_for_path, parse_source

__all__ = ["SourceUnit", "content_hash", "language_for_path", "parse_source"]
