"""Find source files for a batch run."""

from __future__ import annotations

import os
import re
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Sequence, Union

DEFAULT_PATTERN = "**/*.{ts,tsx}"

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` groups: ``*.{ts,tsx}`` -> ``['*.ts', '*.tsx']``."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def _matches(relpath: str, patterns: Iterable[str]) -> bool:
    # Patterns like "**/dist/**" need a leading separator to match at the root.
    candidate = "/" + relpath
    for pat in patterns:
        if fnmatch(candidate, pat) or fnmatch(relpath, pat):
            return True
        if pat.startswith("**/") and fnmatch(relpath, pat[3:]):
            return True
    return False


def is_ignored(relpath: str, ignore_patterns: Sequence[str]) -> bool:
    """True if *relpath* (or a directory on it) matches an ignore pattern."""
    if _matches(relpath, ignore_patterns):
        return True
    # "**/node_modules/**" must also prune the directory itself.
    return _matches(relpath + "/", ignore_patterns)


def discover_files(
    directory: Union[str, Path],
    pattern: str = DEFAULT_PATTERN,
    ignore_patterns: Sequence[str] = (),
) -> List[str]:
    """Return files under *directory* matching *pattern*, sorted."""
    root = Path(directory)
    patterns = expand_braces(pattern)
    found: List[str] = []

    for current, dirnames, filenames in os.walk(root):
        rel_dir = Path(current).relative_to(root).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir

        dirnames[:] = sorted(
            d for d in dirnames
            if not is_ignored(f"{rel_dir}/{d}" if rel_dir else d, ignore_patterns)
        )
        for name in filenames:
            rel = f"{rel_dir}/{name}" if rel_dir else name
            if is_ignored(rel, ignore_patterns):
                continue
            if _matches(rel, patterns):
                found.append(str(Path(current) / name))

    return sorted(found)
