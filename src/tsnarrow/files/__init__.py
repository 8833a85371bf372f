"""File access and discovery."""

from tsnarrow.files.accessor import FileAccessor
from tsnarrow.files.discovery import discover_files

__all__ = ["FileAccessor", "discover_files"]
