"""Content-addressed analysis cache."""

from tsnarrow.cache.store import ResultCache

__all__ = ["ResultCache"]
