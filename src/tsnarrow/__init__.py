"""tsnarrow — find TypeScript ``any`` annotations and narrow them."""

__version__ = "0.3.0"
