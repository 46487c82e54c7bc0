"""TaskNest: personal task tracking service (task lifecycle and optimistic client cache)."""

__version__ = "1.0.0"
