"""Core: config and application bootstrap.

Single place for settings and app wiring (handlers, lifespan, limiter).
"""

from tasknest.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
