"""User-facing notifications emitted by the task cache (toasts in a UI)."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Sink for success and error messages shown to the user."""

    def success(self, message: str) -> None:
        """Report a confirmed change."""

    def error(self, message: str) -> None:
        """Report a failed or rejected change."""


class LoggingNotifier:
    """Default notifier: writes messages to the log."""

    def success(self, message: str) -> None:
        logger.info("%s", message)

    def error(self, message: str) -> None:
        logger.warning("%s", message)
