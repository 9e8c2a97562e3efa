"""Notifier that writes user-facing messages to the log.

The HTTP service has no UI of its own; the editor plugin tails the log
or shows the status message from the response instead.
"""

import logging

logger = logging.getLogger("code_echo.notifications")


class LoggingNotifier:
    """Notifier protocol implementation backed by logging."""

    def notify_error(self, message: str) -> None:
        logger.error("CodeEcho: %s", message)

    def notify_info(self, message: str) -> None:
        logger.info("CodeEcho: %s", message)
