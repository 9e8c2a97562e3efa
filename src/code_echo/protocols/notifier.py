"""Notifier protocol.

User-visible notifications are owned by the editor integration. The core
only reports transport failures that survived every retry.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Protocol for surfacing errors to the user."""

    def notify_error(self, message: str) -> None:
        """Show an error message to the user."""
        ...

    def notify_info(self, message: str) -> None:
        """Show an informational message to the user."""
        ...
