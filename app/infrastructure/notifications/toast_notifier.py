import logging
from typing import List

from ...application.ports.notifier import Notifier
from ...schemas.settings.settings import Toast

logger = logging.getLogger(__name__)


class ToastQueueNotifier(Notifier):
    """Queues toasts for a page until the client drains them."""

    def __init__(self) -> None:
        self._pending: List[Toast] = []

    def success(self, message: str) -> None:
        self._pending.append(Toast(level="success", message=message))

    def error(self, message: str) -> None:
        logger.warning(f"Error toast: {message}")
        self._pending.append(Toast(level="error", message=message))

    def drain(self) -> List[Toast]:
        toasts, self._pending = self._pending, []
        return toasts
