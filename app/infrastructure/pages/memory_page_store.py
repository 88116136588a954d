import logging
import threading
from collections import OrderedDict
from typing import Optional

from ...application.ports.settings_page_store import SettingsPageStore
from ...application.services.settings_page_service import SettingsPage
from ...exceptions import SettingsCapacityError

logger = logging.getLogger(__name__)


class InMemorySettingsPageStore(SettingsPageStore):
    """Process-local page store.

    A user who opens more than ``max_pages_per_user`` pages loses their own
    oldest one. Other users' pages are never evicted; once ``max_pages`` is
    reached new mounts are refused with SettingsCapacityError.
    """

    def __init__(self, max_pages: int = 1000, max_pages_per_user: int = 5) -> None:
        self._pages: "OrderedDict[str, SettingsPage]" = OrderedDict()
        self._lock = threading.Lock()
        self.max_pages = max_pages
        self.max_pages_per_user = max_pages_per_user

    def add(self, page: SettingsPage) -> None:
        with self._lock:
            own = [p.page_id for p in self._pages.values() if p.user_id == page.user_id]
            while own and len(own) >= self.max_pages_per_user:
                evicted_id = own.pop(0)
                del self._pages[evicted_id]
                logger.info(f"Evicted settings page {evicted_id} for user {page.user_id}")
            if len(self._pages) >= self.max_pages:
                logger.warning(f"Settings page store full ({self.max_pages}); refusing mount for user {page.user_id}")
                raise SettingsCapacityError()
            self._pages[page.page_id] = page

    def get(self, page_id: str) -> Optional[SettingsPage]:
        with self._lock:
            return self._pages.get(page_id)

    def remove(self, page_id: str) -> bool:
        with self._lock:
            return self._pages.pop(page_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
