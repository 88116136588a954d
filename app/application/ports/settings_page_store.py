from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.settings_page_service import SettingsPage


class SettingsPageStore(Protocol):
    def add(self, page: "SettingsPage") -> None:
        """Store a page; raises SettingsCapacityError when no room is left."""
        ...

    def get(self, page_id: str) -> Optional["SettingsPage"]:
        ...

    def remove(self, page_id: str) -> bool:
        ...
