from typing import List, Protocol

from ...schemas.settings.settings import Toast


class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def drain(self) -> List[Toast]:
        ...
