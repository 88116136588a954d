from typing import Protocol

from ...schemas.settings.settings import CustomerSettings


class AccountService(Protocol):
    """Account-management collaborator.

    Implementations raise AccountServiceError (or AccountNotFoundError) on
    failure and return None on success.
    """

    def save_settings(self, user_id: str, settings: CustomerSettings) -> None:
        ...

    def request_password_reset(self, user_id: str) -> None:
        ...

    def request_data_export(self, user_id: str) -> None:
        ...

    def request_account_deletion(self, user_id: str) -> None:
        ...
