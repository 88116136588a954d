import logging
from typing import Dict, List, Tuple

from ...application.ports.account_service import AccountService
from ...schemas.settings.settings import CustomerSettings

logger = logging.getLogger(__name__)


class MockAccountService(AccountService):
    """In-memory account service: records requests, never fails.

    Nothing leaves the process; no email is sent and no account is deleted.
    """

    def __init__(self) -> None:
        self.saved: Dict[str, CustomerSettings] = {}
        self.requests: List[Tuple[str, str]] = []

    def save_settings(self, user_id: str, settings: CustomerSettings) -> None:
        self.saved[user_id] = settings
        logger.info(f"Stored settings for user {user_id}")

    def request_password_reset(self, user_id: str) -> None:
        self.requests.append(("reset_password", user_id))
        logger.info(f"Password reset requested for user {user_id}")

    def request_data_export(self, user_id: str) -> None:
        self.requests.append(("export_data", user_id))
        logger.info(f"Data export requested for user {user_id}")

    def request_account_deletion(self, user_id: str) -> None:
        self.requests.append(("delete_account", user_id))
        logger.info(f"Account deletion requested for user {user_id}")
