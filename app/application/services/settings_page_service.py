import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..ports.account_service import AccountService
from ..ports.audit_logger import AuditLogger
from ..ports.notifier import Notifier
from ...exceptions import AccountNotFoundError, AccountServiceError, SettingsValidationError
from ...schemas.settings.fields import FieldSpec, lookup_field
from ...schemas.settings.settings import CustomerSettings, SettingUpdate, SettingValue

logger = logging.getLogger(__name__)

SAVE_SUCCESS = "Settings saved successfully!"
SAVE_FAILED = "Failed to save settings"
RESET_PASSWORD_SUCCESS = "Password reset email sent!"
RESET_PASSWORD_FAILED = "Failed to send password reset email"
EXPORT_SUCCESS = "Data export requested. You will receive an email shortly."
EXPORT_FAILED = "Failed to request data export"
DELETE_SUCCESS = "Account deletion requested. You will receive a confirmation email."
DELETE_FAILED = "Failed to process account deletion request"
DELETE_CONFIRM_PROMPT = "Are you sure you want to delete your account? This action cannot be undone."

# Nine digits covers every configured bound
_INT_TEXT = re.compile(r"^[+-]?[0-9]{1,9}$")
_ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def validate_setting(category: str, key: str, value: SettingValue) -> Tuple[FieldSpec, SettingValue]:
    """Check a single key/value against the field schema and return the coerced value."""
    spec = lookup_field(category, key)
    if spec is None:
        raise SettingsValidationError(f"Unknown setting '{key}' in category '{category}'")

    if spec.kind is bool:
        if not isinstance(value, bool):
            raise SettingsValidationError(f"'{key}' must be true or false")
        return spec, value

    if spec.kind is int:
        # Numeric text inputs submit strings; bools are never numbers here
        if isinstance(value, bool):
            raise SettingsValidationError(f"'{key}' must be a whole number")
        if isinstance(value, str):
            if not _INT_TEXT.match(value.strip()):
                raise SettingsValidationError(f"'{key}' must be a whole number")
            value = int(value.strip())
        if not isinstance(value, int):
            raise SettingsValidationError(f"'{key}' must be a whole number")
        if spec.min_value is not None and value < spec.min_value:
            raise SettingsValidationError(f"'{key}' must be at least {spec.min_value}")
        if spec.max_value is not None and value > spec.max_value:
            raise SettingsValidationError(f"'{key}' must be at most {spec.max_value}")
        return spec, value

    if not isinstance(value, str):
        raise SettingsValidationError(f"'{key}' must be text")
    if spec.choices and value not in spec.choice_values:
        raise SettingsValidationError(f"Invalid value for '{key}'. Must be one of: {list(spec.choice_values)}")
    if not value.strip():
        raise SettingsValidationError(f"'{key}' cannot be empty")
    if spec.iso_date:
        if not _ISO_DATE.match(value):
            raise SettingsValidationError(f"Invalid '{key}' format. Use YYYY-MM-DD")
        try:
            date.fromisoformat(value)
        except ValueError:
            raise SettingsValidationError(f"Invalid '{key}' format. Use YYYY-MM-DD")
    return spec, value


@dataclass
class ActionOutcome:
    ok: bool
    message: Optional[str] = None
    error: Optional[AccountServiceError] = None
    skipped: bool = False

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, AccountNotFoundError)


@dataclass
class SettingsPage:
    """State behind one mounted settings view."""
    user_id: str
    notifier: Notifier
    settings: CustomerSettings = field(default_factory=CustomerSettings)
    saved: CustomerSettings = field(default_factory=CustomerSettings)
    has_changes: bool = False
    page_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class SettingsPageService:
    accounts: AccountService
    audit: AuditLogger

    def mount(self, user_id: str, notifier: Notifier, seed: Optional[CustomerSettings] = None) -> SettingsPage:
        initial = seed or CustomerSettings()
        page = SettingsPage(user_id=user_id, notifier=notifier, settings=initial, saved=initial)
        logger.info(f"Mounted settings page {page.page_id} for user {user_id}")
        return page

    # Category updates

    def update_notifications(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "notifications", key, value)

    def update_booking(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "booking", key, value)

    def update_privacy(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "privacy", key, value)

    def update_preferences(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "preferences", key, value)

    def update_security(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "security", key, value)

    def update_loyalty(self, page: SettingsPage, key: str, value: SettingValue) -> CustomerSettings:
        return self._update(page, "loyalty", key, value)

    def apply(self, page: SettingsPage, update: SettingUpdate) -> CustomerSettings:
        handler = getattr(self, f"update_{update.category}", None)
        if handler is None:
            raise SettingsValidationError(f"Unknown settings category '{update.category}'")
        return handler(page, update.key, update.value)

    def _update(self, page: SettingsPage, category: str, key: str, value: SettingValue) -> CustomerSettings:
        spec, coerced = validate_setting(category, key, value)
        section = getattr(page.settings, category)
        page.settings = page.settings.model_copy(update={category: section.model_copy(update={spec.attr: coerced})})
        page.has_changes = True
        logger.debug(f"Page {page.page_id}: {category}.{key} set to {coerced!r}")
        return page.settings

    # Save / discard

    def save(self, page: SettingsPage) -> ActionOutcome:
        try:
            self.accounts.save_settings(page.user_id, page.settings)
        except AccountServiceError as e:
            logger.error(f"Error saving settings for user {page.user_id}: {e}")
            page.notifier.error(SAVE_FAILED)
            self.audit.log("settings.save", user_id=page.user_id, page_id=page.page_id, success=False, details={"error": str(e)})
            return ActionOutcome(ok=False, message=SAVE_FAILED, error=e)
        page.saved = page.settings
        page.has_changes = False
        page.notifier.success(SAVE_SUCCESS)
        self.audit.log("settings.save", user_id=page.user_id, page_id=page.page_id)
        return ActionOutcome(ok=True, message=SAVE_SUCCESS)

    def discard(self, page: SettingsPage) -> ActionOutcome:
        if not page.has_changes:
            return ActionOutcome(ok=True, skipped=True)
        page.settings = page.saved
        page.has_changes = False
        logger.info(f"Discarded pending changes on page {page.page_id}")
        return ActionOutcome(ok=True)

    # Side actions

    def reset_password(self, page: SettingsPage) -> ActionOutcome:
        return self._run_account_action(page, "account.reset_password", self.accounts.request_password_reset,
                                        RESET_PASSWORD_SUCCESS, RESET_PASSWORD_FAILED)

    def export_data(self, page: SettingsPage) -> ActionOutcome:
        return self._run_account_action(page, "account.export_data", self.accounts.request_data_export,
                                        EXPORT_SUCCESS, EXPORT_FAILED)

    def delete_account(self, page: SettingsPage, confirmed: bool) -> ActionOutcome:
        if not confirmed:
            logger.info(f"Account deletion declined on page {page.page_id}")
            return ActionOutcome(ok=False, skipped=True)
        return self._run_account_action(page, "account.delete", self.accounts.request_account_deletion,
                                        DELETE_SUCCESS, DELETE_FAILED)

    def _run_account_action(self, page: SettingsPage, action: str, call, success_message: str, failure_message: str) -> ActionOutcome:
        try:
            call(page.user_id)
        except AccountServiceError as e:
            logger.error(f"{action} failed for user {page.user_id}: {e}")
            page.notifier.error(failure_message)
            self.audit.log(action, user_id=page.user_id, page_id=page.page_id, success=False, details={"error": str(e)})
            return ActionOutcome(ok=False, message=failure_message, error=e)
        page.notifier.success(success_message)
        self.audit.log(action, user_id=page.user_id, page_id=page.page_id)
        return ActionOutcome(ok=True, message=success_message)
