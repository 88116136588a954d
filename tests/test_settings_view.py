from app.application.services.settings_page_service import DELETE_CONFIRM_PROMPT, SettingsPageService
from app.infrastructure.account.mock_account_service import MockAccountService
from app.infrastructure.audit.std_logger import StdAuditLogger
from app.infrastructure.notifications.toast_notifier import ToastQueueNotifier
from app.views.settings_view import render_settings_page


def mounted():
    svc = SettingsPageService(accounts=MockAccountService(), audit=StdAuditLogger())
    return svc, svc.mount("u1", ToastQueueNotifier())


def sections(view):
    return {s.id: s for s in view.sections}


def test_renders_one_section_per_category_plus_account():
    _, page = mounted()
    view = render_settings_page(page)
    assert [s.id for s in view.sections] == [
        "notifications", "booking", "privacy", "preferences", "loyalty", "security", "account",
    ]
    assert view.has_changes is False
    assert view.can_save is False


def test_controls_bind_values_and_kinds():
    _, page = mounted()
    by_id = sections(render_settings_page(page))
    notif = {c.key: c for c in by_id["notifications"].controls}
    assert notif["reminderTiming"].control == "number"
    assert notif["reminderTiming"].value == 24
    assert notif["emailNotifications"].control == "toggle"

    booking = {c.key: c for c in by_id["booking"].controls}
    assert booking["favoriteBarber"].control == "select"
    assert {"value": "any", "label": "No preference"} in booking["favoriteBarber"].options
    assert booking["preferredBookingTime"].value == "afternoon"


def test_preferences_are_read_only_with_labels():
    _, page = mounted()
    prefs = {c.key: c for c in sections(render_settings_page(page))["preferences"].controls}
    assert all(c.control == "readonly" for c in prefs.values())
    assert prefs["currency"].value == "Real (BRL)"
    assert prefs["language"].value == "Português (Brasil)"
    assert prefs["timezone"].value == "America/Sao_Paulo"


def test_security_shows_password_age_and_reset_action():
    _, page = mounted()
    security = sections(render_settings_page(page))["security"]
    assert "passwordLastChanged" not in [c.key for c in security.controls]
    assert security.actions[0].action == "reset-password"
    assert security.actions[0].description == "Last changed: 2023-05-15"


def test_delete_action_carries_confirmation_prompt():
    _, page = mounted()
    account = sections(render_settings_page(page))["account"]
    delete = next(a for a in account.actions if a.action == "delete-account")
    assert delete.danger is True
    assert delete.confirm_prompt == DELETE_CONFIRM_PROMPT


def test_dirty_page_exposes_save():
    svc, page = mounted()
    svc.update_notifications(page, "reminderTiming", 2)
    view = render_settings_page(page)
    assert view.can_save is True
    notif = {c.key: c for c in sections(view)["notifications"].controls}
    assert notif["reminderTiming"].value == 2
