import pytest
from fastapi.testclient import TestClient

from app.application.services.settings_page_service import SAVE_FAILED, SAVE_SUCCESS, SettingsPageService
from app.core.config import settings
from app.dependencies import get_page_service, get_page_store
from app.exceptions import AccountServiceError
from app.infrastructure.account.mock_account_service import MockAccountService
from app.infrastructure.audit.std_logger import StdAuditLogger
from app.infrastructure.pages.memory_page_store import InMemorySettingsPageStore
from app.main import app
from app.utils import create_jwt_token

BASE = "/customer/settings"


class FailingAccounts(MockAccountService):
    def save_settings(self, user_id, settings):
        raise AccountServiceError("backend rejected")


@pytest.fixture
def accounts():
    return MockAccountService()


@pytest.fixture
def client(monkeypatch, accounts):
    monkeypatch.setattr(settings, "SECRET_KEY", "test-secret")
    store = InMemorySettingsPageStore()
    service = SettingsPageService(accounts=accounts, audit=StdAuditLogger())
    app.dependency_overrides[get_page_store] = lambda: store
    app.dependency_overrides[get_page_service] = lambda: service
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


def auth(role="customer", user_id="user-1"):
    claims = {"sub": user_id}
    if role is not None:
        claims["role"] = role
    return {"Authorization": f"Bearer {create_jwt_token(claims)}"}


def mount(client, headers=None):
    res = client.post(f"{BASE}/pages", headers=headers or auth())
    assert res.status_code == 201
    return res.json()["view"]["page_id"]


def test_mount_without_token_redirects_to_login(client):
    res = client.post(f"{BASE}/pages")
    assert res.status_code == 303
    assert res.headers["location"] == "/login"
    assert "view" not in res.text


def test_mount_without_role_claim_redirects_to_login(client):
    res = client.post(f"{BASE}/pages", headers=auth(role=None))
    assert res.status_code == 303
    assert res.headers["location"] == "/login"


def test_mount_as_barber_redirects_to_barber_dashboard(client):
    res = client.post(f"{BASE}/pages", headers=auth(role="barber"))
    assert res.status_code == 303
    assert res.headers["location"] == "/barber/dashboard"


def test_mount_from_cookie(client):
    token = create_jwt_token({"sub": "user-1", "role": "customer"})
    client.cookies.set("access_token", token)
    res = client.post(f"{BASE}/pages")
    assert res.status_code == 201


def test_mount_renders_clean_page(client):
    res = client.post(f"{BASE}/pages", headers=auth())
    body = res.json()
    assert body["success"] is True
    assert body["view"]["can_save"] is False
    assert body["toasts"] == []


def test_update_reminder_timing_end_to_end(client):
    page_id = mount(client)
    before = client.get(f"{BASE}/pages/{page_id}/settings", headers=auth()).json()

    res = client.patch(f"{BASE}/pages/{page_id}/notifications", json={"key": "reminderTiming", "value": 2}, headers=auth())
    assert res.status_code == 200
    assert res.json()["view"]["has_changes"] is True

    after = client.get(f"{BASE}/pages/{page_id}/settings", headers=auth()).json()
    assert after["notifications"]["reminderTiming"] == 2
    before["notifications"]["reminderTiming"] = 2
    assert after == before


def test_tagged_update(client):
    page_id = mount(client)
    res = client.patch(f"{BASE}/pages/{page_id}",
                       json={"category": "booking", "key": "favoriteBarber", "value": "Alex Brown"},
                       headers=auth())
    assert res.status_code == 200
    current = client.get(f"{BASE}/pages/{page_id}/settings", headers=auth()).json()
    assert current["booking"]["favoriteBarber"] == "Alex Brown"


def test_invalid_value_returns_422_and_keeps_clean(client):
    page_id = mount(client)
    res = client.patch(f"{BASE}/pages/{page_id}/security", json={"key": "sessionTimeout", "value": "soon"}, headers=auth())
    assert res.status_code == 422
    assert res.json()["success"] is False
    view = client.get(f"{BASE}/pages/{page_id}", headers=auth()).json()["view"]
    assert view["has_changes"] is False


def test_save_clears_dirty_and_returns_toast(client, accounts):
    page_id = mount(client)
    client.patch(f"{BASE}/pages/{page_id}/loyalty", json={"key": "earnPoints", "value": False}, headers=auth())

    res = client.post(f"{BASE}/pages/{page_id}/save", headers=auth())

    body = res.json()
    assert res.status_code == 200
    assert body["view"]["has_changes"] is False
    assert body["toasts"] == [{"level": "success", "message": SAVE_SUCCESS}]
    assert accounts.saved["user-1"].loyalty.earn_points is False


def test_failed_save_returns_502_and_keeps_toast(client):
    app.dependency_overrides[get_page_service] = lambda: SettingsPageService(accounts=FailingAccounts(), audit=StdAuditLogger())
    page_id = mount(client)
    client.patch(f"{BASE}/pages/{page_id}/privacy", json={"key": "showProfileToBarbers", "value": False}, headers=auth())

    res = client.post(f"{BASE}/pages/{page_id}/save", headers=auth())
    assert res.status_code == 502
    assert res.json()["error"] == SAVE_FAILED

    toasts = client.get(f"{BASE}/pages/{page_id}/toasts", headers=auth()).json()["data"]
    assert toasts == [{"level": "error", "message": SAVE_FAILED}]
    view = client.get(f"{BASE}/pages/{page_id}", headers=auth()).json()["view"]
    assert view["has_changes"] is True


def test_delete_account_requires_confirmation(client, accounts):
    page_id = mount(client)
    res = client.post(f"{BASE}/pages/{page_id}/actions/delete-account", json={"confirmed": False}, headers=auth())
    assert res.status_code == 200
    assert res.json()["toasts"] == []
    assert accounts.requests == []

    res = client.post(f"{BASE}/pages/{page_id}/actions/delete-account", json={"confirmed": True}, headers=auth())
    assert res.json()["toasts"][0]["level"] == "success"
    assert accounts.requests == [("delete_account", "user-1")]


def test_reset_password_and_export(client, accounts):
    page_id = mount(client)
    client.post(f"{BASE}/pages/{page_id}/actions/reset-password", headers=auth())
    client.post(f"{BASE}/pages/{page_id}/actions/export-data", headers=auth())
    assert [r[0] for r in accounts.requests] == ["reset_password", "export_data"]


def test_other_user_cannot_touch_page(client):
    page_id = mount(client)
    res = client.get(f"{BASE}/pages/{page_id}", headers=auth(user_id="intruder"))
    assert res.status_code == 403


def test_page_requires_authentication(client):
    page_id = mount(client)
    res = client.get(f"{BASE}/pages/{page_id}")
    assert res.status_code == 401


def test_unmount_discards_page(client):
    page_id = mount(client)
    assert client.delete(f"{BASE}/pages/{page_id}", headers=auth()).status_code == 200
    assert client.get(f"{BASE}/pages/{page_id}", headers=auth()).status_code == 404


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_oversized_number_text_is_rejected_with_422(client):
    page_id = mount(client)
    res = client.patch(f"{BASE}/pages/{page_id}/notifications",
                       json={"key": "reminderTiming", "value": "9" * 5000}, headers=auth())
    assert res.status_code == 422
    assert res.json()["success"] is False


def test_other_users_mounts_do_not_evict_a_live_page(client):
    store = InMemorySettingsPageStore(max_pages=3, max_pages_per_user=5)
    app.dependency_overrides[get_page_store] = lambda: store
    mine = mount(client, headers=auth(user_id="alice"))
    client.patch(f"{BASE}/pages/{mine}/loyalty", json={"key": "earnPoints", "value": False},
                 headers=auth(user_id="alice"))

    statuses = [client.post(f"{BASE}/pages", headers=auth(user_id="bob")).status_code for _ in range(3)]

    assert statuses == [201, 201, 503]
    res = client.get(f"{BASE}/pages/{mine}", headers=auth(user_id="alice"))
    assert res.status_code == 200
    assert res.json()["view"]["has_changes"] is True


def test_unknown_role_claim_redirects_to_login(client):
    res = client.post(f"{BASE}/pages", headers=auth(role="/evil.example"))
    assert res.status_code == 303
    assert res.headers["location"] == "/login"
