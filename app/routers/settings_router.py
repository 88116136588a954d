from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
import logging

from ..application.ports.settings_page_store import SettingsPageStore
from ..application.services.access_guard import SessionContext, check_customer_access
from ..application.services.settings_page_service import ActionOutcome, SettingsPage, SettingsPageService
from ..dependencies import get_audit_logger, get_page_service, get_page_store, get_session_context
from ..exceptions import (
    APIException,
    SettingsAuthorizationError,
    SettingsNotFoundError,
    SettingsPersistenceError,
    create_success_response,
)
from ..infrastructure.audit.std_logger import StdAuditLogger
from ..infrastructure.notifications.toast_notifier import ToastQueueNotifier
from ..schemas.settings.settings import (
    CategoryUpdateRequest,
    CustomerSettings,
    DeleteAccountRequest,
    PageResponse,
    SettingUpdate,
    SettingsCategory,
)
from ..views.settings_view import render_settings_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customer/settings", tags=["Customer Settings"])


def _load_page(page_id: str, context: Optional[SessionContext], store: SettingsPageStore) -> SettingsPage:
    if context is None:
        raise APIException(status_code=401, detail="Authentication required")
    page = store.get(page_id)
    if page is None:
        raise SettingsNotFoundError()
    if page.user_id != context.user_id:
        logger.warning(f"User {context.user_id} tried to access page {page_id} owned by another user")
        raise SettingsAuthorizationError()
    return page


def _respond(page: SettingsPage) -> PageResponse:
    return PageResponse(view=render_settings_page(page), toasts=page.notifier.drain())


def _raise_for_outcome(outcome: ActionOutcome) -> None:
    # Toasts stay queued so the client can still drain them
    if outcome.ok or outcome.skipped:
        return
    if outcome.not_found:
        raise SettingsNotFoundError(outcome.message or "Account not found")
    raise SettingsPersistenceError(outcome.message or "Account service unavailable")


@router.post("/pages", response_model=PageResponse, status_code=201)
def mount_page(
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
    audit: StdAuditLogger = Depends(get_audit_logger),
):
    decision = check_customer_access(context)
    if not decision.allowed:
        audit.log("settings.guard_redirect", user_id=context.user_id if context else None,
                  success=False, details={"redirect_to": decision.redirect_to})
        return RedirectResponse(url=decision.redirect_to, status_code=303)
    page = service.mount(context.user_id, ToastQueueNotifier())
    store.add(page)
    return _respond(page)


@router.get("/pages/{page_id}", response_model=PageResponse)
def get_page(page_id: str, context: Optional[SessionContext] = Depends(get_session_context), store: SettingsPageStore = Depends(get_page_store)):
    page = _load_page(page_id, context, store)
    return _respond(page)


@router.get("/pages/{page_id}/settings", response_model=CustomerSettings)
def get_page_settings(page_id: str, context: Optional[SessionContext] = Depends(get_session_context), store: SettingsPageStore = Depends(get_page_store)):
    page = _load_page(page_id, context, store)
    return page.settings


@router.patch("/pages/{page_id}", response_model=PageResponse)
def apply_update(
    page_id: str,
    update: SettingUpdate,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    service.apply(page, update)
    return _respond(page)


@router.patch("/pages/{page_id}/{category}", response_model=PageResponse)
def update_category(
    page_id: str,
    category: SettingsCategory,
    body: CategoryUpdateRequest,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    service.apply(page, SettingUpdate(category=category, key=body.key, value=body.value))
    return _respond(page)


@router.post("/pages/{page_id}/save", response_model=PageResponse)
def save_page(
    page_id: str,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    _raise_for_outcome(service.save(page))
    return _respond(page)


@router.post("/pages/{page_id}/discard", response_model=PageResponse)
def discard_page(
    page_id: str,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    service.discard(page)
    return _respond(page)


@router.post("/pages/{page_id}/actions/reset-password", response_model=PageResponse)
def reset_password(
    page_id: str,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    _raise_for_outcome(service.reset_password(page))
    return _respond(page)


@router.post("/pages/{page_id}/actions/export-data", response_model=PageResponse)
def export_data(
    page_id: str,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    _raise_for_outcome(service.export_data(page))
    return _respond(page)


@router.post("/pages/{page_id}/actions/delete-account", response_model=PageResponse)
def delete_account(
    page_id: str,
    body: DeleteAccountRequest,
    context: Optional[SessionContext] = Depends(get_session_context),
    store: SettingsPageStore = Depends(get_page_store),
    service: SettingsPageService = Depends(get_page_service),
):
    page = _load_page(page_id, context, store)
    _raise_for_outcome(service.delete_account(page, body.confirmed))
    return _respond(page)


@router.get("/pages/{page_id}/toasts")
def drain_toasts(page_id: str, context: Optional[SessionContext] = Depends(get_session_context), store: SettingsPageStore = Depends(get_page_store)):
    page = _load_page(page_id, context, store)
    return create_success_response([t.model_dump() for t in page.notifier.drain()])


@router.delete("/pages/{page_id}")
def unmount_page(page_id: str, context: Optional[SessionContext] = Depends(get_session_context), store: SettingsPageStore = Depends(get_page_store)):
    _load_page(page_id, context, store)
    store.remove(page_id)
    logger.info(f"Unmounted settings page {page_id}")
    return {"success": True, "message": "Settings page closed"}
