import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .application.services.access_guard import SessionContext
from .application.services.settings_page_service import SettingsPageService
from .application.ports.settings_page_store import SettingsPageStore
from .infrastructure.account.mock_account_service import MockAccountService
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.pages.memory_page_store import InMemorySettingsPageStore
from .core.config import settings
from .utils import decode_jwt_token

logger = logging.getLogger(__name__)

# Auth scheme
oauth2_scheme = HTTPBearer(auto_error=False)

_page_store = InMemorySettingsPageStore(max_pages=settings.MAX_PAGES, max_pages_per_user=settings.MAX_PAGES_PER_USER)
_audit = StdAuditLogger()
_page_service = SettingsPageService(accounts=MockAccountService(), audit=_audit)


def get_session_context(request: Request, credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme)) -> Optional[SessionContext]:
    """Resolve the caller's session from a bearer token or the access_token cookie.

    Returns None when there is no usable token; the access guard decides what
    that means.
    """
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get("access_token")
    if not token:
        return None
    payload = decode_jwt_token(token)
    if not payload:
        logger.warning("JWT token decode failed - invalid or expired token")
        return None
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing user ID")
        return None
    return SessionContext(user_id=str(user_id), role=payload.get("role"))


def get_page_store() -> SettingsPageStore:
    return _page_store


def get_page_service() -> SettingsPageService:
    return _page_service


def get_audit_logger() -> StdAuditLogger:
    return _audit
