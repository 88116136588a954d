from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, Optional


class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class SettingsValidationError(APIException):
    """Raised when an update names an unknown key or carries a bad value."""

    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)


class SettingsPersistenceError(APIException):
    def __init__(self, detail: str = "Failed to save settings"):
        super().__init__(status_code=502, detail=detail)


class SettingsAuthorizationError(APIException):
    def __init__(self, detail: str = "Not allowed to access this settings page"):
        super().__init__(status_code=403, detail=detail)


class SettingsNotFoundError(APIException):
    def __init__(self, detail: str = "Settings page not found"):
        super().__init__(status_code=404, detail=detail)


class SettingsCapacityError(APIException):
    def __init__(self, detail: str = "Too many open settings pages, try again later"):
        super().__init__(status_code=503, detail=detail)


# Collaborator failures. These never reach the client directly; the page
# service turns them into error toasts.
class AccountServiceError(Exception):
    pass


class AccountNotFoundError(AccountServiceError):
    pass


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

def create_success_response(data: Optional[Any]) -> dict:
    """Create a standardized success response"""
    return {
        "success": True,
        "data": data,
        "error": None
    }

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Authentication required", 401)
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )
