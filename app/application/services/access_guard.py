from dataclasses import dataclass
from typing import Optional

from ...core.config import settings


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    role: Optional[str]


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    redirect_to: Optional[str] = None


def check_customer_access(context: Optional[SessionContext]) -> GuardDecision:
    """Decide whether the customer settings view may mount.

    Without a known role the user goes to the login page; any other known
    role is sent to its own dashboard. This is a navigation aid, not an
    authorization boundary.
    """
    if context is None or context.role not in settings.KNOWN_ROLES:
        return GuardDecision(allowed=False, redirect_to=settings.LOGIN_PATH)
    if context.role != settings.CUSTOMER_ROLE:
        return GuardDecision(allowed=False, redirect_to=f"/{context.role}/dashboard")
    return GuardDecision(allowed=True)
