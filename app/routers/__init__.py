# Routers package
from . import settings_router

__all__ = [
    "settings_router",
]
