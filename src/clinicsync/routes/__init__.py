# src/clinicsync/routes/__init__.py
from .entities import collection_routers
from .finance import router as finance_router
from .data import router as data_router
from .settings import router as settings_router

__all__ = [
    "collection_routers",
    "finance_router",
    "data_router",
    "settings_router",
]
