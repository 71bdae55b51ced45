# src/clinicsync/main.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import uvicorn as uv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from clinicsync import __version__
from clinicsync.core.config import settings
from clinicsync.db.database import (
    AsyncSessionLocal,
    check_db_connection,
    create_tables,
    disconnect_db,
)
from clinicsync.db.remote_store import RemoteStore
from clinicsync.routes import (
    collection_routers,
    data_router,
    finance_router,
    settings_router,
)
from clinicsync.services.clinic_data_service import ClinicDataRegistry
from clinicsync.services.settings_service import SettingsStore
from clinicsync.utils.exception_handler import setup_exception_handlers
from clinicsync.utils.logger import setup_logger

# Quiet the server's own loggers
for log in ["watchfiles", "uvicorn.error", "uvicorn.access", "uvicorn.asgi"]:
    logging.getLogger(log).setLevel(logging.WARNING)

logger = setup_logger("SERVER")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting clinic data service...")

    try:
        await create_tables()
        if await check_db_connection():
            logger.info("Database connection verified")

        logger.info("Application startup complete")
        yield

    except Exception as e:
        logger.error(f"Startup failed: {str(e)}")
        raise
    finally:
        logger.info("Closing database connection")
        await disconnect_db()
        logger.info("Shutting down application...")


def create_app(
    remote: Optional[RemoteStore] = None,
    settings_store: Optional[SettingsStore] = None,
    use_lifespan: bool = True,
) -> FastAPI:
    """Build the API around a remote store and a local settings file"""
    app = FastAPI(
        title="Clinic Sync",
        description="Clinic data synchronization and financial reconciliation",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    )

    app.state.registry = ClinicDataRegistry(remote or RemoteStore(AsyncSessionLocal))
    app.state.settings_store = settings_store or SettingsStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    for router in collection_routers:
        app.include_router(router, prefix=settings.API_PREFIX)
    app.include_router(finance_router, prefix=settings.API_PREFIX)
    app.include_router(data_router, prefix=settings.API_PREFIX)
    app.include_router(settings_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["health"])
    async def root():
        return {
            "message": "Clinic Sync API",
            "version": __version__,
            "status": "healthy",
        }

    return app


app = create_app()


if __name__ == "__main__":
    uv.run(
        "clinicsync.main:app",
        host=settings.UVICORN_HOST,
        port=settings.UVICORN_PORT,
        reload=settings.RELOAD,
        workers=settings.WORKERS_COUNT,
        log_level="info",
    )
