# src/clinicsync/utils/exception_handler.py
from fastapi import FastAPI, Request, HTTPException, status
from fastapi.responses import JSONResponse
from .logger import setup_logger
from .exceptions import ClinicSyncError, CascadeStepError

logger = setup_logger("EXCEPTION_HANDLER")


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(CascadeStepError)
    async def cascade_exception_handler(request: Request, exc: CascadeStepError):
        logger.warning(f"Cascade step failed: {exc.message}")
        primary_id = getattr(exc.primary, "id", None)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": exc.message,
                "type": exc.__class__.__name__,
                "status": exc.status_code,
                "step": exc.step,
                "primary_id": primary_id,
            },
        )

    @app.exception_handler(ClinicSyncError)
    async def clinic_sync_exception_handler(request: Request, exc: ClinicSyncError):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.__class__.__name__}: {exc.message}")
        else:
            logger.info(f"{exc.__class__.__name__}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": exc.message,
                "type": exc.__class__.__name__,
                "status": exc.status_code,
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        error_details = {
            status.HTTP_400_BAD_REQUEST: "Bad request",
            status.HTTP_404_NOT_FOUND: "Resource not found",
            status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
            status.HTTP_422_UNPROCESSABLE_ENTITY: "Validation error",
            status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
        }

        detail = exc.detail or error_details.get(exc.status_code, "An error occurred")

        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Not found: {detail}")
        else:
            logger.warning(f"HTTP Exception {exc.status_code}: {detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": detail,
                "type": "HTTPException",
                "status": exc.status_code,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "Internal server error",
                "type": "InternalServerError",
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            },
        )
