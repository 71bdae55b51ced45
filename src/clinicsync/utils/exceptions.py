# src/clinicsync/utils/exceptions.py
from logging import Logger
from typing import Any, Iterable, Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from .logger import setup_logger

logger = setup_logger("EXCEPTIONS")


class ClinicSyncError(Exception):
    """Base class for every error raised by the synchronization core"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RemoteWriteError(ClinicSyncError):
    """A single table write was rejected by the remote store"""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, table: str, operation: str, message: str):
        super().__init__(f"Failed to {operation} {table}: {message}")
        self.table = table
        self.operation = operation


class RemoteReadError(ClinicSyncError):
    """Reading one or more tables from the remote store failed"""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, tables: Iterable[str], message: str):
        self.tables = list(tables)
        super().__init__(f"Failed to read {', '.join(self.tables)}: {message}")


class CascadeStepError(ClinicSyncError):
    """A derived write failed after its primary write was committed"""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, step: str, primary: Any, cause: Exception):
        message = getattr(cause, "message", str(cause))
        super().__init__(f"Cascade step '{step}' failed: {message}")
        self.step = step
        self.primary = primary
        self.cause = cause


class InvalidEntityError(ClinicSyncError):
    """Input failed the advisory validation done before a write"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class EntityNotFoundError(ClinicSyncError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[str]):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity_id = entity_id


class EntityInUseError(ClinicSyncError):
    """Deleting the entity would leave references dangling"""

    status_code = status.HTTP_409_CONFLICT


class BaseAPIException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: Any = None,
        headers: Optional[dict] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class BadRequestException(BaseAPIException):
    def __init__(self, detail: str = "Bad Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundException(BaseAPIException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


async def handle_db_exception(
    db: AsyncSession,
    logger: Logger,
    table: str,
    operation: str,
    exception: Exception,
):
    """Roll back, log and re-raise a database failure as a RemoteWriteError"""
    await db.rollback()
    logger.error(
        f"Database error during {operation} on {table}: {str(exception)}",
        exc_info=True,
    )
    raise RemoteWriteError(table, operation, str(exception)) from exception
