# src/clinicsync/db/remote_store.py
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from clinicsync.models import TABLE_MODELS
from clinicsync.core.entity_types import EntityType
from clinicsync.utils.logger import setup_logger
from clinicsync.utils.exceptions import RemoteReadError, RemoteWriteError, handle_db_exception

logger = setup_logger("REMOTE_STORE")


def row_to_record(row: Any) -> Dict[str, Any]:
    """Flatten an ORM row into a storage record"""
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class RemoteStore:
    """Remote persistence contract over an async SQLAlchemy engine

    Every row is scoped by its owning session (``user_id``). Each call opens
    its own session; nothing spans more than one table write.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _model(table: str):
        return TABLE_MODELS[EntityType(table)]

    def _known_columns(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        columns = self._model(table).__table__.columns.keys()
        unknown = set(values) - set(columns)
        if unknown:
            logger.debug(f"Dropping unknown columns for {table}: {sorted(unknown)}")
        return {k: v for k, v in values.items() if k in columns}

    async def select_all(self, table: str, owner_id: str) -> List[Dict[str, Any]]:
        model = self._model(table)
        async with self.session_factory() as db:
            try:
                result = await db.execute(select(model).where(model.user_id == owner_id))
                return [row_to_record(row) for row in result.scalars().all()]
            except SQLAlchemyError as e:
                logger.error(f"Failed to read {table}: {str(e)}", exc_info=True)
                raise RemoteReadError([table], str(e)) from e

    async def select_one(
        self, table: str, owner_id: str, entity_id: str
    ) -> Optional[Dict[str, Any]]:
        model = self._model(table)
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    select(model).where(model.id == entity_id, model.user_id == owner_id)
                )
                row = result.scalar_one_or_none()
                return row_to_record(row) if row is not None else None
            except SQLAlchemyError as e:
                logger.error(f"Failed to read {table} {entity_id}: {str(e)}", exc_info=True)
                raise RemoteReadError([table], str(e)) from e

    async def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored"""
        model = self._model(table)
        async with self.session_factory() as db:
            try:
                db_obj = model(**self._known_columns(table, values))
                logger.debug(f"Inserting into {table}: {values}")

                db.add(db_obj)
                await db.flush()
                await db.commit()
                await db.refresh(db_obj)

                logger.info(f"Inserted {table} row with ID: {db_obj.id}")
                return row_to_record(db_obj)
            except SQLAlchemyError as e:
                await handle_db_exception(db, logger, table, "insert", e)

    async def update(
        self, table: str, owner_id: str, entity_id: str, values: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Overwrite the mutable columns of one row; a missing row is a rejected write"""
        model = self._model(table)
        values = self._known_columns(table, values)
        for read_only in ("id", "user_id", "created_at", "updated_at"):
            values.pop(read_only, None)

        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    select(model).where(model.id == entity_id, model.user_id == owner_id)
                )
                db_obj = result.scalar_one_or_none()
                if db_obj is None:
                    raise RemoteWriteError(table, "update", f"no row with ID {entity_id}")

                for column, value in values.items():
                    setattr(db_obj, column, value)

                await db.commit()
                await db.refresh(db_obj)

                logger.info(f"Updated {table} row with ID: {entity_id}")
                return row_to_record(db_obj)
            except SQLAlchemyError as e:
                await handle_db_exception(db, logger, table, "update", e)

    async def delete(self, table: str, owner_id: str, entity_id: str) -> bool:
        model = self._model(table)
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    delete(model).where(model.id == entity_id, model.user_id == owner_id)
                )
                await db.commit()

                deleted = result.rowcount > 0
                if deleted:
                    logger.info(f"Deleted {table} row with ID: {entity_id}")
                else:
                    logger.warning(f"Delete on {table} matched no row with ID: {entity_id}")
                return deleted
            except SQLAlchemyError as e:
                await handle_db_exception(db, logger, table, "delete", e)

    async def delete_all(self, table: str, owner_id: str) -> int:
        """Remove every row the session owns in one table"""
        model = self._model(table)
        async with self.session_factory() as db:
            try:
                result = await db.execute(delete(model).where(model.user_id == owner_id))
                await db.commit()
                logger.info(f"Cleared {result.rowcount} rows from {table}")
                return result.rowcount
            except SQLAlchemyError as e:
                await handle_db_exception(db, logger, table, "clear", e)
