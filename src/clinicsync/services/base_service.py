# src/clinicsync/services/base_service.py
import asyncio
from typing import Dict, Iterable, List, Optional
from clinicsync.core.config import settings
from clinicsync.core.entity_types import EntityType
from clinicsync.db.mapping import get_mapping
from clinicsync.db.remote_store import RemoteStore
from clinicsync.schemas.base_schemas import EntitySchema
from clinicsync.services.entity_store import EntityStore
from clinicsync.utils.exceptions import RemoteReadError
from clinicsync.utils.logger import setup_logger

logger = setup_logger("MUTATION_GATEWAY")

# Assigned by the remote store, never written by the client
READ_ONLY_COLUMNS = ("created_at", "updated_at")


class MutationGateway:
    """Generic add/update/delete against the remote store

    Local state only ever reflects writes the remote store confirmed.
    """

    def __init__(
        self,
        remote: RemoteStore,
        store: EntityStore,
        owner_id: str,
        refetch_scope: Optional[str] = None,
    ):
        self.remote = remote
        self.store = store
        self.owner_id = owner_id
        self.refetch_scope = refetch_scope or settings.REFETCH_SCOPE

    def insert_values(self, entity_type: EntityType, entity: EntitySchema) -> Dict:
        """Storage values for a new row, owned by this session"""
        values = get_mapping(entity_type).to_storage(entity)
        if not values.get("id"):
            values.pop("id", None)
        for column in READ_ONLY_COLUMNS:
            values.pop(column, None)
        values["user_id"] = self.owner_id
        return values

    async def add(self, entity_type: EntityType, entity: EntitySchema) -> EntitySchema:
        """Insert an entity and return it as stored, with its assigned id"""
        entity_type = EntityType(entity_type)
        mapping = get_mapping(entity_type)

        record = await self.remote.insert(
            entity_type.table, self.insert_values(entity_type, entity)
        )
        created = mapping.from_storage(record)
        self.store.append(entity_type, created)
        logger.info(f"Added {entity_type.table} {created.id}")

        await self.reconcile(entity_type)
        return created

    async def update(self, entity_type: EntityType, entity: EntitySchema) -> EntitySchema:
        """Overwrite every mutable field of an existing entity"""
        entity_type = EntityType(entity_type)
        values = get_mapping(entity_type).to_storage(entity)

        await self.remote.update(entity_type.table, self.owner_id, entity.id, values)
        if not self.store.replace(entity_type, entity):
            logger.warning(
                f"Updated {entity_type.table} {entity.id} was not in the local store"
            )
        logger.info(f"Updated {entity_type.table} {entity.id}")
        return entity

    async def delete(self, entity_type: EntityType, entity_id: str):
        entity_type = EntityType(entity_type)
        await self.remote.delete(entity_type.table, self.owner_id, entity_id)
        self.store.remove(entity_type, entity_id)
        logger.info(f"Deleted {entity_type.table} {entity_id}")

    async def fetch_one(
        self, entity_type: EntityType, entity_id: str
    ) -> Optional[EntitySchema]:
        """Authoritative read of one row, bypassing the local store"""
        entity_type = EntityType(entity_type)
        record = await self.remote.select_one(entity_type.table, self.owner_id, entity_id)
        if record is None:
            return None
        return get_mapping(entity_type).from_storage(record)

    async def _load(self, entity_type: EntityType) -> List[EntitySchema]:
        mapping = get_mapping(entity_type)
        records = await self.remote.select_all(entity_type.table, self.owner_id)
        return [mapping.from_storage(record) for record in records]

    async def refetch(self, entity_types: Optional[Iterable[EntityType]] = None):
        """Reload collections concurrently from the remote store

        Collections that loaded replace their local copy even when others fail;
        the failures are reported together.
        """
        entity_types = [EntityType(t) for t in (entity_types or list(EntityType))]
        results = await asyncio.gather(
            *(self._load(entity_type) for entity_type in entity_types),
            return_exceptions=True,
        )

        failed = []
        for entity_type, result in zip(entity_types, results):
            if isinstance(result, BaseException):
                logger.error(f"Failed to reload {entity_type.table}: {result}")
                failed.append(entity_type.table)
                continue
            self.store.replace_all(entity_type, result)

        if failed:
            raise RemoteReadError(failed, "reload incomplete")
        logger.debug(f"Reloaded {len(entity_types)} collections")

    async def reconcile(self, entity_type: EntityType):
        """Refetch after a confirmed write; a failure here does not undo the write"""
        scope = [entity_type] if self.refetch_scope == "affected" else None
        try:
            await self.refetch(scope)
        except RemoteReadError as e:
            logger.warning(f"Reconciliation after {entity_type.table} write failed: {e.message}")
