# src/clinicsync/services/entity_store.py
from typing import Dict, List, Optional
from clinicsync.core.entity_types import EntityType
from clinicsync.schemas.base_schemas import EntitySchema


class EntityStore:
    """In-memory ordered collections, one per entity type

    Only the mutation gateway writes here, and only after the remote store
    has confirmed the write.
    """

    def __init__(self):
        self._collections: Dict[EntityType, List[EntitySchema]] = {
            entity_type: [] for entity_type in EntityType
        }

    def all(self, entity_type: EntityType) -> List[EntitySchema]:
        return list(self._collections[EntityType(entity_type)])

    def get(self, entity_type: EntityType, entity_id: Optional[str]) -> Optional[EntitySchema]:
        if entity_id is None:
            return None
        for entity in self._collections[EntityType(entity_type)]:
            if entity.id == entity_id:
                return entity
        return None

    def replace_all(self, entity_type: EntityType, entities: List[EntitySchema]):
        self._collections[EntityType(entity_type)] = list(entities)

    def append(self, entity_type: EntityType, entity: EntitySchema):
        self._collections[EntityType(entity_type)].append(entity)

    def replace(self, entity_type: EntityType, entity: EntitySchema) -> bool:
        collection = self._collections[EntityType(entity_type)]
        for index, existing in enumerate(collection):
            if existing.id == entity.id:
                collection[index] = entity
                return True
        return False

    def remove(self, entity_type: EntityType, entity_id: str) -> bool:
        collection = self._collections[EntityType(entity_type)]
        remaining = [e for e in collection if e.id != entity_id]
        self._collections[EntityType(entity_type)] = remaining
        return len(remaining) != len(collection)
