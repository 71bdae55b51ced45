# src/clinicsync/routes/entities.py
from fastapi import APIRouter, Depends, status
from typing import Any, List
from clinicsync.core.entity_types import EntityType
from clinicsync.db.mapping import get_mapping
from clinicsync.dependencies.session_deps import get_clinic_data
from clinicsync.services.clinic_data_service import ClinicDataService
from clinicsync.utils.exceptions import NotFoundException
from clinicsync.utils.logger import setup_logger

logger = setup_logger("ENTITY_ROUTES")

# URL path per collection
COLLECTION_PATHS = {
    EntityType.PATIENT: "patients",
    EntityType.PRACTITIONER: "practitioners",
    EntityType.APPOINTMENT: "appointments",
    EntityType.TREATMENT_DEFINITION: "treatment-definitions",
    EntityType.TREATMENT_RECORD: "treatment-records",
    EntityType.PAYMENT: "payments",
    EntityType.PRACTITIONER_PAYMENT: "practitioner-payments",
    EntityType.SUPPLIER: "suppliers",
    EntityType.SUPPLIER_INVOICE: "supplier-invoices",
    EntityType.EXPENSE: "expenses",
    EntityType.INVENTORY_ITEM: "inventory-items",
    EntityType.LAB_CASE: "lab-cases",
    EntityType.PRESCRIPTION: "prescriptions",
    EntityType.PRESCRIPTION_ITEM: "prescription-items",
    EntityType.ATTACHMENT: "attachments",
}


def build_collection_router(entity_type: EntityType) -> APIRouter:
    """List, create, update and delete routes for one collection"""
    path = COLLECTION_PATHS[entity_type]
    schema = get_mapping(entity_type).schema
    label = schema.__name__
    router = APIRouter(prefix=f"/{path}", tags=[path])

    @router.get("/", response_model=List[schema], summary=f"List {path}")
    async def list_entities(
        data: ClinicDataService = Depends(get_clinic_data),
    ) -> Any:
        return data.collection(entity_type).entities

    @router.post(
        "/",
        response_model=schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label}",
    )
    async def create_entity(
        payload: schema,
        data: ClinicDataService = Depends(get_clinic_data),
    ) -> Any:
        logger.info(f"Creating {label} for session {data.owner_id}")
        return await data.collection(entity_type).add(payload)

    @router.put("/{entity_id}", response_model=schema, summary=f"Update {label}")
    async def update_entity(
        entity_id: str,
        payload: schema,
        data: ClinicDataService = Depends(get_clinic_data),
    ) -> Any:
        collection = data.collection(entity_type)
        if collection.get(entity_id) is None:
            raise NotFoundException(f"{label} {entity_id} not found")
        return await collection.update(payload.model_copy(update={"id": entity_id}))

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete {label}",
    )
    async def delete_entity(
        entity_id: str,
        data: ClinicDataService = Depends(get_clinic_data),
    ) -> None:
        collection = data.collection(entity_type)
        if collection.get(entity_id) is None:
            raise NotFoundException(f"{label} {entity_id} not found")
        await collection.delete(entity_id)

    return router


collection_routers = [build_collection_router(entity_type) for entity_type in EntityType]
