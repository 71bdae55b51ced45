# src/clinicsync/db/mapping.py
"""
Translation between in-memory entities and flat storage records.

Each entity type has one EntityMapping. Renamed fields are declared per
mapping, everything else maps by name. Nested values are written as
JSON-safe structures and derived properties are never written.
"""

from typing import Any, Dict, Iterable, Optional, Type
from clinicsync.core.entity_types import EntityType
from clinicsync.schemas.base_schemas import EntitySchema
from clinicsync.schemas.patient_schemas import Patient, PatientAttachment
from clinicsync.schemas.practitioner_schemas import Practitioner
from clinicsync.schemas.appointment_schemas import Appointment
from clinicsync.schemas.treatment_schemas import TreatmentDefinition, TreatmentRecord
from clinicsync.schemas.payment_schemas import Payment, PractitionerPayment
from clinicsync.schemas.supplier_schemas import (
    Supplier,
    InventoryItem,
    Expense,
    SupplierInvoice,
)
from clinicsync.schemas.lab_case_schemas import LabCase
from clinicsync.schemas.prescription_schemas import Prescription, PrescriptionItem


class EntityMapping:
    def __init__(
        self,
        entity_type: EntityType,
        schema: Type[EntitySchema],
        renames: Optional[Dict[str, str]] = None,
        json_fields: Iterable[str] = (),
        references: Optional[Dict[str, EntityType]] = None,
    ):
        self.entity_type = entity_type
        self.schema = schema
        self.renames = dict(renames or {})
        self.json_fields = frozenset(json_fields)
        # field -> entity type it points at
        self.references = dict(references or {})
        self._columns_to_fields = {v: k for k, v in self.renames.items()}

    def column_for(self, field: str) -> str:
        return self.renames.get(field, field)

    def to_storage(self, entity: EntitySchema) -> Dict[str, Any]:
        derived = set(self.schema.model_computed_fields)
        record = entity.model_dump(exclude=derived | self.json_fields)
        if self.json_fields:
            record.update(entity.model_dump(mode="json", include=set(self.json_fields)))
        return {self.column_for(field): value for field, value in record.items()}

    def from_storage(self, record: Dict[str, Any]) -> EntitySchema:
        fields = self.schema.model_fields
        data = {}
        for column, value in record.items():
            field = self._columns_to_fields.get(column, column)
            # Unknown columns are dropped, NULL falls back to the field default
            if field not in fields or value is None:
                continue
            data[field] = value
        return self.schema.model_validate(data)


PRACTITIONER_RENAME = {"practitioner_id": "dentist_id"}

ENTITY_MAPPINGS: Dict[EntityType, EntityMapping] = {
    mapping.entity_type: mapping
    for mapping in (
        EntityMapping(
            EntityType.PATIENT,
            Patient,
            json_fields=("dental_chart", "images"),
        ),
        EntityMapping(EntityType.PRACTITIONER, Practitioner),
        EntityMapping(
            EntityType.APPOINTMENT,
            Appointment,
            renames=PRACTITIONER_RENAME,
            references={
                "patient_id": EntityType.PATIENT,
                "practitioner_id": EntityType.PRACTITIONER,
            },
        ),
        EntityMapping(EntityType.TREATMENT_DEFINITION, TreatmentDefinition),
        EntityMapping(
            EntityType.TREATMENT_RECORD,
            TreatmentRecord,
            renames=PRACTITIONER_RENAME,
            json_fields=("inventory_items_used", "affected_teeth"),
            references={
                "patient_id": EntityType.PATIENT,
                "practitioner_id": EntityType.PRACTITIONER,
                "treatment_definition_id": EntityType.TREATMENT_DEFINITION,
            },
        ),
        EntityMapping(
            EntityType.PAYMENT,
            Payment,
            references={
                "patient_id": EntityType.PATIENT,
                "treatment_record_id": EntityType.TREATMENT_RECORD,
            },
        ),
        EntityMapping(
            EntityType.PRACTITIONER_PAYMENT,
            PractitionerPayment,
            renames={
                "practitioner_id": "dentist_id",
                "note": "notes",
                "source_payment_id": "payment_id",
            },
            references={
                "practitioner_id": EntityType.PRACTITIONER,
                "source_payment_id": EntityType.PAYMENT,
            },
        ),
        EntityMapping(EntityType.SUPPLIER, Supplier),
        EntityMapping(
            EntityType.SUPPLIER_INVOICE,
            SupplierInvoice,
            json_fields=("items", "payments"),
            references={"supplier_id": EntityType.SUPPLIER},
        ),
        EntityMapping(
            EntityType.EXPENSE,
            Expense,
            references={
                "supplier_id": EntityType.SUPPLIER,
                "supplier_invoice_id": EntityType.SUPPLIER_INVOICE,
            },
        ),
        EntityMapping(
            EntityType.INVENTORY_ITEM,
            InventoryItem,
            references={"supplier_id": EntityType.SUPPLIER},
        ),
        EntityMapping(
            EntityType.LAB_CASE,
            LabCase,
            references={
                "patient_id": EntityType.PATIENT,
                "lab_id": EntityType.SUPPLIER,
            },
        ),
        EntityMapping(
            EntityType.PRESCRIPTION,
            Prescription,
            renames=PRACTITIONER_RENAME,
            references={
                "patient_id": EntityType.PATIENT,
                "practitioner_id": EntityType.PRACTITIONER,
            },
        ),
        EntityMapping(
            EntityType.PRESCRIPTION_ITEM,
            PrescriptionItem,
            references={"prescription_id": EntityType.PRESCRIPTION},
        ),
        EntityMapping(
            EntityType.ATTACHMENT,
            PatientAttachment,
            references={"patient_id": EntityType.PATIENT},
        ),
    )
}


def get_mapping(entity_type: EntityType) -> EntityMapping:
    return ENTITY_MAPPINGS[EntityType(entity_type)]
