# src/clinicsync/core/entity_types.py
from enum import Enum as PyEnum


class EntityType(str, PyEnum):
    """Every entity collection owned by the core, valued by its storage table."""

    PATIENT = "patients"
    PRACTITIONER = "dentists"
    APPOINTMENT = "appointments"
    TREATMENT_DEFINITION = "treatment_definitions"
    TREATMENT_RECORD = "treatment_records"
    PAYMENT = "payments"
    PRACTITIONER_PAYMENT = "doctor_payments"
    SUPPLIER = "suppliers"
    SUPPLIER_INVOICE = "supplier_invoices"
    EXPENSE = "expenses"
    INVENTORY_ITEM = "inventory_items"
    LAB_CASE = "lab_cases"
    PRESCRIPTION = "prescriptions"
    PRESCRIPTION_ITEM = "prescription_items"
    ATTACHMENT = "patient_attachments"

    @property
    def table(self) -> str:
        return self.value


# Parents before children, used by bulk restore so remapped ids exist
# before the rows that reference them are written.
RESTORE_ORDER = [
    EntityType.PATIENT,
    EntityType.PRACTITIONER,
    EntityType.SUPPLIER,
    EntityType.TREATMENT_DEFINITION,
    EntityType.INVENTORY_ITEM,
    EntityType.APPOINTMENT,
    EntityType.TREATMENT_RECORD,
    EntityType.PAYMENT,
    EntityType.PRACTITIONER_PAYMENT,
    EntityType.SUPPLIER_INVOICE,
    EntityType.EXPENSE,
    EntityType.LAB_CASE,
    EntityType.PRESCRIPTION,
    EntityType.PRESCRIPTION_ITEM,
    EntityType.ATTACHMENT,
]
