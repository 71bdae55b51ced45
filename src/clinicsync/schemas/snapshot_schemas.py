# src/clinicsync/schemas/snapshot_schemas.py
from pydantic import Field
from typing import Optional, List
from clinicsync.core.entity_types import EntityType
from .base_schemas import BaseSchema
from .patient_schemas import Patient, PatientAttachment
from .practitioner_schemas import Practitioner
from .appointment_schemas import Appointment
from .treatment_schemas import TreatmentDefinition, TreatmentRecord
from .payment_schemas import Payment, PractitionerPayment
from .supplier_schemas import Supplier, InventoryItem, Expense, SupplierInvoice
from .lab_case_schemas import LabCase
from .prescription_schemas import Prescription, PrescriptionItem


class ClinicSnapshot(BaseSchema):
    """Full data set of one session, as exported and restored

    Every collection is optional on restore; a missing one is restored empty.
    """

    patients: Optional[List[Patient]] = None
    practitioners: Optional[List[Practitioner]] = Field(None, alias="dentists")
    appointments: Optional[List[Appointment]] = None
    treatment_definitions: Optional[List[TreatmentDefinition]] = None
    treatment_records: Optional[List[TreatmentRecord]] = None
    payments: Optional[List[Payment]] = None
    practitioner_payments: Optional[List[PractitionerPayment]] = Field(
        None, alias="doctorPayments"
    )
    suppliers: Optional[List[Supplier]] = None
    supplier_invoices: Optional[List[SupplierInvoice]] = None
    expenses: Optional[List[Expense]] = None
    inventory_items: Optional[List[InventoryItem]] = None
    lab_cases: Optional[List[LabCase]] = None
    prescriptions: Optional[List[Prescription]] = None
    prescription_items: Optional[List[PrescriptionItem]] = None
    attachments: Optional[List[PatientAttachment]] = None


SNAPSHOT_FIELDS = {
    EntityType.PATIENT: "patients",
    EntityType.PRACTITIONER: "practitioners",
    EntityType.APPOINTMENT: "appointments",
    EntityType.TREATMENT_DEFINITION: "treatment_definitions",
    EntityType.TREATMENT_RECORD: "treatment_records",
    EntityType.PAYMENT: "payments",
    EntityType.PRACTITIONER_PAYMENT: "practitioner_payments",
    EntityType.SUPPLIER: "suppliers",
    EntityType.SUPPLIER_INVOICE: "supplier_invoices",
    EntityType.EXPENSE: "expenses",
    EntityType.INVENTORY_ITEM: "inventory_items",
    EntityType.LAB_CASE: "lab_cases",
    EntityType.PRESCRIPTION: "prescriptions",
    EntityType.PRESCRIPTION_ITEM: "prescription_items",
    EntityType.ATTACHMENT: "attachments",
}
