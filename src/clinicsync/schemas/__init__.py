# src/clinicsync/schemas/__init__.py
from .base_schemas import BaseSchema, EntitySchema, ResponseBase
from .patient_schemas import Patient, PatientAttachment, Tooth, create_empty_chart
from .practitioner_schemas import Practitioner, PractitionerBalance
from .appointment_schemas import Appointment
from .treatment_schemas import (
    TreatmentDefinition,
    TreatmentRecord,
    InventoryUsage,
    RevenueSplit,
    TreatmentRecordCreate,
)
from .payment_schemas import Payment, PractitionerPayment
from .supplier_schemas import (
    Supplier,
    InventoryItem,
    Expense,
    SupplierInvoice,
    InvoiceLine,
    InvoiceAllocation,
    InvoiceBalance,
)
from .lab_case_schemas import LabCase
from .prescription_schemas import Prescription, PrescriptionItem
from .settings_schemas import ClinicInfo, MessageTemplate, MessageTemplateUpdate
from .snapshot_schemas import ClinicSnapshot, SNAPSHOT_FIELDS

__all__ = [
    "BaseSchema",
    "EntitySchema",
    "ResponseBase",
    "Patient",
    "PatientAttachment",
    "Tooth",
    "create_empty_chart",
    "Practitioner",
    "PractitionerBalance",
    "Appointment",
    "TreatmentDefinition",
    "TreatmentRecord",
    "InventoryUsage",
    "RevenueSplit",
    "TreatmentRecordCreate",
    "Payment",
    "PractitionerPayment",
    "Supplier",
    "InventoryItem",
    "Expense",
    "SupplierInvoice",
    "InvoiceLine",
    "InvoiceAllocation",
    "InvoiceBalance",
    "LabCase",
    "Prescription",
    "PrescriptionItem",
    "ClinicInfo",
    "MessageTemplate",
    "MessageTemplateUpdate",
    "ClinicSnapshot",
    "SNAPSHOT_FIELDS",
]
