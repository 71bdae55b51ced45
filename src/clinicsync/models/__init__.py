# src/clinicsync/models/__init__.py
"""
Storage models, one table per entity type
"""

from .patient import Patient, PatientAttachment, GenderEnum, ToothStatus
from .practitioner import Practitioner
from .appointment import Appointment, AppointmentStatus, ReminderPolicy
from .treatment import TreatmentDefinition, TreatmentRecord
from .payment import Payment, PractitionerPayment, PaymentMethod
from .supplier import (
    Supplier,
    SupplierType,
    InventoryItem,
    SupplierInvoice,
    SupplierInvoiceStatus,
    Expense,
    ExpenseCategory,
)
from .lab_case import LabCase, LabCaseStatus, DRAFTING_STATUSES
from .prescription import Prescription, PrescriptionItem

from clinicsync.core.entity_types import EntityType

TABLE_MODELS = {
    EntityType.PATIENT: Patient,
    EntityType.PRACTITIONER: Practitioner,
    EntityType.APPOINTMENT: Appointment,
    EntityType.TREATMENT_DEFINITION: TreatmentDefinition,
    EntityType.TREATMENT_RECORD: TreatmentRecord,
    EntityType.PAYMENT: Payment,
    EntityType.PRACTITIONER_PAYMENT: PractitionerPayment,
    EntityType.SUPPLIER: Supplier,
    EntityType.SUPPLIER_INVOICE: SupplierInvoice,
    EntityType.EXPENSE: Expense,
    EntityType.INVENTORY_ITEM: InventoryItem,
    EntityType.LAB_CASE: LabCase,
    EntityType.PRESCRIPTION: Prescription,
    EntityType.PRESCRIPTION_ITEM: PrescriptionItem,
    EntityType.ATTACHMENT: PatientAttachment,
}

__all__ = [
    "Patient",
    "PatientAttachment",
    "GenderEnum",
    "ToothStatus",
    "Practitioner",
    "Appointment",
    "AppointmentStatus",
    "ReminderPolicy",
    "TreatmentDefinition",
    "TreatmentRecord",
    "Payment",
    "PractitionerPayment",
    "PaymentMethod",
    "Supplier",
    "SupplierType",
    "InventoryItem",
    "SupplierInvoice",
    "SupplierInvoiceStatus",
    "Expense",
    "ExpenseCategory",
    "LabCase",
    "LabCaseStatus",
    "DRAFTING_STATUSES",
    "Prescription",
    "PrescriptionItem",
    "TABLE_MODELS",
]
