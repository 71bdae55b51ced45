# src/clinicsync/schemas/payment_schemas.py
from pydantic import Field
from typing import Optional
from datetime import date
from decimal import Decimal
from clinicsync.models.payment import PaymentMethod
from .base_schemas import EntitySchema


class Payment(EntitySchema):
    """Money received from a patient, optionally against a treatment record"""

    patient_id: str
    date: date
    amount: Decimal = Field(..., ge=0)
    method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = None
    treatment_record_id: Optional[str] = None
    doctor_share: Decimal = Decimal("0")
    clinic_share: Decimal = Decimal("0")


class PractitionerPayment(EntitySchema):
    """Money disbursed or credited to a practitioner"""

    practitioner_id: str
    amount: Decimal
    date: date
    note: Optional[str] = None
    # Back-reference to the patient payment this row was derived from
    source_payment_id: Optional[str] = None
