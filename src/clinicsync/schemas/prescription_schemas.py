# src/clinicsync/schemas/prescription_schemas.py
from pydantic import Field
from typing import Optional
from datetime import date
from .base_schemas import EntitySchema, TimestampMixin


class Prescription(EntitySchema, TimestampMixin):
    patient_id: str
    practitioner_id: str
    prescription_date: date
    notes: Optional[str] = None


class PrescriptionItem(EntitySchema, TimestampMixin):
    prescription_id: str
    medication_name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    quantity: int = Field(1, ge=0)
    instructions: Optional[str] = None
