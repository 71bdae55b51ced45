# src/clinicsync/schemas/practitioner_schemas.py
from decimal import Decimal
from typing import Optional
from pydantic import Field
from .base_schemas import BaseSchema, EntitySchema


class Practitioner(EntitySchema):
    name: str = Field(..., min_length=1, max_length=200)
    specialty: Optional[str] = None
    color: Optional[str] = None


class PractitionerBalance(BaseSchema):
    """What the clinic owes a practitioner"""

    practitioner_id: str
    accrued: Decimal = Decimal("0")  # Σ doctor_share over treatment records
    paid: Decimal = Decimal("0")  # Σ practitioner payments
    owed: Decimal = Decimal("0")
