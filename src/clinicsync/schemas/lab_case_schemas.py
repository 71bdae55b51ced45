# src/clinicsync/schemas/lab_case_schemas.py
from pydantic import Field
from typing import Optional
from datetime import date
from decimal import Decimal
from clinicsync.models.lab_case import LabCaseStatus
from .base_schemas import EntitySchema


class LabCase(EntitySchema):
    """Work sent to a dental lab for a patient"""

    patient_id: str
    lab_id: str
    case_type: str = Field(..., min_length=1)
    sent_date: Optional[date] = None
    due_date: Optional[date] = None
    return_date: Optional[date] = None
    status: LabCaseStatus = LabCaseStatus.DRAFT
    lab_cost: Decimal = Field(Decimal("0"), ge=0)
    notes: Optional[str] = None
