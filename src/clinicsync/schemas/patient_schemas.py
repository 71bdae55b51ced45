# src/clinicsync/schemas/patient_schemas.py
from pydantic import Field, field_validator
from typing import Optional, List, Dict
from datetime import date
from clinicsync.models.patient import GenderEnum, ToothStatus
from .base_schemas import BaseSchema, EntitySchema, TimestampMixin

QUADRANTS = ("UR", "UL", "LL", "LR")


class Tooth(BaseSchema):
    """State of one chart position"""

    status: ToothStatus = ToothStatus.HEALTHY
    notes: str = ""


def create_empty_chart() -> Dict[str, Tooth]:
    """The canonical 32-position chart, every tooth healthy"""
    return {
        f"{quadrant}{position}": Tooth()
        for quadrant in QUADRANTS
        for position in range(1, 9)
    }


class Patient(EntitySchema):
    """Patient with contact, medical and chart data"""

    name: str = Field(..., min_length=1, max_length=200)
    dob: Optional[date] = None
    gender: Optional[GenderEnum] = None

    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    medical_history: Optional[str] = None
    treatment_notes: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    last_visit: Optional[date] = None

    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None

    dental_chart: Dict[str, Tooth] = Field(default_factory=dict)
    images: List[str] = Field(default_factory=list)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PatientAttachment(EntitySchema, TimestampMixin):
    """File attached to a patient"""

    patient_id: str
    filename: str
    original_filename: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)
    file_url: str
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None
    uploaded_by: Optional[str] = None
