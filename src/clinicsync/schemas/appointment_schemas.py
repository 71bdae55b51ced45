# src/clinicsync/schemas/appointment_schemas.py
from pydantic import model_validator
from typing import Optional
from datetime import datetime
from clinicsync.models.appointment import AppointmentStatus, ReminderPolicy
from .base_schemas import EntitySchema, TimestampMixin


class Appointment(EntitySchema, TimestampMixin):
    """Scheduled visit of a patient with a practitioner"""

    patient_id: str
    practitioner_id: str
    start_time: datetime
    end_time: datetime
    reason: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    reminder_time: ReminderPolicy = ReminderPolicy.NONE
    reminder_sent: bool = False

    @model_validator(mode="after")
    def validate_times(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self
