# src/clinicsync/models/appointment.py
from sqlalchemy import Column, String, Text, DateTime, Boolean
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from clinicsync.db.database import Base, generate_id


class AppointmentStatus(str, PyEnum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ReminderPolicy(str, PyEnum):
    NONE = "none"
    ONE_HOUR_BEFORE = "1_hour_before"
    TWO_HOURS_BEFORE = "2_hours_before"
    ONE_DAY_BEFORE = "1_day_before"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    # Core relationships
    patient_id = Column(String(36), nullable=False, index=True)
    dentist_id = Column(String(36), nullable=False, index=True)

    # Scheduling
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(20), default=AppointmentStatus.SCHEDULED.value)

    # Reminders
    reminder_time = Column(String(20), default=ReminderPolicy.NONE.value)
    reminder_sent = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
