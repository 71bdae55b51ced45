# src/clinicsync/models/patient.py
from sqlalchemy import Column, String, Text, Date, DateTime, Integer, JSON
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from clinicsync.db.database import Base, generate_id


class GenderEnum(str, PyEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ToothStatus(str, PyEnum):
    HEALTHY = "HEALTHY"
    FILLING = "FILLING"
    CROWN = "CROWN"
    MISSING = "MISSING"
    IMPLANT = "IMPLANT"
    ROOT_CANAL = "ROOT_CANAL"
    CAVITY = "CAVITY"


class Patient(Base):
    __tablename__ = "patients"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    # Personal information
    name = Column(String(200), nullable=False)
    dob = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)

    # Contact information
    phone = Column(String(30), nullable=True)
    email = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact_name = Column(String(100), nullable=True)
    emergency_contact_phone = Column(String(30), nullable=True)

    # Medical information
    medical_history = Column(Text, nullable=True)
    treatment_notes = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    medications = Column(Text, nullable=True)
    last_visit = Column(Date, nullable=True)

    # Insurance
    insurance_provider = Column(String(100), nullable=True)
    insurance_policy_number = Column(String(100), nullable=True)

    # Tooth number -> {status, notes}
    dental_chart = Column(JSON, nullable=True)
    images = Column(JSON, default=list)


class PatientAttachment(Base):
    __tablename__ = "patient_attachments"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    patient_id = Column(String(36), nullable=False, index=True)

    filename = Column(String(255), nullable=False)
    original_filename = Column(String(255), nullable=True)
    file_type = Column(String(100), nullable=True)
    file_size = Column(Integer, nullable=True)
    file_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    uploaded_by = Column(String(36), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
