# src/clinicsync/models/prescription.py
from sqlalchemy import Column, String, Text, Date, DateTime, Integer
from sqlalchemy.sql import func
from clinicsync.db.database import Base, generate_id


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    patient_id = Column(String(36), nullable=False, index=True)
    dentist_id = Column(String(36), nullable=False)

    prescription_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class PrescriptionItem(Base):
    __tablename__ = "prescription_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    prescription_id = Column(String(36), nullable=False, index=True)

    medication_name = Column(String(200), nullable=False)
    dosage = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    instructions = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
