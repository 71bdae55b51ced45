# src/clinicsync/models/treatment.py
from sqlalchemy import Column, String, Text, Date, Numeric, JSON
from clinicsync.db.database import Base, generate_id


class TreatmentDefinition(Base):
    __tablename__ = "treatment_definitions"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=False, default=0)

    # Revenue split template, the two must add up to 1
    doctor_percentage = Column(Numeric(5, 4), nullable=False, default=0)
    clinic_percentage = Column(Numeric(5, 4), nullable=False, default=0)


class TreatmentRecord(Base):
    __tablename__ = "treatment_records"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    # Core relationships
    patient_id = Column(String(36), nullable=False, index=True)
    dentist_id = Column(String(36), nullable=False, index=True)
    treatment_definition_id = Column(String(36), nullable=False)

    treatment_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    inventory_items_used = Column(JSON, default=list)
    affected_teeth = Column(JSON, default=list)

    # Shares frozen at creation
    doctor_share = Column(Numeric(10, 2), nullable=False, default=0)
    clinic_share = Column(Numeric(10, 2), nullable=False, default=0)
