# src/clinicsync/models/lab_case.py
from sqlalchemy import Column, String, Text, Date, Numeric
from enum import Enum as PyEnum
from clinicsync.db.database import Base, generate_id


class LabCaseStatus(str, PyEnum):
    DRAFT = "DRAFT"
    SENT_TO_LAB = "SENT_TO_LAB"
    RECEIVED_FROM_LAB = "RECEIVED_FROM_LAB"
    FITTED_TO_PATIENT = "FITTED_TO_PATIENT"
    CANCELLED = "CANCELLED"


# No lab cost is owed while a case is in one of these
DRAFTING_STATUSES = frozenset({LabCaseStatus.DRAFT.value, LabCaseStatus.SENT_TO_LAB.value})


class LabCase(Base):
    __tablename__ = "lab_cases"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    patient_id = Column(String(36), nullable=False, index=True)
    lab_id = Column(String(36), nullable=False, index=True)  # supplier of type Dental Lab

    case_type = Column(String(100), nullable=False)
    sent_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    return_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default=LabCaseStatus.DRAFT.value)
    lab_cost = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
