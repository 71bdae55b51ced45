# src/clinicsync/models/payment.py
from sqlalchemy import Column, String, Text, Date, Numeric
from enum import Enum as PyEnum
from clinicsync.db.database import Base, generate_id


class PaymentMethod(str, PyEnum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    BANK_TRANSFER = "Bank Transfer"
    OTHER = "Other"
    DISCOUNT = "Discount"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    patient_id = Column(String(36), nullable=False, index=True)
    treatment_record_id = Column(String(36), nullable=True, index=True)

    # Payment details
    date = Column(Date, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    method = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)

    # Split recomputed from the current definition on every write
    doctor_share = Column(Numeric(10, 2), nullable=False, default=0)
    clinic_share = Column(Numeric(10, 2), nullable=False, default=0)


class PractitionerPayment(Base):
    __tablename__ = "doctor_payments"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    dentist_id = Column(String(36), nullable=False, index=True)

    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    # Set when the row was derived from a patient payment
    payment_id = Column(String(36), nullable=True, index=True)
