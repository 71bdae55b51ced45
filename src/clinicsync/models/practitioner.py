# src/clinicsync/models/practitioner.py
from sqlalchemy import Column, String
from clinicsync.db.database import Base, generate_id


class Practitioner(Base):
    __tablename__ = "dentists"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    specialty = Column(String(100), nullable=True)
    color = Column(String(20), nullable=True)  # calendar display color
