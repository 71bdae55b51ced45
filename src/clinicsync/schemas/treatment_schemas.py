# src/clinicsync/schemas/treatment_schemas.py
from pydantic import Field, computed_field
from typing import Optional, List
from datetime import date
from decimal import Decimal
from .base_schemas import BaseSchema, EntitySchema


class TreatmentDefinition(EntitySchema):
    """Catalog entry with its revenue-split template"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    base_price: Decimal = Field(Decimal("0"), ge=0)
    doctor_percentage: Decimal = Decimal("0")
    clinic_percentage: Decimal = Decimal("0")


class InventoryUsage(BaseSchema):
    inventory_item_id: str
    quantity: int = Field(1, ge=0)
    cost: Decimal = Decimal("0")


class TreatmentRecord(EntitySchema):
    """A treatment performed on a patient; shares are frozen at creation"""

    patient_id: str
    practitioner_id: str
    treatment_definition_id: str
    treatment_date: date
    notes: Optional[str] = None
    inventory_items_used: List[InventoryUsage] = Field(default_factory=list)
    affected_teeth: List[str] = Field(default_factory=list)
    doctor_share: Decimal = Decimal("0")
    clinic_share: Decimal = Decimal("0")

    @computed_field(alias="totalTreatmentCost")
    @property
    def total_treatment_cost(self) -> Decimal:
        return self.doctor_share + self.clinic_share


class RevenueSplit(BaseSchema):
    doctor_share: Decimal
    clinic_share: Decimal


class TreatmentRecordCreate(BaseSchema):
    """Treatment record as posted for a given patient"""

    practitioner_id: str
    treatment_definition_id: str
    treatment_date: date
    notes: Optional[str] = None
    inventory_items_used: List[InventoryUsage] = Field(default_factory=list)
    affected_teeth: List[str] = Field(default_factory=list)
    doctor_share: Decimal = Decimal("0")
    clinic_share: Decimal = Decimal("0")
