# src/clinicsync/schemas/supplier_schemas.py
from pydantic import Field, computed_field
from typing import Optional, List
from datetime import date
from decimal import Decimal
from clinicsync.models.supplier import (
    SupplierType,
    SupplierInvoiceStatus,
    ExpenseCategory,
)
from .base_schemas import BaseSchema, EntitySchema


class Supplier(EntitySchema):
    name: str = Field(..., min_length=1, max_length=200)
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    type: SupplierType = SupplierType.MATERIAL_SUPPLIER


class InventoryItem(EntitySchema):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    supplier_id: Optional[str] = None
    current_stock: int = 0
    unit_cost: Decimal = Decimal("0")
    min_stock_level: int = 0
    expiry_date: Optional[date] = None


class Expense(EntitySchema):
    date: date
    description: Optional[str] = None
    amount: Decimal = Field(..., ge=0)
    category: ExpenseCategory = ExpenseCategory.MISC
    supplier_id: Optional[str] = None
    supplier_invoice_id: Optional[str] = None


class InvoiceLine(BaseSchema):
    description: str
    amount: Decimal = Decimal("0")


class InvoiceAllocation(BaseSchema):
    """One expense applied against a supplier invoice"""

    expense_id: str
    amount: Decimal
    date: date


class SupplierInvoice(EntitySchema):
    """Invoice owed to a supplier with its ordered payment history"""

    supplier_id: str
    invoice_number: Optional[str] = None
    invoice_date: date
    due_date: Optional[date] = None
    amount: Decimal = Field(..., ge=0)
    status: SupplierInvoiceStatus = SupplierInvoiceStatus.UNPAID
    items: List[InvoiceLine] = Field(default_factory=list)
    invoice_image_url: Optional[str] = None
    payments: List[InvoiceAllocation] = Field(default_factory=list)

    @computed_field(alias="totalPaid")
    @property
    def total_paid(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    @computed_field(alias="balance")
    @property
    def balance(self) -> Decimal:
        return self.amount - self.total_paid


class InvoiceBalance(BaseSchema):
    invoice_id: str
    amount: Decimal
    total_paid: Decimal
    balance: Decimal
    status: SupplierInvoiceStatus
