# src/clinicsync/models/supplier.py
from sqlalchemy import Column, String, Text, Date, Numeric, Integer, JSON
from enum import Enum as PyEnum
from clinicsync.db.database import Base, generate_id


class SupplierType(str, PyEnum):
    MATERIAL_SUPPLIER = "Material Supplier"
    DENTAL_LAB = "Dental Lab"


class SupplierInvoiceStatus(str, PyEnum):
    UNPAID = "UNPAID"
    PAID = "PAID"


class ExpenseCategory(str, PyEnum):
    RENT = "RENT"
    SALARIES = "SALARIES"
    UTILITIES = "UTILITIES"
    LAB_FEES = "LAB_FEES"
    SUPPLIES = "SUPPLIES"
    MARKETING = "MARKETING"
    MISC = "MISC"


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    contact_person = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    email = Column(String(100), nullable=True)
    type = Column(String(30), nullable=False, default=SupplierType.MATERIAL_SUPPLIER.value)


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    supplier_id = Column(String(36), nullable=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    current_stock = Column(Integer, nullable=False, default=0)
    unit_cost = Column(Numeric(10, 2), nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=0)
    expiry_date = Column(Date, nullable=True)


class SupplierInvoice(Base):
    __tablename__ = "supplier_invoices"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    supplier_id = Column(String(36), nullable=False, index=True)

    invoice_number = Column(String(100), nullable=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(10), nullable=False, default=SupplierInvoiceStatus.UNPAID.value)
    items = Column(JSON, default=list)  # [{description, amount}]
    invoice_image_url = Column(Text, nullable=True)

    # Ordered allocations [{expense_id, amount, date}], read-modify-write
    payments = Column(JSON, default=list)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    supplier_id = Column(String(36), nullable=True)
    supplier_invoice_id = Column(String(36), nullable=True, index=True)

    date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(20), nullable=False, default=ExpenseCategory.MISC.value)
