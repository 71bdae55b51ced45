# tests/test_mapping.py
from datetime import date, datetime
from decimal import Decimal

import pytest

from clinicsync.core.entity_types import EntityType
from clinicsync.db.mapping import ENTITY_MAPPINGS, get_mapping
from clinicsync.schemas import (
    Appointment,
    Expense,
    InventoryItem,
    InvoiceAllocation,
    InvoiceLine,
    InventoryUsage,
    LabCase,
    Patient,
    PatientAttachment,
    Payment,
    Practitioner,
    PractitionerPayment,
    Prescription,
    PrescriptionItem,
    Supplier,
    SupplierInvoice,
    TreatmentDefinition,
    TreatmentRecord,
    create_empty_chart,
)

SAMPLES = {
    EntityType.PATIENT: Patient(
        id="p1",
        name="Lina Odeh",
        dob=date(1990, 5, 17),
        gender="Female",
        email="lina@example.com",
        dental_chart=create_empty_chart(),
        images=["https://files.example.com/xray-1.png"],
    ),
    EntityType.PRACTITIONER: Practitioner(id="d1", name="Dr. Sami", color="#3b82f6"),
    EntityType.APPOINTMENT: Appointment(
        id="a1",
        patient_id="p1",
        practitioner_id="d1",
        start_time=datetime(2024, 3, 1, 9, 0),
        end_time=datetime(2024, 3, 1, 9, 30),
        reminder_time="1_day_before",
    ),
    EntityType.TREATMENT_DEFINITION: TreatmentDefinition(
        id="t1",
        name="Crown",
        base_price=Decimal("200.00"),
        doctor_percentage=Decimal("0.4"),
        clinic_percentage=Decimal("0.6"),
    ),
    EntityType.TREATMENT_RECORD: TreatmentRecord(
        id="r1",
        patient_id="p1",
        practitioner_id="d1",
        treatment_definition_id="t1",
        treatment_date=date(2024, 3, 1),
        inventory_items_used=[
            InventoryUsage(inventory_item_id="i1", quantity=2, cost=Decimal("7.50"))
        ],
        affected_teeth=["UR6"],
        doctor_share=Decimal("80"),
        clinic_share=Decimal("120"),
    ),
    EntityType.PAYMENT: Payment(
        id="pay1",
        patient_id="p1",
        date=date(2024, 3, 5),
        amount=Decimal("200"),
        method="Credit Card",
        treatment_record_id="r1",
        doctor_share=Decimal("80"),
        clinic_share=Decimal("120"),
    ),
    EntityType.PRACTITIONER_PAYMENT: PractitionerPayment(
        id="dp1",
        practitioner_id="d1",
        amount=Decimal("80"),
        date=date(2024, 3, 5),
        note="Payment share from treatment on 2024-03-01",
        source_payment_id="pay1",
    ),
    EntityType.SUPPLIER: Supplier(id="s1", name="Smile Lab", type="Dental Lab"),
    EntityType.SUPPLIER_INVOICE: SupplierInvoice(
        id="inv1",
        supplier_id="s1",
        invoice_number="INV-1",
        invoice_date=date(2024, 2, 1),
        amount=Decimal("500"),
        items=[InvoiceLine(description="Zirconia blocks", amount=Decimal("500"))],
        payments=[
            InvoiceAllocation(expense_id="e1", amount=Decimal("150"), date=date(2024, 2, 10))
        ],
    ),
    EntityType.EXPENSE: Expense(
        id="e1",
        date=date(2024, 2, 10),
        description="Partial payment",
        amount=Decimal("150"),
        category="SUPPLIES",
        supplier_id="s1",
        supplier_invoice_id="inv1",
    ),
    EntityType.INVENTORY_ITEM: InventoryItem(
        id="i1",
        name="Composite",
        supplier_id="s1",
        current_stock=12,
        unit_cost=Decimal("7.50"),
        min_stock_level=3,
        expiry_date=date(2025, 1, 1),
    ),
    EntityType.LAB_CASE: LabCase(
        id="l1",
        patient_id="p1",
        lab_id="s1",
        case_type="Crown",
        status="SENT_TO_LAB",
        lab_cost=Decimal("300"),
        due_date=date(2024, 3, 20),
    ),
    EntityType.PRESCRIPTION: Prescription(
        id="rx1", patient_id="p1", practitioner_id="d1", prescription_date=date(2024, 3, 1)
    ),
    EntityType.PRESCRIPTION_ITEM: PrescriptionItem(
        id="rxi1",
        prescription_id="rx1",
        medication_name="Amoxicillin",
        dosage="500mg",
        quantity=21,
        instructions="Three times a day",
    ),
    EntityType.ATTACHMENT: PatientAttachment(
        id="att1",
        patient_id="p1",
        filename="xray.png",
        file_type="image/png",
        file_size=2048,
        file_url="https://files.example.com/xray.png",
    ),
}


def test_every_entity_type_has_a_mapping():
    assert set(ENTITY_MAPPINGS) == set(EntityType)
    assert set(SAMPLES) == set(EntityType)


@pytest.mark.parametrize("entity_type", list(EntityType), ids=lambda t: t.value)
def test_from_storage_inverts_to_storage(entity_type):
    mapping = get_mapping(entity_type)
    entity = SAMPLES[entity_type]

    assert mapping.from_storage(mapping.to_storage(entity)) == entity


def test_practitioner_payment_columns_are_renamed():
    record = get_mapping(EntityType.PRACTITIONER_PAYMENT).to_storage(
        SAMPLES[EntityType.PRACTITIONER_PAYMENT]
    )

    assert record["dentist_id"] == "d1"
    assert record["notes"] == "Payment share from treatment on 2024-03-01"
    assert record["payment_id"] == "pay1"
    assert not {"practitioner_id", "note", "source_payment_id"} & set(record)


def test_derived_properties_are_never_written():
    record = get_mapping(EntityType.TREATMENT_RECORD).to_storage(
        SAMPLES[EntityType.TREATMENT_RECORD]
    )
    invoice = get_mapping(EntityType.SUPPLIER_INVOICE).to_storage(
        SAMPLES[EntityType.SUPPLIER_INVOICE]
    )

    assert "total_treatment_cost" not in record
    assert "total_paid" not in invoice
    assert "balance" not in invoice


def test_nested_values_are_json_safe():
    record = get_mapping(EntityType.SUPPLIER_INVOICE).to_storage(
        SAMPLES[EntityType.SUPPLIER_INVOICE]
    )

    assert record["payments"] == [
        {"expense_id": "e1", "amount": "150", "date": "2024-02-10"}
    ]
    # Scalar columns keep their Python types for the database driver
    assert record["invoice_date"] == date(2024, 2, 1)


def test_from_storage_drops_unknown_columns_and_defaults_nulls():
    entity = get_mapping(EntityType.SUPPLIER_INVOICE).from_storage(
        {
            "id": "inv2",
            "user_id": "session-a",
            "supplier_id": "s1",
            "invoice_number": None,
            "invoice_date": date(2024, 2, 1),
            "amount": Decimal("90.00"),
            "status": None,
            "items": None,
            "payments": None,
            "legacy_column": "ignored",
        }
    )

    assert entity.payments == []
    assert entity.items == []
    assert entity.status == "UNPAID"
    assert entity.balance == Decimal("90")


def test_total_treatment_cost_is_sum_of_shares():
    record = SAMPLES[EntityType.TREATMENT_RECORD]

    assert record.total_treatment_cost == Decimal("200")
    assert record.model_dump(by_alias=True)["totalTreatmentCost"] == Decimal("200")


def test_exchange_shape_is_camel_case():
    payment = Payment.model_validate(
        {
            "patientId": "p1",
            "date": "2024-03-05",
            "amount": "50",
            "treatmentRecordId": "r1",
        }
    )

    assert payment.treatment_record_id == "r1"
    assert "treatmentRecordId" in payment.model_dump(by_alias=True)
