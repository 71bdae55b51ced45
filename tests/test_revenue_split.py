# tests/test_revenue_split.py
from datetime import date
from decimal import Decimal

import pytest

from clinicsync.schemas import TreatmentDefinition, TreatmentRecord
from clinicsync.services.revenue_split import (
    split,
    split_for_record,
    to_currency,
    validate_percentages,
)
from clinicsync.utils.exceptions import InvalidEntityError


def test_split_uses_doctor_percentage():
    shares = split(Decimal("200"), Decimal("0.4"))

    assert shares.doctor_share == Decimal("80.00")
    assert shares.clinic_share == Decimal("120.00")


def test_doctor_share_rounds_half_up_and_clinic_takes_the_rest():
    shares = split(Decimal("10.01"), Decimal("0.5"))

    assert shares.doctor_share == Decimal("5.01")
    assert shares.clinic_share == Decimal("5.00")


@pytest.mark.parametrize(
    "amount,percentage",
    [
        ("99.99", "0.3333"),
        ("0.01", "0.5"),
        ("1234.57", "0.6667"),
        ("333.33", "0.125"),
        ("0", "0.4"),
    ],
)
def test_shares_always_sum_to_amount(amount, percentage):
    shares = split(Decimal(amount), Decimal(percentage))

    assert shares.doctor_share + shares.clinic_share == Decimal(amount)


@pytest.mark.parametrize("amount", ["0.015", "10.005", "99.999", "1.0049"])
def test_extra_precision_is_rounded_before_splitting(amount):
    shares = split(Decimal(amount), Decimal("0.4"))

    assert shares.doctor_share + shares.clinic_share == to_currency(Decimal(amount))
    assert shares.clinic_share == shares.clinic_share.quantize(Decimal("0.01"))


def test_unlinked_payment_is_not_shared():
    shares = split_for_record(Decimal("50"), None, None)

    assert shares.doctor_share == 0
    assert shares.clinic_share == 0


def test_split_for_record_ignores_frozen_record_shares():
    definition = TreatmentDefinition(
        id="t1",
        name="Filling",
        base_price=Decimal("1000"),
        doctor_percentage=Decimal("0.5"),
        clinic_percentage=Decimal("0.5"),
    )
    record = TreatmentRecord(
        id="r1",
        patient_id="p1",
        practitioner_id="d1",
        treatment_definition_id="t1",
        treatment_date=date(2024, 1, 1),
        doctor_share=Decimal("600"),
        clinic_share=Decimal("400"),
    )

    shares = split_for_record(Decimal("500"), record, definition)

    assert shares.doctor_share == Decimal("250")
    assert shares.clinic_share == Decimal("250")


def test_validate_percentages_accepts_complementary_pair():
    validate_percentages(Decimal("0.35"), Decimal("0.65"))
    validate_percentages(Decimal("1"), Decimal("0"))


@pytest.mark.parametrize(
    "doctor,clinic",
    [("0.6", "0.5"), ("0.3", "0.3"), ("-0.2", "1.2"), ("1.5", "-0.5")],
)
def test_validate_percentages_rejects_bad_pairs(doctor, clinic):
    with pytest.raises(InvalidEntityError):
        validate_percentages(Decimal(doctor), Decimal(clinic))
