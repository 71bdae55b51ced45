# src/clinicsync/services/revenue_split.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from clinicsync.core.config import settings
from clinicsync.schemas.treatment_schemas import (
    RevenueSplit,
    TreatmentDefinition,
    TreatmentRecord,
)
from clinicsync.utils.exceptions import InvalidEntityError

ZERO = Decimal("0")
ONE = Decimal("1")


def to_currency(amount: Decimal, quantum: Optional[Decimal] = None) -> Decimal:
    quantum = quantum or settings.CURRENCY_QUANTUM
    return Decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)


def split(
    amount: Decimal,
    doctor_percentage: Decimal,
    quantum: Optional[Decimal] = None,
) -> RevenueSplit:
    """Split an amount between practitioner and clinic.

    The amount is first rounded half-up to the currency quantum, as it is
    stored. The practitioner share is rounded the same way and the clinic
    takes the remainder, so the two always add up to the stored amount.
    """
    quantum = quantum or settings.CURRENCY_QUANTUM
    amount = to_currency(amount, quantum)
    doctor_share = (amount * Decimal(doctor_percentage)).quantize(
        quantum, rounding=ROUND_HALF_UP
    )
    return RevenueSplit(doctor_share=doctor_share, clinic_share=amount - doctor_share)


def split_for_record(
    amount: Decimal,
    record: Optional[TreatmentRecord],
    definition: Optional[TreatmentDefinition],
) -> RevenueSplit:
    """Split a payment using the current percentages of its treatment.

    A payment with no known record or definition is not shared.
    """
    if record is None or definition is None:
        return RevenueSplit(doctor_share=ZERO, clinic_share=ZERO)
    return split(amount, definition.doctor_percentage)


def validate_percentages(doctor_percentage: Decimal, clinic_percentage: Decimal):
    doctor = Decimal(doctor_percentage)
    clinic = Decimal(clinic_percentage)
    for label, value in (("doctor", doctor), ("clinic", clinic)):
        if value < ZERO or value > ONE:
            raise InvalidEntityError(
                f"The {label} percentage must be between 0 and 1, got {value}"
            )
    if doctor + clinic != ONE:
        raise InvalidEntityError(
            f"Doctor and clinic percentages must add up to 1, got {doctor + clinic}"
        )
