# src/clinicsync/services/cascade_service.py
"""
Cascades that keep derived records in step with the records they come from.

Every step is its own remote write. A failing derived write does not roll
back the primary write before it; it is reported as a CascadeStepError that
carries the committed primary entity.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from clinicsync.core.entity_types import EntityType
from clinicsync.models.lab_case import DRAFTING_STATUSES
from clinicsync.models.supplier import ExpenseCategory, SupplierInvoiceStatus
from clinicsync.schemas.lab_case_schemas import LabCase
from clinicsync.schemas.payment_schemas import Payment, PractitionerPayment
from clinicsync.schemas.supplier_schemas import (
    Expense,
    InvoiceAllocation,
    InvoiceLine,
    SupplierInvoice,
)
from clinicsync.schemas.treatment_schemas import RevenueSplit, TreatmentRecord
from clinicsync.services.base_service import MutationGateway
from clinicsync.services.revenue_split import split_for_record, to_currency
from clinicsync.utils.exceptions import (
    CascadeStepError,
    ClinicSyncError,
    EntityNotFoundError,
)
from clinicsync.utils.logger import setup_logger

logger = setup_logger("CASCADE_SERVICE")

ZERO = Decimal("0")


def derived_payment_note(record: TreatmentRecord) -> str:
    return f"Payment share from treatment on {record.treatment_date.isoformat()}"


class CascadeCoordinator:
    def __init__(self, gateway: MutationGateway):
        self.gateway = gateway
        self.store = gateway.store

    def _record_for(self, payment: Payment) -> Optional[TreatmentRecord]:
        return self.store.get(EntityType.TREATMENT_RECORD, payment.treatment_record_id)

    def _priced(self, payment: Payment) -> Payment:
        """The payment as it will be stored, amount rounded and shares set"""
        shares = self._split_for(payment)
        return payment.model_copy(
            update={"amount": to_currency(payment.amount), **shares.model_dump()}
        )

    def _split_for(self, payment: Payment) -> RevenueSplit:
        record = self._record_for(payment)
        definition = (
            self.store.get(EntityType.TREATMENT_DEFINITION, record.treatment_definition_id)
            if record is not None
            else None
        )
        return split_for_record(payment.amount, record, definition)

    async def _stored_payment(self, payment_id: str) -> Payment:
        payment = self.store.get(EntityType.PAYMENT, payment_id)
        if payment is None:
            payment = await self.gateway.fetch_one(EntityType.PAYMENT, payment_id)
        if payment is None:
            raise EntityNotFoundError("Payment", payment_id)
        return payment

    def find_derived_payment(self, payment: Payment) -> Optional[PractitionerPayment]:
        """Locate the practitioner payment derived from a patient payment

        Rows carrying a back-reference are matched on it. Older rows without
        one are matched on practitioner, date, amount and the treatment date
        in the note.
        """
        candidates = self.store.all(EntityType.PRACTITIONER_PAYMENT)

        linked = [p for p in candidates if p.source_payment_id == payment.id]
        if linked:
            if len(linked) > 1:
                logger.warning(
                    f"{len(linked)} practitioner payments reference payment {payment.id}, using the first"
                )
            return linked[0]

        record = self._record_for(payment)
        if record is None or payment.doctor_share <= ZERO:
            return None

        treatment_day = record.treatment_date.isoformat()
        matches = [
            p
            for p in candidates
            if p.source_payment_id is None
            and p.practitioner_id == record.practitioner_id
            and p.date == payment.date
            and p.amount == payment.doctor_share
            and treatment_day in (p.note or "")
        ]
        if len(matches) > 1:
            logger.warning(
                f"Ambiguous practitioner payment match for payment {payment.id}: "
                f"{[p.id for p in matches]}, using the first"
            )
        return matches[0] if matches else None

    async def add_payment(self, payment: Payment) -> Payment:
        created = await self.gateway.add(EntityType.PAYMENT, self._priced(payment))

        record = self._record_for(created)
        if record is None or created.doctor_share <= ZERO:
            return created

        derived = PractitionerPayment(
            practitioner_id=record.practitioner_id,
            amount=created.doctor_share,
            date=created.date,
            note=derived_payment_note(record),
            source_payment_id=created.id,
        )
        try:
            await self.gateway.add(EntityType.PRACTITIONER_PAYMENT, derived)
        except ClinicSyncError as e:
            raise CascadeStepError("add practitioner payment", created, e) from e
        return created

    async def update_payment(self, payment: Payment) -> Payment:
        previous = await self._stored_payment(payment.id)
        derived = self.find_derived_payment(previous)

        updated = self._priced(payment)
        await self.gateway.update(EntityType.PAYMENT, updated)

        record = self._record_for(updated)
        new_share = updated.doctor_share if record is not None else ZERO
        try:
            if derived is not None and new_share > ZERO:
                desired = derived.model_copy(
                    update={
                        "practitioner_id": record.practitioner_id,
                        "amount": new_share,
                        "date": updated.date,
                        "note": derived_payment_note(record),
                        "source_payment_id": updated.id,
                    }
                )
                if desired != derived:
                    await self.gateway.update(EntityType.PRACTITIONER_PAYMENT, desired)
                else:
                    logger.debug(f"Practitioner payment {derived.id} already up to date")
            elif derived is not None:
                await self.gateway.delete(EntityType.PRACTITIONER_PAYMENT, derived.id)
            elif new_share > ZERO:
                await self.gateway.add(
                    EntityType.PRACTITIONER_PAYMENT,
                    PractitionerPayment(
                        practitioner_id=record.practitioner_id,
                        amount=new_share,
                        date=updated.date,
                        note=derived_payment_note(record),
                        source_payment_id=updated.id,
                    ),
                )
        except ClinicSyncError as e:
            raise CascadeStepError("sync practitioner payment", updated, e) from e
        return updated

    async def delete_payment(self, payment_id: str):
        payment = await self._stored_payment(payment_id)
        derived = self.find_derived_payment(payment)

        # A failed derived delete aborts before the payment is touched
        if derived is not None:
            await self.gateway.delete(EntityType.PRACTITIONER_PAYMENT, derived.id)

        await self.gateway.delete(EntityType.PAYMENT, payment_id)

    async def add_expense(self, expense: Expense) -> Expense:
        created = await self.gateway.add(EntityType.EXPENSE, expense)
        if not created.supplier_invoice_id:
            return created

        try:
            # Read-modify-write on the remote copy, the local one may be stale
            invoice = await self.gateway.fetch_one(
                EntityType.SUPPLIER_INVOICE, created.supplier_invoice_id
            )
            if invoice is None:
                logger.warning(
                    f"Expense {created.id} references unknown invoice {created.supplier_invoice_id}"
                )
                return created

            allocations = invoice.payments + [
                InvoiceAllocation(
                    expense_id=created.id, amount=created.amount, date=created.date
                )
            ]
            total_paid = sum((a.amount for a in allocations), ZERO)
            status = (
                SupplierInvoiceStatus.PAID.value
                if total_paid >= invoice.amount
                else invoice.status
            )
            await self.gateway.update(
                EntityType.SUPPLIER_INVOICE,
                invoice.model_copy(update={"payments": allocations, "status": status}),
            )
        except ClinicSyncError as e:
            raise CascadeStepError("allocate expense to invoice", created, e) from e
        return created

    async def pay_supplier_invoice(self, invoice: SupplierInvoice) -> Optional[Expense]:
        """Settle the outstanding balance of an invoice with one expense"""
        balance = invoice.balance
        if balance <= ZERO:
            logger.info(f"Invoice {invoice.id} has nothing left to pay")
            return None

        label = invoice.invoice_number or invoice.id[-4:]
        expense = Expense(
            date=date.today(),
            description=f"Payment for invoice #{label}",
            amount=balance,
            category=ExpenseCategory.SUPPLIES,
            supplier_id=invoice.supplier_id,
            supplier_invoice_id=invoice.id,
        )
        return await self.add_expense(expense)

    async def realize_lab_case_cost(
        self, lab_case: LabCase, previous_status: Optional[str] = None
    ) -> Optional[SupplierInvoice]:
        """Invoice the lab once a case leaves the drafting states

        ``previous_status`` is None for a new case, which counts as drafting.
        """
        if previous_status is not None and previous_status not in DRAFTING_STATUSES:
            return None
        if lab_case.status in DRAFTING_STATUSES or lab_case.lab_cost <= ZERO:
            return None

        lab = self.store.get(EntityType.SUPPLIER, lab_case.lab_id)
        if lab is None:
            logger.warning(f"Lab case {lab_case.id} references unknown lab {lab_case.lab_id}")
            return None

        timestamp = int(datetime.now().timestamp() * 1000)
        invoice = SupplierInvoice(
            supplier_id=lab.id,
            invoice_number=f"LC-{lab_case.case_type}-{timestamp}",
            invoice_date=date.today(),
            due_date=lab_case.due_date,
            amount=lab_case.lab_cost,
            status=SupplierInvoiceStatus.UNPAID,
            items=[
                InvoiceLine(
                    description=f"Lab case: {lab_case.case_type}",
                    amount=lab_case.lab_cost,
                )
            ],
            payments=[],
        )
        return await self.gateway.add(EntityType.SUPPLIER_INVOICE, invoice)
