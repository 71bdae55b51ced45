# src/clinicsync/routes/finance.py
from fastapi import APIRouter, Depends, status
from typing import Any, Optional
from clinicsync.dependencies.session_deps import get_clinic_data
from clinicsync.schemas.practitioner_schemas import PractitionerBalance
from clinicsync.schemas.supplier_schemas import Expense, InvoiceBalance
from clinicsync.schemas.treatment_schemas import TreatmentRecord, TreatmentRecordCreate
from clinicsync.services.clinic_data_service import ClinicDataService
from clinicsync.utils.exceptions import NotFoundException
from clinicsync.utils.logger import setup_logger

router = APIRouter(tags=["finance"])
logger = setup_logger("FINANCE_ROUTES")


@router.post(
    "/supplier-invoices/{invoice_id}/pay",
    response_model=Optional[Expense],
    summary="Pay supplier invoice",
    description="Settle the outstanding balance with a single expense",
)
async def pay_supplier_invoice(
    invoice_id: str,
    data: ClinicDataService = Depends(get_clinic_data),
) -> Any:
    invoice = data.supplier_invoices.get(invoice_id)
    if invoice is None:
        raise NotFoundException(f"Supplier invoice {invoice_id} not found")
    return await data.pay_supplier_invoice(invoice)


@router.post(
    "/patients/{patient_id}/treatment-records",
    response_model=TreatmentRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Record treatment",
)
async def add_treatment_record(
    patient_id: str,
    record: TreatmentRecordCreate,
    data: ClinicDataService = Depends(get_clinic_data),
) -> Any:
    if data.patients.get(patient_id) is None:
        raise NotFoundException(f"Patient {patient_id} not found")
    return await data.add_treatment_record(patient_id, record.model_dump())


@router.get(
    "/practitioners/{practitioner_id}/balance",
    response_model=PractitionerBalance,
    summary="Practitioner balance",
    description="Accrued treatment shares, amounts paid and what is still owed",
)
async def practitioner_balance(
    practitioner_id: str,
    data: ClinicDataService = Depends(get_clinic_data),
) -> Any:
    return data.practitioner_balance(practitioner_id)


@router.get(
    "/supplier-invoices/{invoice_id}/balance",
    response_model=InvoiceBalance,
    summary="Supplier invoice balance",
)
async def invoice_balance(
    invoice_id: str,
    data: ClinicDataService = Depends(get_clinic_data),
) -> Any:
    return data.invoice_balance(invoice_id)
