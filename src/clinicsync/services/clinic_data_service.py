# src/clinicsync/services/clinic_data_service.py
from collections import OrderedDict
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union
from clinicsync.core.config import settings
from clinicsync.core.entity_types import EntityType, RESTORE_ORDER
from clinicsync.db.mapping import get_mapping
from clinicsync.db.remote_store import RemoteStore
from clinicsync.schemas.base_schemas import EntitySchema
from clinicsync.schemas.patient_schemas import create_empty_chart
from clinicsync.schemas.practitioner_schemas import PractitionerBalance
from clinicsync.schemas.snapshot_schemas import ClinicSnapshot, SNAPSHOT_FIELDS
from clinicsync.schemas.supplier_schemas import InvoiceBalance, SupplierInvoice, Expense
from clinicsync.schemas.treatment_schemas import TreatmentDefinition, TreatmentRecord
from clinicsync.schemas.lab_case_schemas import LabCase
from clinicsync.services.base_service import MutationGateway
from clinicsync.services.cascade_service import CascadeCoordinator
from clinicsync.services.entity_store import EntityStore
from clinicsync.services.revenue_split import validate_percentages
from clinicsync.utils.exceptions import (
    CascadeStepError,
    ClinicSyncError,
    EntityInUseError,
    EntityNotFoundError,
    RemoteReadError,
)
from clinicsync.utils.logger import setup_logger

logger = setup_logger("CLINIC_DATA_SERVICE")

Handler = Callable[..., Awaitable[Any]]

# Collections whose rows point at a practitioner
PRACTITIONER_REFERENCES = (
    EntityType.APPOINTMENT,
    EntityType.TREATMENT_RECORD,
    EntityType.PRACTITIONER_PAYMENT,
    EntityType.PRESCRIPTION,
)


class EntityCollection:
    """Consumer view of one entity type: reads from the local store,
    writes through the gateway or a cascade"""

    def __init__(
        self,
        gateway: MutationGateway,
        entity_type: EntityType,
        add: Optional[Handler] = None,
        update: Optional[Handler] = None,
        delete: Optional[Handler] = None,
    ):
        self.gateway = gateway
        self.entity_type = entity_type
        self.schema: Type[EntitySchema] = get_mapping(entity_type).schema
        self._add = add or (lambda entity: gateway.add(entity_type, entity))
        self._update = update or (lambda entity: gateway.update(entity_type, entity))
        self._delete = delete or (lambda entity_id: gateway.delete(entity_type, entity_id))

    def _coerce(self, entity: Union[EntitySchema, Dict[str, Any]]) -> EntitySchema:
        if isinstance(entity, self.schema):
            return entity
        if isinstance(entity, EntitySchema):
            entity = entity.model_dump()
        return self.schema.model_validate(entity)

    @property
    def entities(self) -> List[EntitySchema]:
        return self.gateway.store.all(self.entity_type)

    def get(self, entity_id: str) -> Optional[EntitySchema]:
        return self.gateway.store.get(self.entity_type, entity_id)

    async def add(self, entity):
        return await self._add(self._coerce(entity))

    async def update(self, entity):
        return await self._update(self._coerce(entity))

    async def delete(self, entity_id: str):
        return await self._delete(entity_id)


class ClinicDataService:
    """Everything one session can see and do with its clinic data"""

    def __init__(
        self,
        remote: RemoteStore,
        owner_id: str,
        refetch_scope: Optional[str] = None,
    ):
        self.owner_id = owner_id
        self.store = EntityStore()
        self.gateway = MutationGateway(remote, self.store, owner_id, refetch_scope)
        self.cascades = CascadeCoordinator(self.gateway)

        gateway = self.gateway
        self.patients = EntityCollection(gateway, EntityType.PATIENT, add=self._add_patient)
        self.practitioners = EntityCollection(
            gateway, EntityType.PRACTITIONER, delete=self._delete_practitioner
        )
        self.appointments = EntityCollection(
            gateway, EntityType.APPOINTMENT, add=self._add_appointment
        )
        self.treatment_definitions = EntityCollection(
            gateway,
            EntityType.TREATMENT_DEFINITION,
            add=self._add_treatment_definition,
            update=self._update_treatment_definition,
        )
        self.treatment_records = EntityCollection(gateway, EntityType.TREATMENT_RECORD)
        self.payments = EntityCollection(
            gateway,
            EntityType.PAYMENT,
            add=self.cascades.add_payment,
            update=self.cascades.update_payment,
            delete=self.cascades.delete_payment,
        )
        self.practitioner_payments = EntityCollection(gateway, EntityType.PRACTITIONER_PAYMENT)
        self.suppliers = EntityCollection(gateway, EntityType.SUPPLIER)
        self.supplier_invoices = EntityCollection(
            gateway, EntityType.SUPPLIER_INVOICE, add=self._add_supplier_invoice
        )
        self.expenses = EntityCollection(
            gateway, EntityType.EXPENSE, add=self.cascades.add_expense
        )
        self.inventory_items = EntityCollection(gateway, EntityType.INVENTORY_ITEM)
        self.lab_cases = EntityCollection(
            gateway,
            EntityType.LAB_CASE,
            add=self._add_lab_case,
            update=self._update_lab_case,
        )
        self.prescriptions = EntityCollection(gateway, EntityType.PRESCRIPTION)
        self.prescription_items = EntityCollection(gateway, EntityType.PRESCRIPTION_ITEM)
        self.attachments = EntityCollection(
            gateway, EntityType.ATTACHMENT, add=self._add_attachment
        )

    def collection(self, entity_type: EntityType) -> EntityCollection:
        return getattr(self, SNAPSHOT_FIELDS[EntityType(entity_type)])

    # Hooks

    async def _add_patient(self, patient):
        # New patients always start from a healthy chart
        patient = patient.model_copy(update={"dental_chart": create_empty_chart()})
        return await self.gateway.add(EntityType.PATIENT, patient)

    async def _add_appointment(self, appointment):
        appointment = appointment.model_copy(update={"reminder_sent": False})
        return await self.gateway.add(EntityType.APPOINTMENT, appointment)

    async def _add_treatment_definition(self, definition: TreatmentDefinition):
        validate_percentages(definition.doctor_percentage, definition.clinic_percentage)
        return await self.gateway.add(EntityType.TREATMENT_DEFINITION, definition)

    async def _update_treatment_definition(self, definition: TreatmentDefinition):
        validate_percentages(definition.doctor_percentage, definition.clinic_percentage)
        return await self.gateway.update(EntityType.TREATMENT_DEFINITION, definition)

    async def _add_supplier_invoice(self, invoice: SupplierInvoice):
        invoice = invoice.model_copy(update={"payments": []})
        return await self.gateway.add(EntityType.SUPPLIER_INVOICE, invoice)

    async def _add_attachment(self, attachment):
        attachment = attachment.model_copy(update={"uploaded_by": self.owner_id})
        return await self.gateway.add(EntityType.ATTACHMENT, attachment)

    async def _delete_practitioner(self, practitioner_id: str):
        in_use = [
            entity_type.table
            for entity_type in PRACTITIONER_REFERENCES
            if any(
                e.practitioner_id == practitioner_id for e in self.store.all(entity_type)
            )
        ]
        if in_use:
            raise EntityInUseError(
                f"Practitioner {practitioner_id} is still referenced by {', '.join(in_use)}"
            )
        await self.gateway.delete(EntityType.PRACTITIONER, practitioner_id)

    async def _add_lab_case(self, lab_case: LabCase):
        created = await self.gateway.add(EntityType.LAB_CASE, lab_case)
        await self._realize_lab_case_cost(created, None)
        return created

    async def _update_lab_case(self, lab_case: LabCase):
        previous = self.store.get(EntityType.LAB_CASE, lab_case.id)
        if previous is None:
            previous = await self.gateway.fetch_one(EntityType.LAB_CASE, lab_case.id)
        if previous is None:
            raise EntityNotFoundError("Lab case", lab_case.id)

        updated = await self.gateway.update(EntityType.LAB_CASE, lab_case)
        await self._realize_lab_case_cost(updated, previous.status)
        return updated

    async def _realize_lab_case_cost(self, lab_case: LabCase, previous_status: Optional[str]):
        try:
            await self.cascades.realize_lab_case_cost(lab_case, previous_status)
        except ClinicSyncError as e:
            raise CascadeStepError("invoice lab case", lab_case, e) from e

    # Composite actions

    async def pay_supplier_invoice(self, invoice: SupplierInvoice) -> Optional[Expense]:
        return await self.cascades.pay_supplier_invoice(invoice)

    async def add_treatment_record(
        self, patient_id: str, record: Union[TreatmentRecord, Dict[str, Any]]
    ) -> TreatmentRecord:
        if isinstance(record, dict):
            record = {**record, "patient_id": patient_id}
        else:
            record = record.model_copy(update={"patient_id": patient_id})
        return await self.treatment_records.add(record)

    async def refresh(self):
        await self.gateway.refetch()

    def export_snapshot(self) -> ClinicSnapshot:
        return ClinicSnapshot(
            **{
                SNAPSHOT_FIELDS[entity_type]: self.store.all(entity_type)
                for entity_type in EntityType
            }
        )

    async def restore(self, snapshot: ClinicSnapshot):
        """Replace every row of this session with the snapshot

        Not atomic: a failing write leaves whatever was written so far and
        the local store is reloaded to match it.
        """
        try:
            await self._restore(snapshot)
        except ClinicSyncError:
            try:
                await self.gateway.refetch()
            except RemoteReadError as e:
                logger.warning(f"Reload after failed restore incomplete: {e.message}")
            raise
        await self.gateway.refetch()
        logger.info(f"Restored snapshot for session {self.owner_id}")

    async def _restore(self, snapshot: ClinicSnapshot):
        remote = self.gateway.remote
        for entity_type in reversed(RESTORE_ORDER):
            await remote.delete_all(entity_type.table, self.owner_id)

        # Old id -> id assigned on insert, only for rows that got a fresh id
        remapped: Dict[str, str] = {}
        invoices: List[SupplierInvoice] = []

        for entity_type in RESTORE_ORDER:
            mapping = get_mapping(entity_type)
            entities = getattr(snapshot, SNAPSHOT_FIELDS[entity_type]) or []
            for entity in entities:
                update = {
                    field: remapped[getattr(entity, field)]
                    for field in mapping.references
                    if getattr(entity, field) in remapped
                }
                original_id = entity.id
                if original_id and original_id.startswith(settings.SAMPLE_ID_PREFIX):
                    update["id"] = None
                entity = entity.model_copy(update=update)

                record = await remote.insert(
                    entity_type.table, self.gateway.insert_values(entity_type, entity)
                )
                if original_id and record["id"] != original_id:
                    remapped[original_id] = record["id"]
                if entity_type == EntityType.SUPPLIER_INVOICE:
                    invoices.append(mapping.from_storage(record))

            logger.debug(f"Restored {len(entities)} {entity_type.table}")

        # Allocations name expenses, which are written after the invoices
        invoice_mapping = get_mapping(EntityType.SUPPLIER_INVOICE)
        for invoice in invoices:
            if not any(a.expense_id in remapped for a in invoice.payments):
                continue
            allocations = [
                a.model_copy(update={"expense_id": remapped.get(a.expense_id, a.expense_id)})
                for a in invoice.payments
            ]
            invoice = invoice.model_copy(update={"payments": allocations})
            await remote.update(
                EntityType.SUPPLIER_INVOICE.table,
                self.owner_id,
                invoice.id,
                invoice_mapping.to_storage(invoice),
            )

    def practitioner_balance(self, practitioner_id: str) -> PractitionerBalance:
        if self.store.get(EntityType.PRACTITIONER, practitioner_id) is None:
            raise EntityNotFoundError("Practitioner", practitioner_id)

        accrued = sum(
            (
                r.doctor_share
                for r in self.store.all(EntityType.TREATMENT_RECORD)
                if r.practitioner_id == practitioner_id
            ),
            Decimal("0"),
        )
        paid = sum(
            (
                p.amount
                for p in self.store.all(EntityType.PRACTITIONER_PAYMENT)
                if p.practitioner_id == practitioner_id
            ),
            Decimal("0"),
        )
        return PractitionerBalance(
            practitioner_id=practitioner_id, accrued=accrued, paid=paid, owed=accrued - paid
        )

    def invoice_balance(self, invoice_id: str) -> InvoiceBalance:
        invoice = self.store.get(EntityType.SUPPLIER_INVOICE, invoice_id)
        if invoice is None:
            raise EntityNotFoundError("Supplier invoice", invoice_id)
        return InvoiceBalance(
            invoice_id=invoice.id,
            amount=invoice.amount,
            total_paid=invoice.total_paid,
            balance=invoice.balance,
            status=invoice.status,
        )


class ClinicDataRegistry:
    """One loaded ClinicDataService per session

    At most ``max_sessions`` services are kept. Loading one more evicts the
    least recently used session, which is reloaded from the remote store on
    its next request.
    """

    def __init__(
        self,
        remote: RemoteStore,
        refetch_scope: Optional[str] = None,
        max_sessions: Optional[int] = None,
    ):
        self.remote = remote
        self.refetch_scope = refetch_scope
        self.max_sessions = max_sessions or settings.MAX_LOADED_SESSIONS
        self._services: "OrderedDict[str, ClinicDataService]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, owner_id: str) -> bool:
        return owner_id in self._services

    async def get(self, owner_id: str) -> ClinicDataService:
        service = self._services.get(owner_id)
        if service is not None:
            self._services.move_to_end(owner_id)
            return service

        service = ClinicDataService(self.remote, owner_id, self.refetch_scope)
        await service.refresh()
        service = self._services.setdefault(owner_id, service)
        self._services.move_to_end(owner_id)
        logger.info(f"Loaded clinic data for session {owner_id}")

        while len(self._services) > self.max_sessions:
            evicted, _ = self._services.popitem(last=False)
            logger.info(f"Evicted clinic data for session {evicted}")
        return service

    def evict(self, owner_id: str) -> bool:
        """Drop a session's loaded data, True when it was loaded"""
        if self._services.pop(owner_id, None) is None:
            return False
        logger.info(f"Evicted clinic data for session {owner_id}")
        return True
