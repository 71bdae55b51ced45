# tests/conftest.py
import os

os.environ.setdefault("SQLITE_MODE", "true")
os.environ.setdefault("REFETCH_SCOPE", "all")

from datetime import date
from decimal import Decimal

import pytest

from clinicsync.db.database import build_engine, build_session_factory, create_tables
from clinicsync.db.remote_store import RemoteStore
from clinicsync.schemas import (
    Patient,
    Practitioner,
    TreatmentDefinition,
    TreatmentRecord,
    Supplier,
)
from clinicsync.services.clinic_data_service import ClinicDataService
from clinicsync.utils.exceptions import RemoteReadError, RemoteWriteError

OWNER_ID = "session-a"
TREATMENT_DATE = date(2024, 3, 1)
PAYMENT_DATE = date(2024, 3, 5)


class FlakyRemoteStore(RemoteStore):
    """Remote store that fails the (operation, table) pairs listed in fail_on"""

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self.fail_on = set()

    def _check(self, operation, table):
        if (operation, table) not in self.fail_on:
            return
        if operation.startswith("select"):
            raise RemoteReadError([table], "injected failure")
        raise RemoteWriteError(table, operation, "injected failure")

    async def select_all(self, table, owner_id):
        self._check("select_all", table)
        return await super().select_all(table, owner_id)

    async def select_one(self, table, owner_id, entity_id):
        self._check("select_one", table)
        return await super().select_one(table, owner_id, entity_id)

    async def insert(self, table, values):
        self._check("insert", table)
        return await super().insert(table, values)

    async def update(self, table, owner_id, entity_id, values):
        self._check("update", table)
        return await super().update(table, owner_id, entity_id, values)

    async def delete(self, table, owner_id, entity_id):
        self._check("delete", table)
        return await super().delete(table, owner_id, entity_id)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def remote(engine):
    return FlakyRemoteStore(build_session_factory(engine))


@pytest.fixture
async def clinic(remote):
    service = ClinicDataService(remote, OWNER_ID)
    await service.refresh()
    return service


async def seed_treatment(
    clinic,
    doctor_percentage="0.4",
    doctor_share="80",
    clinic_share="120",
    base_price="200",
):
    """Practitioner, patient, definition and one treatment record"""
    practitioner = await clinic.practitioners.add(
        Practitioner(name="Dr. Sami Haddad", specialty="Prosthodontics")
    )
    patient = await clinic.patients.add(Patient(name="Lina Odeh", phone="0790000000"))
    definition = await clinic.treatment_definitions.add(
        TreatmentDefinition(
            name="Crown",
            base_price=Decimal(base_price),
            doctor_percentage=Decimal(doctor_percentage),
            clinic_percentage=Decimal("1") - Decimal(doctor_percentage),
        )
    )
    record = await clinic.add_treatment_record(
        patient.id,
        TreatmentRecord(
            patient_id=patient.id,
            practitioner_id=practitioner.id,
            treatment_definition_id=definition.id,
            treatment_date=TREATMENT_DATE,
            doctor_share=Decimal(doctor_share),
            clinic_share=Decimal(clinic_share),
        ),
    )
    return practitioner, patient, definition, record


@pytest.fixture
async def seeded(clinic):
    return await seed_treatment(clinic)


@pytest.fixture
async def lab(clinic):
    return await clinic.suppliers.add(Supplier(name="Smile Lab", type="Dental Lab"))
