# tests/test_api.py
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from clinicsync.main import create_app
from clinicsync.services.settings_service import SettingsStore

HEADERS = {"X-Session-ID": "session-api"}


@pytest.fixture
def app(remote, tmp_path):
    return create_app(
        remote=remote,
        settings_store=SettingsStore(tmp_path / "settings.json"),
        use_lifespan=False,
    )


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def create(client, path, body):
    response = await client.post(path, json=body, headers=HEADERS)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def treatment(client):
    practitioner = await create(client, "/practitioners/", {"name": "Dr. Sami Haddad"})
    patient = await create(client, "/patients/", {"name": "Lina Odeh"})
    definition = await create(
        client,
        "/treatment-definitions/",
        {
            "name": "Crown",
            "basePrice": "200",
            "doctorPercentage": "0.4",
            "clinicPercentage": "0.6",
        },
    )
    record = await create(
        client,
        f"/patients/{patient['id']}/treatment-records",
        {
            "practitionerId": practitioner["id"],
            "treatmentDefinitionId": definition["id"],
            "treatmentDate": "2024-03-01",
            "doctorShare": "80",
            "clinicShare": "120",
        },
    )
    return practitioner, patient, definition, record


async def test_health(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_session_header_is_required(client):
    response = await client.get("/patients/")

    assert response.status_code == 400
    assert "X-Session-ID" in response.json()["message"]


async def test_created_patient_uses_camel_case(client):
    patient = await create(
        client, "/patients/", {"name": "Lina Odeh", "medicalHistory": "None"}
    )

    assert patient["medicalHistory"] == "None"
    assert len(patient["dentalChart"]) == 32

    listed = (await client.get("/patients/", headers=HEADERS)).json()
    assert [p["id"] for p in listed] == [patient["id"]]


async def test_record_reports_total_cost(treatment):
    _, patient, _, record = treatment

    assert record["patientId"] == patient["id"]
    assert Decimal(record["totalTreatmentCost"]) == Decimal("200")


async def test_payment_flow_and_practitioner_balance(client, treatment):
    practitioner, patient, _, record = treatment

    payment = await create(
        client,
        "/payments/",
        {
            "patientId": patient["id"],
            "date": "2024-03-05",
            "amount": "200",
            "method": "Cash",
            "treatmentRecordId": record["id"],
        },
    )

    assert Decimal(payment["doctorShare"]) == Decimal("80")
    derived = (await client.get("/practitioner-payments/", headers=HEADERS)).json()
    assert len(derived) == 1
    assert derived[0]["sourcePaymentId"] == payment["id"]

    balance = (
        await client.get(f"/practitioners/{practitioner['id']}/balance", headers=HEADERS)
    ).json()
    assert Decimal(balance["owed"]) == Decimal("0")

    response = await client.delete(f"/payments/{payment['id']}", headers=HEADERS)
    assert response.status_code == 204
    assert (await client.get("/practitioner-payments/", headers=HEADERS)).json() == []


async def test_invalid_percentages_are_unprocessable(client):
    response = await client.post(
        "/treatment-definitions/",
        json={"name": "Crown", "doctorPercentage": "0.6", "clinicPercentage": "0.6"},
        headers=HEADERS,
    )

    assert response.status_code == 422
    assert response.json()["type"] == "InvalidEntityError"


async def test_referenced_practitioner_delete_conflicts(client, treatment):
    practitioner, _, _, _ = treatment

    response = await client.delete(f"/practitioners/{practitioner['id']}", headers=HEADERS)

    assert response.status_code == 409


async def test_update_of_unknown_entity_is_not_found(client):
    response = await client.put(
        "/suppliers/does-not-exist", json={"name": "Ghost"}, headers=HEADERS
    )

    assert response.status_code == 404


async def test_update_entity(client):
    supplier = await create(client, "/suppliers/", {"name": "Dental Depot"})

    response = await client.put(
        f"/suppliers/{supplier['id']}",
        json={"name": "Dental Depot", "contactPerson": "Rami"},
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["contactPerson"] == "Rami"


async def test_cascade_failure_reports_committed_primary(client, remote, treatment):
    _, patient, _, record = treatment
    remote.fail_on.add(("insert", "doctor_payments"))

    response = await client.post(
        "/payments/",
        json={
            "patientId": patient["id"],
            "date": "2024-03-05",
            "amount": "200",
            "treatmentRecordId": record["id"],
        },
        headers=HEADERS,
    )

    assert response.status_code == 502
    body = response.json()
    assert body["type"] == "CascadeStepError"
    listed = (await client.get("/payments/", headers=HEADERS)).json()
    assert [p["id"] for p in listed] == [body["primary_id"]]


async def test_pay_supplier_invoice(client):
    supplier = await create(client, "/suppliers/", {"name": "Dental Depot"})
    invoice = await create(
        client,
        "/supplier-invoices/",
        {
            "supplierId": supplier["id"],
            "invoiceNumber": "INV-7",
            "invoiceDate": "2024-02-01",
            "amount": "75",
        },
    )

    response = await client.post(f"/supplier-invoices/{invoice['id']}/pay", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["description"] == "Payment for invoice #INV-7"
    balance = (
        await client.get(f"/supplier-invoices/{invoice['id']}/balance", headers=HEADERS)
    ).json()
    assert Decimal(balance["balance"]) == Decimal("0")
    assert balance["status"] == "PAID"


async def test_export_and_restore(client, treatment):
    exported = (await client.get("/data/export", headers=HEADERS)).json()
    assert len(exported["dentists"]) == 1

    response = await client.post(
        "/data/restore",
        json={"patients": [{"id": "sample-1", "name": "Restored Patient"}]},
        headers=HEADERS,
    )
    assert response.status_code == 200

    patients = (await client.get("/patients/", headers=HEADERS)).json()
    assert [p["name"] for p in patients] == ["Restored Patient"]
    assert patients[0]["id"] != "sample-1"

    response = await client.post("/data/restore", json=exported, headers=HEADERS)
    assert response.status_code == 200
    assert (await client.get("/data/export", headers=HEADERS)).json() == exported


async def test_settings_endpoints(client):
    response = await client.put(
        "/settings/clinic-info", json={"name": "Bright Smile", "email": "hi@brightsmile.jo"}
    )
    assert response.status_code == 200

    info = (await client.get("/settings/clinic-info")).json()
    assert info["name"] == "Bright Smile"

    response = await client.put("/settings/templates/reminder", json={"template": "Hi {patientName}"})
    assert response.json() == {"name": "reminder", "template": "Hi {patientName}"}
    assert (await client.get("/settings/templates/sms")).status_code == 404


async def test_release_session(client, app):
    await create(client, "/patients/", {"name": "Lina Odeh"})
    assert "session-api" in app.state.registry

    response = await client.delete("/data/session", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["message"] == "Clinic data released"
    assert "session-api" not in app.state.registry

    response = await client.get("/patients/", headers=HEADERS)
    assert [p["name"] for p in response.json()] == ["Lina Odeh"]
