from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

MISSING_ID = "0b5a2f9e-3c1d-4e8a-9f77-6d2c1b0a9e55"


def _ts(value: str) -> datetime:
    # API timestamps are UTC and may end in "Z"
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def payment(make_payment):
    return make_payment()


@pytest.fixture
def verification_body(customer, customer_session, payment):
    return {
        "customer_id": customer["customer_id"],
        "session_id": customer_session["session_id"],
        "payment_id": payment["payment_id"],
        "type": "email",
    }


def test_create_verification_defaults(client: TestClient, verification_body):
    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["attempts"] == 0
    assert data["verified_at"] is None
    created = _ts(data["created_at"])
    assert _ts(data["expires_at"]) == created + timedelta(minutes=15)
    assert data["customer"]["customer_id"] == verification_body["customer_id"]
    assert data["session"]["session_id"] == verification_body["session_id"]
    assert data["payment"]["payment_id"] == verification_body["payment_id"]


def test_create_verification_unknown_session(client: TestClient, verification_body):
    """Missing session is reported and no verification is written"""
    verification_body["session_id"] = MISSING_ID

    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 400
    assert response.json()["kind"] == "session-not-found"
    assert client.get("/api/verifications").json() == []


def test_create_verification_unknown_payment(client: TestClient, verification_body):
    verification_body["payment_id"] = MISSING_ID

    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 400
    assert response.json()["kind"] == "payment-not-found"


def test_reference_checks_run_in_fixed_order(client: TestClient, verification_body):
    body = dict(verification_body, customer_id=MISSING_ID, session_id=MISSING_ID, payment_id=MISSING_ID)
    assert client.post("/api/verifications", json=body).json()["kind"] == "customer-not-found"

    body = dict(verification_body, session_id=MISSING_ID, payment_id=MISSING_ID)
    assert client.post("/api/verifications", json=body).json()["kind"] == "session-not-found"


def test_create_verification_rejects_negative_attempts(client: TestClient, verification_body):
    verification_body["attempts"] = -1

    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "attempts"


def test_create_verification_rejects_unknown_status(client: TestClient, verification_body):
    verification_body["status"] = "done"

    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 400


def test_list_verifications_newest_first(client: TestClient, verification_body):
    first = client.post("/api/verifications", json=dict(verification_body, type="email")).json()
    second = client.post("/api/verifications", json=dict(verification_body, type="sms")).json()

    response = client.get("/api/verifications")

    assert response.status_code == 200
    assert [v["verification_id"] for v in response.json()] == [second["verification_id"], first["verification_id"]]


def test_approve_verification(client: TestClient, verification_body):
    created = client.post("/api/verifications", json=verification_body).json()

    response = client.put(
        f"/api/verifications/{created['verification_id']}", json={"status": "approved", "attempts": 2}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "approved"
    assert data["attempts"] == 2
    assert data["verified_at"] is not None
    assert data["type"] == "email"


def test_update_verification_unknown_payment(client: TestClient, verification_body):
    created = client.post("/api/verifications", json=verification_body).json()

    response = client.put(f"/api/verifications/{created['verification_id']}", json={"payment_id": MISSING_ID})

    assert response.status_code == 400
    assert response.json()["kind"] == "payment-not-found"


def test_update_missing_verification(client: TestClient):
    response = client.put(f"/api/verifications/{MISSING_ID}", json={"payment_id": MISSING_ID})

    assert response.status_code == 404


def test_delete_verification(client: TestClient, verification_body):
    created = client.post("/api/verifications", json=verification_body).json()

    assert client.delete(f"/api/verifications/{created['verification_id']}").status_code == 204
    assert client.get(f"/api/verifications/{created['verification_id']}").status_code == 404


def test_create_verification_unknown_customer(client: TestClient, verification_body):
    verification_body["customer_id"] = MISSING_ID

    response = client.post("/api/verifications", json=verification_body)

    assert response.status_code == 400
    assert response.json()["kind"] == "customer-not-found"
    assert client.get("/api/verifications").json() == []


def test_update_missing_verification_ignores_invalid_body(client: TestClient):
    response = client.put(f"/api/verifications/{MISSING_ID}", json={"attempts": -1})

    assert response.status_code == 404


def test_delete_missing_verification(client: TestClient):
    response = client.delete(f"/api/verifications/{MISSING_ID}")

    assert response.status_code == 404
