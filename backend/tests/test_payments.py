from decimal import Decimal

from fastapi.testclient import TestClient

MISSING_ID = "0b5a2f9e-3c1d-4e8a-9f77-6d2c1b0a9e55"


def test_create_payment_defaults(client: TestClient, customer, product):
    response = client.post(
        "/api/payments",
        json={
            "customer_id": customer["customer_id"],
            "product_id": product["product_id"],
            "amount": 1500.5,
            "method": "card",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["currency"] == "MXN"
    assert data["status"] == "pending"
    assert data["paid_at"] is None
    assert isinstance(data["amount"], str)
    assert Decimal(data["amount"]) == Decimal("1500.50")
    assert data["product"]["product_id"] == product["product_id"]


def test_currency_is_uppercased(make_payment):
    payment = make_payment(currency="usd")

    assert payment["currency"] == "USD"


def test_create_paid_payment_stamps_paid_at(make_payment):
    payment = make_payment(status="paid")

    assert payment["paid_at"] is not None


def test_create_payment_rejects_non_positive_amount(client: TestClient, customer, product):
    for amount in (0, "-10.00"):
        response = client.post(
            "/api/payments",
            json={
                "customer_id": customer["customer_id"],
                "product_id": product["product_id"],
                "amount": amount,
                "method": "card",
            },
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "amount"


def test_create_payment_rejects_bad_currency(client: TestClient, customer, product):
    response = client.post(
        "/api/payments",
        json={
            "customer_id": customer["customer_id"],
            "product_id": product["product_id"],
            "amount": 10,
            "method": "card",
            "currency": "DOLLARS",
        },
    )

    assert response.status_code == 400


def test_create_payment_unknown_product(client: TestClient, customer):
    response = client.post(
        "/api/payments",
        json={"customer_id": customer["customer_id"], "product_id": MISSING_ID, "amount": 10, "method": "cash"},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "product-not-found"
    assert client.get("/api/payments").json() == []


def test_missing_customer_reported_before_missing_product(client: TestClient):
    response = client.post(
        "/api/payments",
        json={"customer_id": MISSING_ID, "product_id": MISSING_ID, "amount": 10, "method": "cash"},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "customer-not-found"


def test_mark_payment_paid(client: TestClient, make_payment):
    payment = make_payment()

    response = client.put(f"/api/payments/{payment['payment_id']}", json={"status": "paid", "external_ref": "ch_123"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "paid"
    assert data["paid_at"] is not None
    assert data["external_ref"] == "ch_123"
    assert Decimal(data["amount"]) == Decimal(payment["amount"])


def test_update_payment_invalid_status(client: TestClient, make_payment):
    payment = make_payment()

    response = client.put(f"/api/payments/{payment['payment_id']}", json={"status": "settled"})

    assert response.status_code == 400
    assert client.get(f"/api/payments/{payment['payment_id']}").json()["status"] == "pending"


def test_update_payment_clears_external_ref(client: TestClient, make_payment):
    payment = make_payment(external_ref="ref-1")

    response = client.put(f"/api/payments/{payment['payment_id']}", json={"external_ref": None})

    assert response.status_code == 200
    assert response.json()["external_ref"] is None


def test_delete_payment(client: TestClient, make_payment):
    payment = make_payment()

    assert client.delete(f"/api/payments/{payment['payment_id']}").status_code == 204
    assert client.get(f"/api/payments/{payment['payment_id']}").status_code == 404
    assert client.delete(f"/api/payments/{payment['payment_id']}").status_code == 404


def test_update_payment_unknown_customer(client: TestClient, make_payment):
    payment = make_payment()

    response = client.put(f"/api/payments/{payment['payment_id']}", json={"customer_id": MISSING_ID})

    assert response.status_code == 400
    assert response.json()["kind"] == "customer-not-found"


def test_update_payment_unknown_product(client: TestClient, make_payment):
    payment = make_payment()

    response = client.put(f"/api/payments/{payment['payment_id']}", json={"product_id": MISSING_ID})

    assert response.status_code == 400
    assert response.json()["kind"] == "product-not-found"
    unchanged = client.get(f"/api/payments/{payment['payment_id']}").json()
    assert unchanged["product_id"] == payment["product_id"]


def test_update_missing_payment(client: TestClient):
    response = client.put(f"/api/payments/{MISSING_ID}", json={"status": "paid"})

    assert response.status_code == 404


def test_update_missing_payment_ignores_invalid_body(client: TestClient):
    response = client.put(f"/api/payments/{MISSING_ID}", json={"amount": 0})

    assert response.status_code == 404
