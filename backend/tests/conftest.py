import os

# Keep the app's own engine off the developer's database file
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from portal_api import models  # noqa: E402,F401  registers every table before create_all
from portal_api.database import enable_sqlite_foreign_keys, get_session  # noqa: E402
from portal_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Foreign keys enforced like the app engine does
# 4. Schema dropped and recreated for every test
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a freshly created schema"""
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() so the app never uses its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Record factories shared by the API tests
# ============================================================================


@pytest.fixture
def make_customer(client: TestClient):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        body = {
            "name": "Ana Pérez",
            "email": f"ana{counter['n']}@example.com",
            "phone": "55 1234-5678",
            "address": "Av. Reforma 100",
        }
        body.update(overrides)
        response = client.post("/api/customers", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def customer(make_customer):
    return make_customer()


@pytest.fixture
def product(client: TestClient, customer):
    response = client.post(
        "/api/products",
        json={"customer_id": customer["customer_id"], "name": "Local 12", "description": "Commercial unit"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def customer_session(client: TestClient, customer):
    response = client.post(
        "/api/sessions", json={"customer_id": customer["customer_id"], "user_agent": "Mozilla/5.0"}
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def make_payment(client: TestClient, customer, product):
    def _make(**overrides):
        body = {
            "customer_id": customer["customer_id"],
            "product_id": product["product_id"],
            "amount": "1500.00",
            "method": "card",
        }
        body.update(overrides)
        response = client.post("/api/payments", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
