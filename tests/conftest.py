import os
import tempfile

import pytest

# Point the app at a throwaway SQLite database before anything imports it
_TMP_DIR = tempfile.mkdtemp(prefix="waste-ledger-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'ledger.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")

from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def location(client):
    response = client.post("/api/locations", json={"name": "Kilimani"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def plot(client, location):
    response = client.post(
        "/api/plots",
        json={"plotNumber": "P1", "bagsRequired": 4, "location": location["id"]},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def make_payment(client, plot):
    def _make(due_date="2024-03-15", expected="1000", plot_id=None, **extra):
        body = {"plotId": plot_id or plot["id"], "expectedAmount": expected, "dueDate": due_date}
        body.update(extra)
        response = client.post("/api/payments", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
