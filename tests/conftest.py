import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.db.gateway import Gateway
from app.db.session import get_gateway, use_immediate_transactions
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    use_immediate_transactions(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def gateway(engine):
    return Gateway(engine)


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(client):
    """Create a client row through the API and return it."""
    def _make(name="Ana", email="ana@example.com", **extra):
        response = client.post("/clients", json={"name": name, "email": email, **extra})
        assert response.status_code == 200
        return response.json()
    return _make
