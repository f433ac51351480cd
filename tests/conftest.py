"""Pytest configuration and fixtures"""
import os
import pytest
import httpx
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")

from shopcart.client.app import ShopApp  # noqa: E402
from shopcart.core.carts.store import CartStore  # noqa: E402
from shopcart.core.durable.store_memory import MemoryStorage  # noqa: E402
from shopcart.core.session.store import SessionStore  # noqa: E402
from shopcart.main import app  # noqa: E402
from shopcart.storage.db import Base, get_db, make_engine  # noqa: E402


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads"""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def api_app(db_engine):
    """FastAPI app wired to the test database"""
    TestingSession = sessionmaker(bind=db_engine, autocommit=False, autoflush=False, future=True)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    """Test client"""
    return TestClient(api_app)


@pytest.fixture
def storage():
    """Empty client-durable storage"""
    return MemoryStorage()


@pytest.fixture
def cart_store(storage):
    return CartStore(storage)


@pytest.fixture
def session_store(storage):
    return SessionStore(storage)


@pytest.fixture
def shop(api_app, storage):
    """Client app talking to the real API in-process"""
    return ShopApp(
        storage,
        base_url="http://testserver",
        transport=httpx.ASGITransport(app=api_app),
    )


@pytest.fixture
def sample_product():
    """Sample catalog record"""
    return {
        "id": "prod-1",
        "name": "Amazon Echo Dot 3rd Generation",
        "image": "https://example.com/echo.jpg",
        "price": 29.99,
        "rating": 5,
        "reviewCount": 1,
    }


@pytest.fixture
def other_product():
    return {
        "id": "prod-2",
        "name": "Logitech G-Series Gaming Mouse",
        "image": "https://example.com/mouse.jpg",
        "price": 10.00,
        "rating": 5,
        "reviewCount": 1,
    }
