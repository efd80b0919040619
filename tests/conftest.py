"""
Test configuration for pytest
"""

import os

# Test environment variables, set before the application is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["SMTP_HOST"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine
from typing import Generator

import bistro.models  # noqa: F401
from bistro.core.auth import create_access_token, hash_password
from bistro.core.database import enable_sqlite_foreign_keys, get_session
from bistro.core.events import event_bus
from bistro.main import app
from bistro.models.table import Table
from bistro.models.user import User, UserRole


# In-memory SQLite shared by every connection of the test engine
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """API client whose requests run on the test session"""
    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clean_event_bus():
    event_bus.clear_subscribers()
    yield
    event_bus.clear_subscribers()


@pytest.fixture
def customer(db: Session) -> User:
    user = User(
        email="ana@example.com",
        password_hash=hash_password("password123"),
        name="Ana",
        surname="Garcia",
        role=UserRole.CUSTOMER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db: Session) -> User:
    user = User(
        email="admin@example.com",
        password_hash=hash_password("password123"),
        name="Admin",
        surname="Bistro",
        role=UserRole.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer_headers(customer: User) -> dict:
    token = create_access_token(user_id=customer.id, role=customer.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin: User) -> dict:
    token = create_access_token(user_id=admin.id, role=admin.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def patio_tables(db: Session) -> list[Table]:
    """Patio tables A(2), B(4), C(4) in directory order, plus one indoor table"""
    tables = [
        Table(number=1, capacity=2, location="patio"),
        Table(number=2, capacity=4, location="patio"),
        Table(number=3, capacity=4, location="patio"),
        Table(number=20, capacity=8, location="indoor"),
    ]
    for table in tables:
        db.add(table)
    db.commit()
    for table in tables:
        db.refresh(table)
    return tables[:3]
