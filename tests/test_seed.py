"""
Tests for the seed job
"""

from sqlmodel import select

from bistro.core.auth import verify_password
from bistro.models.table import Table
from bistro.models.user import User, UserRole
from bistro.scripts.seed import STARTER_TABLES, seed


def test_seed_creates_admin_and_tables(db):
    results = seed(db, "boss@example.com", "password123")

    assert results == {"admin": True, "tables": len(STARTER_TABLES)}
    admin = db.exec(select(User).where(User.email == "boss@example.com")).one()
    assert admin.role == UserRole.ADMIN
    assert verify_password("password123", admin.password_hash)


def test_seed_is_idempotent(db, patio_tables):
    seed(db, "boss@example.com", "password123")
    results = seed(db, "boss@example.com", "password123")

    assert results == {"admin": False, "tables": 0}
    # Table numbers 1-3 already existed, so the starter rows with those numbers were skipped
    numbers = db.exec(select(Table.number)).all()
    assert len(numbers) == len(set(numbers))
