"""
Unit test for JWT authentication
"""

import pytest
from datetime import timedelta
import uuid
from jose import jwt

from bistro.core.auth import create_access_token, decode_access_token, hash_password, verify_password
from bistro.core.config import get_settings

settings = get_settings()


def test_create_access_token():
    """Test JWT token creation"""
    user_id = uuid.uuid4()

    token = create_access_token(user_id=user_id, role="customer", expires_delta=timedelta(hours=24))

    assert isinstance(token, str)

    payload = decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == str(user_id)
    assert payload["role"] == "customer"
    assert "exp" in payload


def test_decode_invalid_token():
    """Test decoding a garbage token"""
    assert decode_access_token("invalid.token.string.here") is None


def test_expired_token():
    """Test that expired tokens are rejected"""
    token = create_access_token(user_id=uuid.uuid4(), role="admin", expires_delta=timedelta(hours=-1))

    assert decode_access_token(token) is None


def test_token_without_subject():
    token = jwt.encode({"role": "admin"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None


def test_token_signed_with_other_key():
    token = jwt.encode({"sub": str(uuid.uuid4())}, "another-secret", algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None


def test_password_hashing():
    password_hash = hash_password("password123")

    assert password_hash != "password123"
    assert verify_password("password123", password_hash)
    assert not verify_password("password124", password_hash)


class TestAuthEndpoints:
    def test_register(self, client):
        response = client.post("/api/v1/auth/register", json={
            "email": "luis@example.com",
            "password": "password123",
            "name": "Luis",
            "surname": "Perez",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "luis@example.com"
        assert data["role"] == "customer"
        assert "password_hash" not in data

    def test_register_duplicate_email(self, client, customer):
        response = client.post("/api/v1/auth/register", json={
            "email": customer.email,
            "password": "password123",
            "name": "Ana",
            "surname": "Garcia",
        })

        assert response.status_code == 409

    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "password": "password123", "name": "A", "surname": "B"},
        {"email": "a@example.com", "password": "short", "name": "A", "surname": "B"},
    ])
    def test_register_invalid(self, client, payload):
        response = client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 400

    def test_login_and_me(self, client, customer):
        response = client.post("/api/v1/auth/login", json={
            "email": customer.email,
            "password": "password123",
        })

        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["id"] == str(customer.id)

    def test_login_wrong_password(self, client, customer):
        response = client.post("/api/v1/auth/login", json={
            "email": customer.email,
            "password": "wrong-password",
        })

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_login_inactive_user(self, client, db, customer):
        customer.is_active = False
        db.add(customer)
        db.commit()

        response = client.post("/api/v1/auth/login", json={
            "email": customer.email,
            "password": "password123",
        })

        assert response.status_code == 403
