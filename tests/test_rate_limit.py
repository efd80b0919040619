"""
Tests for per-client request rate limiting
"""

import pytest
from fastapi import status
from slowapi import Limiter
from slowapi.util import get_remote_address

from bistro.main import app


@pytest.fixture
def strict_limiter(monkeypatch) -> Limiter:
    limiter = Limiter(key_func=get_remote_address, default_limits=["2/minute"])
    monkeypatch.setattr(app.state, "limiter", limiter)
    return limiter


def test_requests_over_the_limit_are_rejected(client, strict_limiter):
    assert client.get("/health").status_code == status.HTTP_200_OK
    assert client.get("/health").status_code == status.HTTP_200_OK

    response = client.get("/health")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {
        "status": 429,
        "title": "Too Many Requests",
        "message": "Too many requests, please try again later",
    }


def test_api_routes_are_limited(client, strict_limiter, customer_headers):
    for _ in range(2):
        client.get("/api/v1/reservations", headers=customer_headers)

    response = client.get("/api/v1/reservations", headers=customer_headers)

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS


def test_disabled_limiter_lets_everything_through(client, strict_limiter):
    strict_limiter.enabled = False

    for _ in range(5):
        assert client.get("/health").status_code == status.HTTP_200_OK
