"""
Integration tests for the reservations API
"""

import pytest
import uuid

from fastapi import status
from fastapi.testclient import TestClient

from bistro.core.config import get_settings
from bistro.core.events import event_bus
from bistro.services.notifier import EmailNotifier, register_notification_handlers

BASE = "/api/v1/reservations"


@pytest.fixture
def notifier() -> EmailNotifier:
    notifier = EmailNotifier(get_settings())
    register_notification_handlers(event_bus, notifier)
    return notifier


def booking_payload(user_id, guests=5, location="patio", time="dinner", status="pending"):
    return {
        "date": "2026-11-20",
        "time": time,
        "guests": guests,
        "status": status,
        "user_id": str(user_id),
        "location": location,
    }


def book(client, headers, user_id, **kwargs) -> str:
    response = client.post(BASE, json=booking_payload(user_id, **kwargs), headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["reservationId"]


class TestCreateReservation:
    def test_create_success(self, client: TestClient, customer_headers, customer, patio_tables):
        response = client.post(BASE, json=booking_payload(customer.id), headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Reservation successful"
        uuid.UUID(body["reservationId"])

    def test_insufficient_capacity(self, client, customer_headers, customer, patio_tables):
        response = client.post(
            BASE, json=booking_payload(customer.id, guests=11), headers=customer_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {
            "status": 409,
            "title": "Conflict",
            "message": "Guests exceed our capacity",
        }
        assert client.get(BASE, headers=customer_headers).json() == []

    def test_unknown_user(self, client, customer_headers, patio_tables):
        response = client.post(
            BASE, json=booking_payload(uuid.uuid4()), headers=customer_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["title"] == "Not Found"

    @pytest.mark.parametrize("override", [
        {"guests": 0},
        {"time": "brunch"},
        {"status": "completed"},
        {"date": "not-a-date"},
        {"location": ""},
    ])
    def test_invalid_body(self, client, customer_headers, customer, patio_tables, override):
        payload = {**booking_payload(customer.id), **override}

        response = client.post(BASE, json=payload, headers=customer_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "status": 400,
            "title": "Bad Request",
            "message": "Invalid body data",
        }

    def test_token_required(self, client, customer, patio_tables):
        response = client.post(BASE, json=booking_payload(customer.id))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Token is required"

    def test_collection_path_is_served_without_redirect(self, client, customer_headers, customer, patio_tables):
        response = client.post(
            BASE, json=booking_payload(customer.id), headers=customer_headers, follow_redirects=False
        )

        assert response.status_code == status.HTTP_200_OK

    def test_invalid_token(self, client, customer, patio_tables):
        response = client.post(
            BASE,
            json=booking_payload(customer.id),
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid token"


class TestReadReservations:
    def test_get_by_id(self, client, customer_headers, customer, patio_tables):
        reservation_id = book(client, customer_headers, customer.id)

        response = client.get(f"{BASE}/{reservation_id}", headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == reservation_id
        assert data["time"] == "dinner"
        assert data["status"] == "pending"

    @pytest.mark.parametrize("reservation_id", [str(uuid.uuid4()), "12345"])
    def test_get_missing_or_malformed_id(self, client, customer_headers, reservation_id):
        response = client.get(f"{BASE}/{reservation_id}", headers=customer_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "The reservation with the requested id does not exists"

    def test_list_with_filters(self, client, customer_headers, customer, patio_tables):
        lunch_id = book(client, customer_headers, customer.id, guests=2, time="lunch")
        book(client, customer_headers, customer.id, guests=2, time="dinner")

        everything = client.get(BASE, headers=customer_headers).json()
        lunch_only = client.get(BASE, params={"time": "lunch"}, headers=customer_headers).json()

        assert len(everything) == 2
        assert [r["id"] for r in lunch_only] == [lunch_id]

    def test_customer_listing(self, client, customer_headers, customer, patio_tables):
        book(client, customer_headers, customer.id, guests=5)

        response = client.get(f"{BASE}/customer", headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        [entry] = response.json()
        assert entry["name"] == "Ana"
        assert entry["surname"] == "Garcia"
        assert entry["tables"] == [1, 2]


class TestReservationStatus:
    def test_confirm(self, client, customer_headers, customer, patio_tables):
        reservation_id = book(client, customer_headers, customer.id)

        response = client.put(f"{BASE}/{reservation_id}/status/confirmed", headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Update successful"}
        assert client.get(f"{BASE}/{reservation_id}", headers=customer_headers).json()["status"] == "confirmed"

    def test_unknown_status(self, client, customer_headers, customer, patio_tables):
        reservation_id = book(client, customer_headers, customer.id)

        response = client.put(f"{BASE}/{reservation_id}/status/seated", headers=customer_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_illegal_transition(self, client, customer_headers, customer, patio_tables):
        reservation_id = book(client, customer_headers, customer.id)
        client.put(f"{BASE}/{reservation_id}/status/cancelled", headers=customer_headers)

        response = client.put(f"{BASE}/{reservation_id}/status/confirmed", headers=customer_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_missing_reservation(self, client, customer_headers):
        response = client.put(f"{BASE}/{uuid.uuid4()}/status/confirmed", headers=customer_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_cancel_frees_tables_for_new_bookings(self, client, customer_headers, customer, patio_tables):
        first = book(client, customer_headers, customer.id, guests=10)
        full = client.post(BASE, json=booking_payload(customer.id, guests=2), headers=customer_headers)
        assert full.status_code == status.HTTP_409_CONFLICT

        client.put(f"{BASE}/{first}/status/cancelled", headers=customer_headers)

        book(client, customer_headers, customer.id, guests=10)


class TestDeleteReservation:
    def test_delete(self, client, customer_headers, customer, patio_tables):
        reservation_id = book(client, customer_headers, customer.id)

        response = client.delete(f"{BASE}/{reservation_id}", headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == reservation_id
        assert client.get(f"{BASE}/{reservation_id}", headers=customer_headers).status_code == 404

    def test_delete_missing(self, client, customer_headers):
        response = client.delete(f"{BASE}/{uuid.uuid4()}", headers=customer_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestNotifications:
    def test_booking_sends_received_email(self, client, customer_headers, customer, patio_tables, notifier):
        book(client, customer_headers, customer.id, guests=3)

        assert len(notifier.outbox) == 1
        message = notifier.outbox[0]
        assert message["to"] == "ana@example.com"
        assert message["subject"] == "Reservation received, Ana!"
        assert "20/11/2026, dinner, 3 guests" in message["body"]

    def test_status_changes_send_emails(self, client, customer_headers, customer, patio_tables, notifier):
        reservation_id = book(client, customer_headers, customer.id)
        client.put(f"{BASE}/{reservation_id}/status/confirmed", headers=customer_headers)
        client.put(f"{BASE}/{reservation_id}/status/cancelled", headers=customer_headers)

        assert [m["subject"] for m in notifier.outbox] == [
            "Reservation received, Ana!",
            "Good news, Ana!",
            "Reservation cancelled, Ana",
        ]

    def test_failed_booking_sends_nothing(self, client, customer_headers, customer, patio_tables, notifier):
        client.post(BASE, json=booking_payload(customer.id, guests=50), headers=customer_headers)

        assert len(notifier.outbox) == 0

    def test_notification_failure_does_not_fail_booking(
        self, client, customer_headers, customer, patio_tables, notifier, monkeypatch
    ):
        async def broken_send(*args, **kwargs):
            raise ConnectionError("SMTP server unreachable")

        monkeypatch.setattr(notifier, "send", broken_send)

        response = client.post(BASE, json=booking_payload(customer.id), headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
