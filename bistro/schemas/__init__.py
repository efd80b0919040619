"""
Schemas for API responses and requests
"""

from bistro.schemas.token import TokenResponse
from bistro.schemas.user import UserCreate, UserLogin, UserResponse
from bistro.schemas.reservation import (
    ReservationCreate, ReservationRead, CustomerReservationRead,
    ReservationCreated, MessageResponse
)
from bistro.schemas.table import (
    TableCreate, TableRead, TableCreated, TableAvailability, ReservationTableRead
)

__all__ = [
    "TokenResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "ReservationCreate",
    "ReservationRead",
    "CustomerReservationRead",
    "ReservationCreated",
    "MessageResponse",
    "TableCreate",
    "TableRead",
    "TableCreated",
    "TableAvailability",
    "ReservationTableRead",
]
