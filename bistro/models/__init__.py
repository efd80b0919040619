from bistro.models.user import User, UserRole
from bistro.models.table import Table
from bistro.models.reservation import Reservation, ReservationStatus, DiningSlot
from bistro.models.reservation_table import ReservationTable
