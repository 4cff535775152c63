"""SQLAlchemy models for the front-desk billing service.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from frontdesk.models.booking import Booking
from frontdesk.models.food import FoodItem, FoodOrder
from frontdesk.models.hotel_settings import HotelSettings
from frontdesk.models.invoice import Invoice
from frontdesk.models.payment import Payment
from frontdesk.models.room import Room, RoomType
from frontdesk.models.user import User

__all__ = [
    "Booking",
    "FoodItem",
    "FoodOrder",
    "HotelSettings",
    "Invoice",
    "Payment",
    "Room",
    "RoomType",
    "User",
]
