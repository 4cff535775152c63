"""String enums shared by models, schemas and services."""

import enum


class UserRole(str, enum.Enum):
    MANAGER = "MANAGER"
    STAFF = "STAFF"


class RoomStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"


class BookingStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CHECKED_OUT = "CHECKED_OUT"


class IdType(str, enum.Enum):
    AADHAAR = "AADHAAR"
    DL = "DL"
    PASSPORT = "PASSPORT"
    OTHER = "OTHER"


class InvoiceType(str, enum.Enum):
    ROOM = "ROOM"
    FOOD = "FOOD"
    MANUAL = "MANUAL"


class PaymentMode(str, enum.Enum):
    CASH = "CASH"
    ONLINE = "ONLINE"


class PaymentStatus(str, enum.Enum):
    PAID = "PAID"
    PENDING = "PENDING"
