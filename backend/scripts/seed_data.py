"""Seed the database with a small front-desk setup.

Creates a manager and a staff account, room types, rooms, a menu, the hotel
settings row, and one occupied room with a couple of food orders so the
kitchen-bill and checkout flows can be tried straight away.

Run inside Docker:
    docker compose exec backend python -m scripts.seed_data
"""

import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from frontdesk.auth.identity import Actor
from frontdesk.auth.passwords import hash_password
from frontdesk.database import async_session_factory, engine
from frontdesk.models.enums import IdType, UserRole
from frontdesk.models.user import User
from frontdesk.money import to_minor
from frontdesk.services import booking_lifecycle, food_ledger, hotel_settings, room_registry

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

MANAGER = {"email": "manager@hotelfrontdesk.in", "password": "manager1234", "name": "Front Office Manager"}
STAFF = {"email": "desk@hotelfrontdesk.in", "password": "desk12345", "name": "Reception Desk"}

ROOM_TYPES = [
    {"name": "Standard", "base_price": "1500.00", "description": "Double bed, attached bath"},
    {"name": "Deluxe", "base_price": "2000.00", "description": "Queen bed, AC, city view"},
    {"name": "Suite", "base_price": "3500.00", "description": "Separate sitting area, bathtub"},
]

# (room number, floor, room type)
ROOMS = [
    ("101", 1, "Standard"),
    ("102", 1, "Standard"),
    ("103", 1, "Deluxe"),
    ("201", 2, "Deluxe"),
    ("202", 2, "Deluxe"),
    ("301", 3, "Suite"),
]

FOOD_ITEMS = [
    {"name": "Masala Tea", "category": "Beverages", "price": "30.00"},
    {"name": "Filter Coffee", "category": "Beverages", "price": "40.00"},
    {"name": "Veg Sandwich", "category": "Snacks", "price": "90.00"},
    {"name": "Paneer Butter Masala", "category": "Main Course", "price": "220.00", "gst_percent": "5"},
    {"name": "Veg Thali", "category": "Main Course", "price": "150.00", "gst_percent": "5"},
    {"name": "Butter Naan", "category": "Breads", "price": "45.00"},
    {"name": "Gulab Jamun", "category": "Desserts", "price": "60.00"},
]


async def _add_user(session, data: dict, role: UserRole) -> User:
    user = User(
        email=data["email"],
        hashed_password=hash_password(data["password"]),
        name=data["name"],
        role=role,
        is_active=True,
    )
    session.add(user)
    await session.flush()
    return user


async def seed() -> None:
    """Populate an empty database. Does nothing if the manager already exists."""
    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.email == MANAGER["email"]))
        if result.scalar_one_or_none() is not None:
            print(f"Manager '{MANAGER['email']}' already exists; nothing to do.")
            return

        # ------------------------------------------------------------------
        # 1. Accounts
        # ------------------------------------------------------------------
        manager = await _add_user(session, MANAGER, UserRole.MANAGER)
        staff = await _add_user(session, STAFF, UserRole.STAFF)
        actor = Actor(user_id=manager.id, role=manager.role)
        desk = Actor(user_id=staff.id, role=staff.role)
        print(f"Created manager {manager.email} and staff {staff.email}")

        # ------------------------------------------------------------------
        # 2. Hotel settings
        # ------------------------------------------------------------------
        profile = await hotel_settings.update_profile(session, actor, {})
        print(f"Hotel settings: {profile.name} (GST {profile.default_gst_percent}%)")

        # ------------------------------------------------------------------
        # 3. Rooms
        # ------------------------------------------------------------------
        types = {}
        for data in ROOM_TYPES:
            room_type = await room_registry.create_room_type(
                session,
                actor,
                name=data["name"],
                base_price=to_minor(Decimal(data["base_price"])),
                description=data["description"],
            )
            types[room_type.name] = room_type

        rooms = {}
        for number, floor, type_name in ROOMS:
            rooms[number] = await room_registry.create_room(session, actor, number, types[type_name].id, floor)
        print(f"Created {len(types)} room types and {len(rooms)} rooms")

        # ------------------------------------------------------------------
        # 4. Menu
        # ------------------------------------------------------------------
        menu = {}
        for data in FOOD_ITEMS:
            item = await food_ledger.create_food_item(
                session,
                actor,
                name=data["name"],
                category=data["category"],
                price=to_minor(Decimal(data["price"])),
                gst_percent=Decimal(data.get("gst_percent", "0")),
            )
            menu[item.name] = item
        print(f"Created {len(menu)} menu items")

        # ------------------------------------------------------------------
        # 5. One occupied room with food
        # ------------------------------------------------------------------
        booking = await booking_lifecycle.open_booking(
            session,
            desk,
            room_id=rooms["103"].id,
            guest_name="Rahul Verma",
            id_type=IdType.AADHAAR,
            id_number="XXXX-XXXX-4821",
            guest_mobile="+91 98450 00000",
            room_price=types["Deluxe"].base_price,
        )
        await food_ledger.add_order(session, desk, booking.id, menu["Masala Tea"].id, 2)
        await food_ledger.add_order(session, desk, booking.id, menu["Veg Thali"].id, 1)

        await session.commit()

        print(f"Room 103 occupied by {booking.guest_name} with 2 food orders")
        print()
        print("=" * 60)
        print(f"   Manager: {MANAGER['email']} / {MANAGER['password']}")
        print(f"   Staff:   {STAFF['email']} / {STAFF['password']}")
        print("=" * 60)
        print("Done! Log in at /api/v1/auth/login")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
