"""initial_front_desk_schema

Revision ID: 5c1e7a9d2b40
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "room_types",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("base_price", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("room_number", sa.String(20), nullable=False),
        sa.Column(
            "room_type_id",
            sa.Uuid(),
            sa.ForeignKey("room_types.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("floor", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_rooms_room_number", "rooms", ["room_number"], unique=True)
    op.create_index("ix_rooms_room_type_id", "rooms", ["room_type_id"])
    op.create_index("ix_rooms_status", "rooms", ["status"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("room_id", sa.Uuid(), sa.ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("id_type", sa.String(20), nullable=False),
        sa.Column("id_number", sa.String(100), nullable=True),
        sa.Column("guest_mobile", sa.String(50), nullable=True),
        sa.Column("guest_address", sa.Text(), nullable=True),
        sa.Column("check_in_date", sa.DateTime(), nullable=False),
        sa.Column("checkout_date", sa.DateTime(), nullable=True),
        sa.Column("room_price", sa.BigInteger(), nullable=False),
        sa.Column("tariff", sa.BigInteger(), nullable=True),
        sa.Column("additional_guests", sa.Integer(), nullable=False),
        sa.Column("additional_guest_charges", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_bookings_room_id", "bookings", ["room_id"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_room_id_status", "bookings", ["room_id", "status"])

    op.create_table(
        "food_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("gst_percent", sa.Numeric(5, 2), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_food_items_name", "food_items", ["name"])

    # invoice_id has no foreign key: a deleted invoice leaves its orders billed.
    op.create_table(
        "food_orders",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("booking_id", sa.Uuid(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "food_item_id",
            sa.Uuid(),
            sa.ForeignKey("food_items.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("chef_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("invoice_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_food_orders_booking_id", "food_orders", ["booking_id"])
    op.create_index("ix_food_orders_invoice_id", "food_orders", ["invoice_id"])
    op.create_index("ix_food_orders_booking_id_invoice_id", "food_orders", ["booking_id", "invoice_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("invoice_number", sa.String(64), nullable=False),
        sa.Column("invoice_type", sa.String(20), nullable=False),
        sa.Column("is_manual", sa.Boolean(), nullable=False),
        sa.Column("booking_id", sa.Uuid(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=True),
        sa.Column("settlement_group", sa.String(64), nullable=True),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("room_number", sa.String(20), nullable=True),
        sa.Column("room_type", sa.String(100), nullable=True),
        sa.Column("room_charges", sa.BigInteger(), nullable=False),
        sa.Column("food_charges", sa.BigInteger(), nullable=False),
        sa.Column("tariff", sa.BigInteger(), nullable=False),
        sa.Column("nights", sa.Integer(), nullable=False),
        sa.Column("additional_guests", sa.Integer(), nullable=False),
        sa.Column("additional_guest_charges", sa.BigInteger(), nullable=False),
        sa.Column("gst_enabled", sa.Boolean(), nullable=False),
        sa.Column("gst_percent", sa.Numeric(5, 2), nullable=False),
        sa.Column("gst_number", sa.String(32), nullable=True),
        sa.Column("gst_amount", sa.BigInteger(), nullable=False),
        sa.Column("advance_amount", sa.BigInteger(), nullable=False),
        sa.Column("round_off", sa.BigInteger(), nullable=False),
        sa.Column("total_amount", sa.BigInteger(), nullable=False),
        sa.Column("bill_date", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_invoices_invoice_number", "invoices", ["invoice_number"], unique=True)
    op.create_index("ix_invoices_invoice_type", "invoices", ["invoice_type"])
    op.create_index("ix_invoices_booking_id", "invoices", ["booking_id"])
    op.create_index("ix_invoices_settlement_group", "invoices", ["settlement_group"])
    op.create_index(
        "uq_invoices_booking_room_settlement",
        "invoices",
        ["booking_id"],
        unique=True,
        postgresql_where=sa.text("invoice_type = 'ROOM' AND NOT is_manual"),
        sqlite_where=sa.text("invoice_type = 'ROOM' AND NOT is_manual"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("booking_id", sa.Uuid(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=True),
        sa.Column("invoice_id", sa.Uuid(), sa.ForeignKey("invoices.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_payments_booking_id", "payments", ["booking_id"])
    op.create_index("ix_payments_invoice_id", "payments", ["invoice_id"])
    op.create_index("ix_payments_status", "payments", ["status"])

    op.create_table(
        "hotel_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("gstin", sa.String(32), nullable=True),
        sa.Column("default_gst_percent", sa.Numeric(5, 2), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("hotel_settings")
    op.drop_table("payments")
    op.drop_table("invoices")
    op.drop_table("food_orders")
    op.drop_table("food_items")
    op.drop_table("bookings")
    op.drop_table("rooms")
    op.drop_table("room_types")
    op.drop_table("users")
