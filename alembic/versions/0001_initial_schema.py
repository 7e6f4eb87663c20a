"""initial schema

Revision ID: 0001_initial_schema
Revises: None
Create Date: 2026-10-19
"""

import sqlalchemy as sa

from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "locations",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_locations"),
    )

    op.create_table(
        "hotels",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location_id", sa.String(36), nullable=False),
        sa.Column("star_rating", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("star_rating >= 1 AND star_rating <= 5", name="ck_hotels_star_rating_range"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], name="fk_hotels_location_id_locations"),
        sa.PrimaryKeyConstraint("id", name="pk_hotels"),
    )
    op.create_index("ix_hotels_location_id", "hotels", ["location_id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("hotel_id", sa.String(36), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("capacity >= 1", name="ck_rooms_capacity_positive"),
        sa.ForeignKeyConstraint(["hotel_id"], ["hotels.id"], name="fk_rooms_hotel_id_hotels"),
        sa.PrimaryKeyConstraint("id", name="pk_rooms"),
    )
    op.create_index("ix_rooms_hotel_id", "rooms", ["hotel_id"])
    op.create_index("ix_rooms_category", "rooms", ["category"])

    op.create_table(
        "offers",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("room_id", sa.String(36), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount", sa.Numeric(10, 2), nullable=False),
        sa.Column("effective_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("availability", sa.Boolean(), nullable=False),
        sa.Column("starts_on", sa.Date(), nullable=False),
        sa.Column("ends_on", sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_offers_price_non_negative"),
        sa.CheckConstraint("discount >= 0", name="ck_offers_discount_non_negative"),
        sa.CheckConstraint("starts_on < ends_on", name="ck_offers_starts_before_ends"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], name="fk_offers_room_id_rooms"),
        sa.PrimaryKeyConstraint("id", name="pk_offers"),
    )
    op.create_index("ix_offers_room_id", "offers", ["room_id"])

    op.create_table(
        "searches",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("location_id", sa.String(36), nullable=False),
        sa.Column("starts_on", sa.Date(), nullable=False),
        sa.Column("ends_on", sa.Date(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("results", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("capacity >= 1", name="ck_searches_capacity_positive"),
        sa.CheckConstraint("results >= 0", name="ck_searches_results_non_negative"),
        sa.CheckConstraint("starts_on < ends_on", name="ck_searches_starts_before_ends"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], name="fk_searches_location_id_locations"),
        sa.PrimaryKeyConstraint("id", name="pk_searches"),
    )
    op.create_index("ix_searches_user_id", "searches", ["user_id"])
    op.create_index("ix_searches_location_id", "searches", ["location_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("search_id", sa.String(36), nullable=False),
        sa.Column("hotel_id", sa.String(36), nullable=False),
        sa.Column("room_id", sa.String(36), nullable=False),
        sa.Column("offer_id", sa.String(36), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("starts_on", sa.Date(), nullable=False),
        sa.Column("ends_on", sa.Date(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("total_price >= 0", name="ck_bookings_total_price_non_negative"),
        sa.ForeignKeyConstraint(["search_id"], ["searches.id"], name="fk_bookings_search_id_searches"),
        sa.ForeignKeyConstraint(["hotel_id"], ["hotels.id"], name="fk_bookings_hotel_id_hotels"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], name="fk_bookings_room_id_rooms"),
        sa.ForeignKeyConstraint(["offer_id"], ["offers.id"], name="fk_bookings_offer_id_offers"),
        sa.PrimaryKeyConstraint("id", name="pk_bookings"),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_search_id", "bookings", ["search_id"])
    op.create_index("ix_bookings_hotel_id", "bookings", ["hotel_id"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("searches")
    op.drop_table("offers")
    op.drop_table("rooms")
    op.drop_table("hotels")
    op.drop_table("locations")
