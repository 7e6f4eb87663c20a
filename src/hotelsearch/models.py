"""SQLAlchemy models.

Every model inherits from Base so Alembic's autogenerate can detect it.
Primary keys are UUID4 strings; ranking tie-breaks compare them as text.
"""

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelsearch.db.session import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class SearchStatus(enum.StrEnum):
    PENDING = "pending"
    STARTED = "started"
    COMPLETED = "completed"
    NO_RESULTS = "no_results"
    FAILED = "failed"


class BookingStatus(enum.StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class TimestampMixin:
    # Fetch server-generated timestamps on flush; lazy refresh is not possible under asyncio.
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Location(TimestampMixin, Base):
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(150))
    city: Mapped[str] = mapped_column(String(100))
    country: Mapped[str] = mapped_column(String(100))

    hotels: Mapped[list["Hotel"]] = relationship(back_populates="location")


class Hotel(TimestampMixin, Base):
    __tablename__ = "hotels"
    __table_args__ = (CheckConstraint("star_rating >= 1 AND star_rating <= 5", name="star_rating_range"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    title: Mapped[str] = mapped_column(String(150))
    description: Mapped[str] = mapped_column(Text, default="")
    location_id: Mapped[str] = mapped_column(ForeignKey("locations.id"), index=True)
    star_rating: Mapped[int]

    location: Mapped["Location"] = relationship(back_populates="hotels")
    rooms: Mapped[list["Room"]] = relationship(back_populates="hotel")


class Room(TimestampMixin, Base):
    __tablename__ = "rooms"
    __table_args__ = (CheckConstraint("capacity >= 1", name="capacity_positive"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    hotel_id: Mapped[str] = mapped_column(ForeignKey("hotels.id"), index=True)
    category: Mapped[str] = mapped_column(String(50), index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    capacity: Mapped[int]

    hotel: Mapped["Hotel"] = relationship(back_populates="rooms")
    offers: Mapped[list["Offer"]] = relationship(back_populates="room")


class Offer(TimestampMixin, Base):
    __tablename__ = "offers"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("discount >= 0", name="discount_non_negative"),
        CheckConstraint("starts_on < ends_on", name="starts_before_ends"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    room_id: Mapped[str] = mapped_column(ForeignKey("rooms.id"), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    effective_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    availability: Mapped[bool] = mapped_column(default=True)
    starts_on: Mapped[date]
    ends_on: Mapped[date]

    room: Mapped["Room"] = relationship(back_populates="offers")


class Search(TimestampMixin, Base):
    __tablename__ = "searches"
    __table_args__ = (
        CheckConstraint("capacity >= 1", name="capacity_positive"),
        CheckConstraint("results >= 0", name="results_non_negative"),
        CheckConstraint("starts_on < ends_on", name="starts_before_ends"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    location_id: Mapped[str] = mapped_column(ForeignKey("locations.id"), index=True)
    starts_on: Mapped[date]
    ends_on: Mapped[date]
    capacity: Mapped[int]
    status: Mapped[SearchStatus] = mapped_column(
        Enum(SearchStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        default=SearchStatus.PENDING,
    )
    results: Mapped[int] = mapped_column(default=0)


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"
    __table_args__ = (CheckConstraint("total_price >= 0", name="total_price_non_negative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    search_id: Mapped[str] = mapped_column(ForeignKey("searches.id"), index=True)
    hotel_id: Mapped[str] = mapped_column(ForeignKey("hotels.id"), index=True)
    room_id: Mapped[str] = mapped_column(ForeignKey("rooms.id"))
    offer_id: Mapped[str] = mapped_column(ForeignKey("offers.id"))
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        default=BookingStatus.PENDING,
    )
    starts_on: Mapped[date]
    ends_on: Mapped[date]
    capacity: Mapped[int]
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
