"""Booking data-access layer."""

from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.models import Booking


async def get_booking(db: AsyncSession, booking_id: str) -> Booking | None:
    return await db.get(Booking, booking_id)


async def save_booking(db: AsyncSession, booking: Booking) -> Booking:
    db.add(booking)
    await db.flush()
    return booking
