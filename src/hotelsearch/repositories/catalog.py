"""Hotel / room / offer data-access layer.

Query functions return ORM models, like every other repository module.
SqlCatalogReader adapts them to the search pipeline's CatalogReader
protocol and converts rows to result value types on the way out.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.models import Hotel, Offer, Room
from hotelsearch.services.results import HotelResult, OfferResult, RoomResult


async def get_hotel(db: AsyncSession, hotel_id: str) -> Hotel | None:
    return await db.get(Hotel, hotel_id)


async def get_room(db: AsyncSession, room_id: str) -> Room | None:
    return await db.get(Room, room_id)


async def get_offer(db: AsyncSession, offer_id: str) -> Offer | None:
    return await db.get(Offer, offer_id)


async def list_hotels_by_location(db: AsyncSession, location_id: str) -> list[Hotel]:
    stmt = select(Hotel).where(Hotel.location_id == location_id).order_by(Hotel.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_rooms_by_hotel(db: AsyncSession, hotel_id: str) -> list[Room]:
    stmt = select(Room).where(Room.hotel_id == hotel_id).order_by(Room.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_offers_by_rooms(
    db: AsyncSession,
    room_ids: list[str],
    *,
    available_only: bool = True,
    stay: tuple[date, date] | None = None,
) -> list[Offer]:
    """Return offers for the given rooms, optionally prefiltered.

    The stay prefilter keeps offers with ``starts_on <= stay start`` and
    ``ends_on >= stay end``. Callers still validate each offer in Python.
    """
    if not room_ids:
        return []
    stmt = select(Offer).where(Offer.room_id.in_(room_ids))
    if available_only:
        stmt = stmt.where(Offer.availability.is_(True))
    if stay is not None:
        starts_on, ends_on = stay
        stmt = stmt.where(Offer.starts_on <= starts_on, Offer.ends_on >= ends_on)
    result = await db.execute(stmt.order_by(Offer.room_id, Offer.id))
    return list(result.scalars().all())


class SqlCatalogReader:
    """CatalogReader backed by an AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_hotels_by_location(self, location_id: str) -> list[HotelResult]:
        return [HotelResult.from_model(h) for h in await list_hotels_by_location(self.db, location_id)]

    async def list_rooms_by_hotel(self, hotel_id: str) -> list[RoomResult]:
        return [RoomResult.from_model(r) for r in await list_rooms_by_hotel(self.db, hotel_id)]

    async def list_offers_by_room(
        self,
        room_id: str,
        *,
        available_only: bool = True,
        stay: tuple[date, date] | None = None,
    ) -> list[OfferResult]:
        return await self.list_offers_by_rooms([room_id], available_only=available_only, stay=stay)

    async def list_offers_by_rooms(
        self,
        room_ids: list[str],
        *,
        available_only: bool = True,
        stay: tuple[date, date] | None = None,
    ) -> list[OfferResult]:
        offers = await list_offers_by_rooms(self.db, room_ids, available_only=available_only, stay=stay)
        return [OfferResult.from_model(o) for o in offers]
