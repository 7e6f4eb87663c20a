"""Booking business logic.

A booking picks one offer out of a finished search. Ownership and the
hotel → room → offer chain are verified before anything is written.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.exceptions import DomainError, ForbiddenError, NotFoundError, OfferUnavailableError
from hotelsearch.logging import get_logger
from hotelsearch.models import Booking, BookingStatus, Hotel, Offer, Room, Search, SearchStatus
from hotelsearch.repositories import booking as booking_repo
from hotelsearch.repositories.catalog import get_hotel, get_offer, get_room
from hotelsearch.repositories.search import get_search

logger = get_logger(__name__)


@dataclass
class BookingDetail:
    booking: Booking
    hotel: Hotel | None
    room: Room | None
    offer: Offer | None
    search: Search | None


async def create_booking(
    db: AsyncSession,
    *,
    user_id: str,
    search_id: str,
    hotel_id: str,
    room_id: str,
    offer_id: str,
) -> Booking:
    search = await get_search(db, search_id)
    if search is None:
        raise NotFoundError("Search", search_id)
    if search.user_id != user_id:
        raise ForbiddenError("Search belongs to another user")
    if search.status != SearchStatus.COMPLETED:
        raise DomainError(f"Search {search_id} has no results to book")

    hotel = await get_hotel(db, hotel_id)
    if hotel is None:
        raise NotFoundError("Hotel", hotel_id)

    room = await get_room(db, room_id)
    if room is None or room.hotel_id != hotel.id:
        raise NotFoundError("Room", room_id)

    offer = await get_offer(db, offer_id)
    if offer is None or offer.room_id != room.id:
        raise NotFoundError("Offer", offer_id)
    if not offer.availability:
        raise OfferUnavailableError(f"Offer {offer_id} is no longer available")

    booking = await booking_repo.save_booking(
        db,
        Booking(
            user_id=user_id,
            search_id=search.id,
            hotel_id=hotel.id,
            room_id=room.id,
            offer_id=offer.id,
            starts_on=search.starts_on,
            ends_on=search.ends_on,
            capacity=search.capacity,
            total_price=offer.effective_price,
            status=BookingStatus.CONFIRMED,
        ),
    )
    logger.info("booking_created", booking_id=booking.id, search_id=search.id, offer_id=offer.id)
    return booking


async def get_booking(db: AsyncSession, *, user_id: str, booking_id: str) -> BookingDetail:
    booking = await booking_repo.get_booking(db, booking_id)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    if booking.user_id != user_id:
        raise ForbiddenError("Booking belongs to another user")

    return BookingDetail(
        booking=booking,
        hotel=await get_hotel(db, booking.hotel_id),
        room=await get_room(db, booking.room_id),
        offer=await get_offer(db, booking.offer_id),
        search=await get_search(db, booking.search_id),
    )
