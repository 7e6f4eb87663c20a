"""Search result value types.

Plain frozen dataclasses built once from ORM rows at the storage boundary.
Everything downstream (matching, ranking, the cache, the response schemas)
works on these types only. They are immutable so a cached result can be
shared between readers safely.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from hotelsearch.models import Hotel, Offer, Room, Search, SearchStatus


@dataclass(frozen=True, slots=True)
class OfferResult:
    id: str
    room_id: str
    price: Decimal
    discount: Decimal
    effective_price: Decimal
    availability: bool
    starts_on: date
    ends_on: date

    @classmethod
    def from_model(cls, offer: Offer) -> "OfferResult":
        return cls(
            id=offer.id,
            room_id=offer.room_id,
            price=Decimal(offer.price),
            discount=Decimal(offer.discount),
            effective_price=Decimal(offer.effective_price),
            availability=bool(offer.availability),
            starts_on=offer.starts_on,
            ends_on=offer.ends_on,
        )


@dataclass(frozen=True, slots=True)
class RoomResult:
    id: str
    hotel_id: str
    category: str
    description: str
    capacity: int
    offers: tuple[OfferResult, ...] = ()

    @classmethod
    def from_model(cls, room: Room) -> "RoomResult":
        return cls(
            id=room.id,
            hotel_id=room.hotel_id,
            category=room.category,
            description=room.description,
            capacity=room.capacity,
        )

    def with_offers(self, offers: list[OfferResult] | tuple[OfferResult, ...]) -> "RoomResult":
        return replace(self, offers=tuple(offers))


@dataclass(frozen=True, slots=True)
class HotelResult:
    id: str
    title: str
    description: str
    location_id: str
    star_rating: int
    rooms: tuple[RoomResult, ...] = ()

    @classmethod
    def from_model(cls, hotel: Hotel) -> "HotelResult":
        return cls(
            id=hotel.id,
            title=hotel.title,
            description=hotel.description,
            location_id=hotel.location_id,
            star_rating=hotel.star_rating,
        )

    def with_rooms(self, rooms: list[RoomResult] | tuple[RoomResult, ...]) -> "HotelResult":
        return replace(self, rooms=tuple(rooms))


@dataclass(frozen=True, slots=True)
class SearchSnapshot:
    """Copy of a Search row taken when its results are published."""

    id: str
    user_id: str
    location_id: str
    starts_on: date
    ends_on: date
    capacity: int
    status: SearchStatus
    results: int

    @classmethod
    def from_model(cls, search: Search) -> "SearchSnapshot":
        return cls(
            id=search.id,
            user_id=search.user_id,
            location_id=search.location_id,
            starts_on=search.starts_on,
            ends_on=search.ends_on,
            capacity=search.capacity,
            status=SearchStatus(search.status),
            results=search.results,
        )


@dataclass(frozen=True, slots=True)
class CachedResult:
    """The payload stored in the search cache: the search plus its ranked hotels."""

    search: SearchSnapshot
    hotels: tuple[HotelResult, ...] = field(default_factory=tuple)
