"""Factory functions for creating model instances and result values in tests."""

from datetime import date
from decimal import Decimal

from hotelsearch.models import Hotel, Location, Offer, Room, Search, SearchStatus
from hotelsearch.services.results import HotelResult, OfferResult, RoomResult


def make_location(
    *,
    id: str | None = None,
    name: str = "Lisbon Old Town",
    city: str = "Lisbon",
    country: str = "Portugal",
) -> Location:
    location = Location(name=name, city=city, country=country)
    if id is not None:
        location.id = id
    return location


def make_hotel(
    *,
    location_id: str,
    id: str | None = None,
    title: str = "Grand Riverside Hotel",
    description: str = "A calm retreat by the river.",
    star_rating: int = 4,
) -> Hotel:
    hotel = Hotel(location_id=location_id, title=title, description=description, star_rating=star_rating)
    if id is not None:
        hotel.id = id
    return hotel


def make_room(
    *,
    hotel_id: str,
    id: str | None = None,
    category: str = "Deluxe",
    description: str = "Light-filled room facing the square.",
    capacity: int = 2,
) -> Room:
    room = Room(hotel_id=hotel_id, category=category, description=description, capacity=capacity)
    if id is not None:
        room.id = id
    return room


def make_offer(
    *,
    room_id: str,
    id: str | None = None,
    price: Decimal = Decimal("120.00"),
    discount: Decimal = Decimal("0.00"),
    availability: bool = True,
    starts_on: date = date(2025, 6, 1),
    ends_on: date = date(2025, 6, 30),
) -> Offer:
    offer = Offer(
        room_id=room_id,
        price=price,
        discount=discount,
        effective_price=price - discount,
        availability=availability,
        starts_on=starts_on,
        ends_on=ends_on,
    )
    if id is not None:
        offer.id = id
    return offer


def make_search(
    *,
    location_id: str,
    user_id: str = "user-1",
    starts_on: date = date(2025, 6, 1),
    ends_on: date = date(2025, 6, 3),
    capacity: int = 2,
    status: SearchStatus = SearchStatus.PENDING,
) -> Search:
    return Search(
        user_id=user_id,
        location_id=location_id,
        starts_on=starts_on,
        ends_on=ends_on,
        capacity=capacity,
        status=status,
        results=0,
    )


def offer_result(
    id: str,
    *,
    room_id: str = "room",
    effective_price: str = "100.00",
    availability: bool = True,
    starts_on: date = date(2025, 6, 1),
    ends_on: date = date(2025, 6, 30),
) -> OfferResult:
    price = Decimal(effective_price)
    return OfferResult(
        id=id,
        room_id=room_id,
        price=price,
        discount=Decimal("0"),
        effective_price=price,
        availability=availability,
        starts_on=starts_on,
        ends_on=ends_on,
    )


def room_result(id: str, *offers: OfferResult, hotel_id: str = "hotel", capacity: int = 2) -> RoomResult:
    return RoomResult(
        id=id,
        hotel_id=hotel_id,
        category="Standard",
        description="",
        capacity=capacity,
        offers=tuple(offers),
    )


def hotel_result(id: str, *rooms: RoomResult, location_id: str = "loc") -> HotelResult:
    return HotelResult(
        id=id,
        title=f"Hotel {id}",
        description="",
        location_id=location_id,
        star_rating=3,
        rooms=tuple(rooms),
    )
