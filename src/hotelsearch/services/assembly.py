"""Filter-and-assemble pipeline.

Builds the nested hotel → room → offer result tree for one stay query:

1. load every hotel in the location
2. keep rooms whose capacity fits the party
3. load candidate offers for those rooms in one batch per hotel
4. keep offers that are available and cover the whole stay
5. drop rooms without offers, then hotels without rooms

Read-only. Storage errors propagate to the caller untouched.
"""

from collections import defaultdict
from datetime import date
from typing import Protocol

from hotelsearch.services.matching import covers
from hotelsearch.services.results import HotelResult, OfferResult, RoomResult


class CatalogReader(Protocol):
    """Read access to hotels, rooms and offers.

    ``stay`` is a ``(starts_on, ends_on)`` hint a reader may use to prefilter;
    results are always re-validated with :func:`covers`.
    """

    async def list_hotels_by_location(self, location_id: str) -> list[HotelResult]: ...

    async def list_rooms_by_hotel(self, hotel_id: str) -> list[RoomResult]: ...

    async def list_offers_by_room(
        self,
        room_id: str,
        *,
        available_only: bool = True,
        stay: tuple[date, date] | None = None,
    ) -> list[OfferResult]: ...

    async def list_offers_by_rooms(
        self,
        room_ids: list[str],
        *,
        available_only: bool = True,
        stay: tuple[date, date] | None = None,
    ) -> list[OfferResult]: ...


def offer_qualifies(offer: OfferResult, starts_on: date, ends_on: date) -> bool:
    return offer.availability and covers(offer.starts_on, offer.ends_on, starts_on, ends_on)


async def assemble(
    reader: CatalogReader,
    location_id: str,
    starts_on: date,
    ends_on: date,
    capacity: int,
) -> list[HotelResult]:
    """Return the hotels in ``location_id`` that can host the stay, unranked."""
    results: list[HotelResult] = []

    for hotel in await reader.list_hotels_by_location(location_id):
        rooms = [room for room in await reader.list_rooms_by_hotel(hotel.id) if room.capacity >= capacity]
        if not rooms:
            continue

        offers = await reader.list_offers_by_rooms(
            [room.id for room in rooms], available_only=True, stay=(starts_on, ends_on)
        )
        offers_by_room: dict[str, list[OfferResult]] = defaultdict(list)
        for offer in offers:
            if offer_qualifies(offer, starts_on, ends_on):
                offers_by_room[offer.room_id].append(offer)

        matched_rooms = [room.with_offers(offers_by_room[room.id]) for room in rooms if offers_by_room[room.id]]
        if matched_rooms:
            results.append(hotel.with_rooms(matched_rooms))

    return results
