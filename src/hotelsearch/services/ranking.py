"""Deterministic price ranking.

Offers, rooms and hotels are each sorted ascending by their cheapest
effective price, ties broken by ascending id. The three levels are ranked
independently, each from its own offers.
"""

from collections.abc import Iterable
from decimal import Decimal

from hotelsearch.services.results import HotelResult, OfferResult, RoomResult

ZERO = Decimal("0")


def _cheapest(offers: Iterable[OfferResult]) -> Decimal:
    # Offer-less entities are filtered out before ranking; 0 keeps sorting total.
    return min((offer.effective_price for offer in offers), default=ZERO)


def min_price(entity: HotelResult | RoomResult | OfferResult) -> Decimal:
    """Return the lowest effective price reachable from ``entity``."""
    if isinstance(entity, OfferResult):
        return entity.effective_price
    if isinstance(entity, RoomResult):
        return _cheapest(entity.offers)
    return _cheapest(offer for room in entity.rooms for offer in room.offers)


def _sort_key(entity: HotelResult | RoomResult | OfferResult) -> tuple[Decimal, str]:
    return min_price(entity), str(entity.id)


def rank_offers(offers: Iterable[OfferResult]) -> list[OfferResult]:
    return sorted(offers, key=_sort_key)


def rank_rooms(rooms: Iterable[RoomResult]) -> list[RoomResult]:
    """Rank rooms, ordering each room's offers first."""
    return sorted(
        (room.with_offers(rank_offers(room.offers)) for room in rooms),
        key=_sort_key,
    )


def rank_hotels(hotels: Iterable[HotelResult]) -> list[HotelResult]:
    """Rank hotels by their cheapest offer, with rooms and offers ranked inside each."""
    return sorted(
        (hotel.with_rooms(rank_rooms(hotel.rooms)) for hotel in hotels),
        key=_sort_key,
    )
