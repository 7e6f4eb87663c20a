from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotelsearch.models import Hotel, Location, Offer, Room, Search, SearchStatus
from tests.factories import make_hotel, make_location, make_offer, make_room, make_search
from tests.seeds import LISBON


# ---------------------------------------------------------------------------
# 1. Persistence of the seeded catalog
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_seed_creates_catalog(seeded_db: AsyncSession) -> None:
    locations = (await seeded_db.execute(select(Location))).scalars().all()
    hotels = (await seeded_db.execute(select(Hotel))).scalars().all()
    rooms = (await seeded_db.execute(select(Room))).scalars().all()
    offers = (await seeded_db.execute(select(Offer))).scalars().all()

    assert len(locations) == 2
    assert len(hotels) == 4
    assert len(rooms) == 5
    assert len(offers) == 6


# ---------------------------------------------------------------------------
# 2. Associations
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_hotel_loads_rooms_and_offers(seeded_db: AsyncSession) -> None:
    stmt = select(Hotel).where(Hotel.id == "h1").options(selectinload(Hotel.rooms).selectinload(Room.offers))
    hotel = (await seeded_db.execute(stmt)).scalar_one()

    rooms = sorted(hotel.rooms, key=lambda r: r.id)
    assert [r.id for r in rooms] == ["r1", "r2"]
    assert sorted(o.id for o in rooms[1].offers) == ["o2", "o3"]
    for room in rooms:
        assert room.hotel_id == hotel.id


@pytest.mark.asyncio
async def test_location_loads_its_hotels(seeded_db: AsyncSession) -> None:
    stmt = select(Location).where(Location.id == LISBON).options(selectinload(Location.hotels))
    location = (await seeded_db.execute(stmt)).scalar_one()

    assert sorted(h.id for h in location.hotels) == ["h1", "h2", "h3"]


# ---------------------------------------------------------------------------
# 3. Check constraints
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize("star_rating", [0, 6], ids=["below_min", "above_max"])
async def test_hotel_star_rating_out_of_range(db: AsyncSession, star_rating: int) -> None:
    location = make_location()
    db.add(location)
    await db.flush()

    db.add(make_hotel(location_id=location.id, star_rating=star_rating))
    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()


@pytest.mark.asyncio
async def test_room_capacity_must_be_positive(db: AsyncSession) -> None:
    location = make_location()
    db.add(location)
    await db.flush()
    hotel = make_hotel(location_id=location.id)
    db.add(hotel)
    await db.flush()

    db.add(make_room(hotel_id=hotel.id, capacity=0))
    with pytest.raises((IntegrityError, DBAPIError)):
        await db.flush()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"price": Decimal("-1")},
        {"discount": Decimal("-5")},
        {"starts_on": date(2025, 6, 3), "ends_on": date(2025, 6, 3)},
        {"starts_on": date(2025, 6, 5), "ends_on": date(2025, 6, 1)},
    ],
    ids=["negative_price", "negative_discount", "empty_interval", "inverted_interval"],
)
async def test_offer_constraint_violation(seeded_db: AsyncSession, overrides: dict[str, object]) -> None:
    seeded_db.add(make_offer(room_id="r1", **overrides))  # type: ignore[arg-type]

    with pytest.raises((IntegrityError, DBAPIError)):
        await seeded_db.flush()


@pytest.mark.asyncio
async def test_search_requires_positive_capacity(seeded_db: AsyncSession) -> None:
    seeded_db.add(make_search(location_id=LISBON, capacity=0))

    with pytest.raises((IntegrityError, DBAPIError)):
        await seeded_db.flush()


# ---------------------------------------------------------------------------
# 4. Defaults and column types
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_ids_and_timestamps_auto_populated(db: AsyncSession) -> None:
    location = make_location()
    db.add(location)
    await db.commit()

    assert len(location.id) == 36
    assert location.created_at is not None
    assert location.updated_at is not None


@pytest.mark.asyncio
async def test_search_status_stored_as_value(seeded_db: AsyncSession) -> None:
    search = make_search(location_id=LISBON, status=SearchStatus.NO_RESULTS)
    seeded_db.add(search)
    await seeded_db.commit()

    raw = (
        await seeded_db.execute(text("SELECT status FROM searches WHERE id = :id"), {"id": search.id})
    ).scalar_one()
    loaded = (await seeded_db.execute(select(Search).where(Search.id == search.id))).scalar_one()

    assert raw == "no_results"
    assert loaded.status is SearchStatus.NO_RESULTS
    assert loaded.results == 0


@pytest.mark.asyncio
async def test_offer_prices_keep_two_decimals(seeded_db: AsyncSession) -> None:
    offer = await seeded_db.get(Offer, "o3")

    assert offer is not None
    assert offer.price == Decimal("90.00")
    assert offer.effective_price == Decimal("80.00")
