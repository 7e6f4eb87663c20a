"""Location data-access layer."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.models import Location


async def get_location(db: AsyncSession, location_id: str) -> Location | None:
    return await db.get(Location, location_id)


async def search_locations(db: AsyncSession, term: str, limit: int) -> list[Location]:
    """Return locations whose name, city or country contains ``term`` (case-insensitive).

    ``term`` is matched literally: ``%`` and ``_`` are escaped, not wildcards.
    """
    needle = term.lower()
    stmt = (
        select(Location)
        .where(
            or_(
                func.lower(Location.name).contains(needle, autoescape=True),
                func.lower(Location.city).contains(needle, autoescape=True),
                func.lower(Location.country).contains(needle, autoescape=True),
            )
        )
        .order_by(Location.city, Location.name)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
