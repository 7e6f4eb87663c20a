"""Location autocomplete."""

from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.models import Location
from hotelsearch.repositories.location import search_locations

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 10


async def autocomplete_locations(db: AsyncSession, query: str) -> list[Location]:
    """Suggest up to ten locations matching ``query``; short queries match nothing."""
    term = query.strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []
    return await search_locations(db, term, MAX_SUGGESTIONS)
