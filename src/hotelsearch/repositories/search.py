"""Search data-access layer.

Pure query functions. Transaction boundaries belong to the caller
(the request session dependency or the search job).
"""

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.models import Search


async def get_search(db: AsyncSession, search_id: str) -> Search | None:
    return await db.get(Search, search_id)


async def save_search(db: AsyncSession, search: Search) -> Search:
    """Add (or re-attach) a search and flush so its id and defaults are set."""
    db.add(search)
    await db.flush()
    return search


async def delete_search(db: AsyncSession, search_id: str) -> None:
    await db.execute(delete(Search).where(Search.id == search_id))
