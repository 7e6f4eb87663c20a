"""Shared FastAPI dependencies.

Type aliases routers import. Kept out of main.py to avoid circular imports
when routers are registered there.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from hotelsearch.cache import SearchCache, get_search_cache
from hotelsearch.db.session import get_db
from hotelsearch.jobs import SearchJobRunner, get_job_runner

DB = Annotated[AsyncSession, Depends(get_db)]
Cache = Annotated[SearchCache, Depends(get_search_cache)]
JobRunner = Annotated[SearchJobRunner, Depends(get_job_runner)]

# Authentication happens upstream; the gateway forwards the user id.
CurrentUserID = Annotated[str, Header(alias="X-User-ID", min_length=1, max_length=64)]
