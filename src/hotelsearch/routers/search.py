"""Search endpoints."""

from fastapi import APIRouter, BackgroundTasks

from hotelsearch.dependencies import DB, Cache, CurrentUserID, JobRunner
from hotelsearch.schemas.search import SearchCreateRequest, SearchCreateResponse, SearchDetailResponse
from hotelsearch.services.search import create_search, get_search_detail

router = APIRouter(tags=["search"])


@router.post("/search", response_model=SearchCreateResponse, status_code=202)
async def post_search(
    body: SearchCreateRequest,
    db: DB,
    cache: Cache,
    runner: JobRunner,
    user_id: CurrentUserID,
    background_tasks: BackgroundTasks,
) -> SearchCreateResponse:
    """Start a search. Poll GET /search/{search_id} until it reaches a final status."""
    created = await create_search(
        db,
        cache,
        user_id=user_id,
        location_id=body.location_id,
        starts_on=body.starts_on,
        ends_on=body.ends_on,
        capacity=body.capacity,
    )
    if not created.cached:
        # The job uses its own session and must see the pending row.
        await db.commit()
        background_tasks.add_task(runner.dispatch, created.search_id)
    return SearchCreateResponse(search_id=created.search_id)


@router.get("/search/{search_id}", response_model=SearchDetailResponse, status_code=200)
async def get_search(search_id: str, db: DB, cache: Cache) -> SearchDetailResponse:
    """Return the search status and, once published, its ranked hotels."""
    detail = await get_search_detail(db, cache, search_id)
    return SearchDetailResponse.model_validate(detail)
