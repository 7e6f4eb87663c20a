"""Location endpoints."""

from fastapi import APIRouter, Query

from hotelsearch.dependencies import DB
from hotelsearch.schemas.location import LocationAutocompleteResponse, LocationSuggestion
from hotelsearch.services.location import autocomplete_locations

router = APIRouter(tags=["locations"])


@router.get("/locations/autocomplete", response_model=LocationAutocompleteResponse, status_code=200)
async def autocomplete(db: DB, query: str = Query("", max_length=100)) -> LocationAutocompleteResponse:
    """Suggest locations whose name, city or country contains the query."""
    locations = await autocomplete_locations(db, query)
    return LocationAutocompleteResponse(
        locations=[LocationSuggestion.model_validate(location) for location in locations]
    )
