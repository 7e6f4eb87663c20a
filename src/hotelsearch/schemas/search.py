"""Search request/response schemas.

Responses validate straight from the service-layer result dataclasses
(``from_attributes``), so the nested hotel → room → offer order produced by
ranking is preserved as-is.
"""

from datetime import date
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, model_validator

from hotelsearch.models import SearchStatus


class SearchCreateRequest(BaseModel):
    location_id: str = Field(min_length=1)
    starts_on: date
    ends_on: date
    capacity: int = Field(ge=1)

    @model_validator(mode="after")
    def check_stay(self) -> Self:
        if self.ends_on <= self.starts_on:
            raise ValueError("ends_on must be after starts_on")
        return self


class SearchCreateResponse(BaseModel):
    search_id: str


class OfferInResult(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    room_id: str
    price: Decimal
    discount: Decimal
    effective_price: Decimal
    availability: bool
    starts_on: date
    ends_on: date


class RoomInResult(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    hotel_id: str
    category: str
    description: str
    capacity: int
    offers: list[OfferInResult]


class HotelInResult(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: str
    description: str
    location_id: str
    star_rating: int
    rooms: list[RoomInResult]


class SearchResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    user_id: str
    location_id: str
    starts_on: date
    ends_on: date
    capacity: int
    status: SearchStatus
    results: int


class SearchDetailResponse(BaseModel):
    """A search plus its ranked hotels (empty until the job publishes)."""

    model_config = {"from_attributes": True}

    search: SearchResponse
    hotels: list[HotelInResult]
