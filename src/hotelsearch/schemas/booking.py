"""Booking request/response schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from hotelsearch.models import BookingStatus, SearchStatus


class BookingCreateRequest(BaseModel):
    search_id: str = Field(min_length=1)
    hotel_id: str = Field(min_length=1)
    room_id: str = Field(min_length=1)
    offer_id: str = Field(min_length=1)


class BookingResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    user_id: str
    search_id: str
    hotel_id: str
    room_id: str
    offer_id: str
    status: BookingStatus
    starts_on: date
    ends_on: date
    capacity: int
    total_price: Decimal


class BookingCreateResponse(BaseModel):
    booking_id: str
    booking: BookingResponse


class HotelInBooking(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: str
    description: str
    location_id: str
    star_rating: int


class RoomInBooking(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    hotel_id: str
    category: str
    description: str
    capacity: int


class OfferInBooking(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    room_id: str
    price: Decimal
    discount: Decimal
    effective_price: Decimal
    availability: bool
    starts_on: date
    ends_on: date


class SearchInBooking(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    location_id: str
    starts_on: date
    ends_on: date
    capacity: int
    status: SearchStatus


class BookingDetailResponse(BaseModel):
    """A booking with the hotel, room, offer and search it refers to."""

    model_config = {"from_attributes": True}

    booking: BookingResponse
    hotel: HotelInBooking | None
    room: RoomInBooking | None
    offer: OfferInBooking | None
    search: SearchInBooking | None
