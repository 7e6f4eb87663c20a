"""Booking endpoints."""

from fastapi import APIRouter

from hotelsearch.dependencies import DB, CurrentUserID
from hotelsearch.schemas.booking import (
    BookingCreateRequest,
    BookingCreateResponse,
    BookingDetailResponse,
    BookingResponse,
)
from hotelsearch.services.booking import create_booking, get_booking

router = APIRouter(tags=["bookings"])


@router.post("/bookings", response_model=BookingCreateResponse, status_code=201)
async def post_booking(body: BookingCreateRequest, db: DB, user_id: CurrentUserID) -> BookingCreateResponse:
    booking = await create_booking(
        db,
        user_id=user_id,
        search_id=body.search_id,
        hotel_id=body.hotel_id,
        room_id=body.room_id,
        offer_id=body.offer_id,
    )
    return BookingCreateResponse(booking_id=booking.id, booking=BookingResponse.model_validate(booking))


@router.get("/bookings/{booking_id}", response_model=BookingDetailResponse, status_code=200)
async def read_booking(booking_id: str, db: DB, user_id: CurrentUserID) -> BookingDetailResponse:
    detail = await get_booking(db, user_id=user_id, booking_id=booking_id)
    return BookingDetailResponse.model_validate(detail)
