from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from homemadefood.application.booking_service import BookingService
from homemadefood.domain.models import BookingStatus
from homemadefood.domain.schemas import CreateBookingRequest, UpdateBookingRequest, UpdateBookingStatusRequest
from homemadefood.interfaces.dependencies import get_booking_service
from homemadefood.interfaces.responses import envelope

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(request: CreateBookingRequest, service: BookingService = Depends(get_booking_service)):
    return envelope(service.create(request), "Booking created successfully")


@router.get("")
def list_bookings(
    on_date: Optional[date] = Query(None, alias="date"),
    phone: Optional[str] = None,
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: BookingService = Depends(get_booking_service),
):
    result = service.list(on_date, phone, booking_status, page, limit)
    return envelope(result, "Bookings retrieved successfully")


@router.get("/{booking_id}")
def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    return envelope(service.get(booking_id), "Booking retrieved successfully")


@router.put("/{booking_id}/status")
def update_booking_status(
    booking_id: str,
    request: UpdateBookingStatusRequest,
    service: BookingService = Depends(get_booking_service),
):
    return envelope(service.update_status(booking_id, request.status), "Booking status updated successfully")


@router.patch("/{booking_id}")
def update_booking(
    booking_id: str,
    request: UpdateBookingRequest,
    service: BookingService = Depends(get_booking_service),
):
    return envelope(service.update(booking_id, request), "Booking updated successfully")
