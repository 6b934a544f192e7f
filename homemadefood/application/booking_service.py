import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from homemadefood.application.pagination import page_offset, total_pages
from homemadefood.core.exceptions import NotFoundError, PersistenceError
from homemadefood.domain.models import Booking, BookingServiceItem, BookingStatus
from homemadefood.domain.schemas import (
    BookingPage,
    BookingRead,
    CreateBookingRequest,
    UpdateBookingRequest,
)
from homemadefood.interfaces.IBookingRepository import IBookingRepository

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, booking_repo: IBookingRepository):
        self.booking_repo = booking_repo

    def create(self, request: CreateBookingRequest) -> BookingRead:
        booking = Booking(
            name=request.name,
            phone=request.phone,
            date=request.date,
            time=request.time,
            notes=request.notes,
            status=BookingStatus.PENDING.value,
        )
        services = [
            BookingServiceItem(service_id=s.service_id, service_name=s.service_name)
            for s in request.services
        ]

        try:
            created = self.booking_repo.create_with_services(booking, services)
        except SQLAlchemyError as e:
            logger.error(f"❌ Booking creation failed for {request.phone}: {e}")
            raise PersistenceError("Failed to create booking") from e

        logger.info(f"📅 Booking {created.id} created for {created.date} {created.time}")
        return BookingRead.model_validate(created)

    def list(self, on_date: Optional[date] = None, phone: Optional[str] = None,
             status: Optional[BookingStatus] = None, page: int = 1, limit: int = 10) -> BookingPage:
        offset = page_offset(page, limit)
        bookings, total = self.booking_repo.search(
            on_date, phone, status.value if status else None, offset, limit
        )
        return BookingPage(
            bookings=[BookingRead.model_validate(b) for b in bookings],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )

    def get(self, booking_id: str) -> BookingRead:
        return BookingRead.model_validate(self._get(booking_id))

    def update_status(self, booking_id: str, status: BookingStatus) -> BookingRead:
        booking = self._get(booking_id)
        booking.status = status.value
        return self._save(booking)

    def update(self, booking_id: str, request: UpdateBookingRequest) -> BookingRead:
        booking = self._get(booking_id)

        changes = request.model_dump(exclude_unset=True, exclude={"services"})
        for field, value in changes.items():
            # notes is the only column that may be cleared
            if value is None and field != "notes":
                continue
            if field == "status":
                value = BookingStatus(value).value
            setattr(booking, field, value)

        replace_services = None
        if request.services is not None:
            replace_services = [
                BookingServiceItem(service_id=s.service_id, service_name=s.service_name)
                for s in request.services
            ]
        return self._save(booking, replace_services)

    def _get(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get(booking_id)
        if not booking:
            raise NotFoundError(f"Booking with ID {booking_id} not found")
        return booking

    def _save(self, booking: Booking, replace_services=None) -> BookingRead:
        try:
            saved = self.booking_repo.save(booking, replace_services)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to update booking {booking.id}: {e}")
            raise PersistenceError("Failed to update booking") from e
        return BookingRead.model_validate(saved)
