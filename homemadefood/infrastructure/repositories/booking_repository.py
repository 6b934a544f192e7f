from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homemadefood.domain.models import Booking, BookingServiceItem
from homemadefood.interfaces.IBookingRepository import IBookingRepository


class PostgresBookingRepository(IBookingRepository):

    def __init__(self, session: Session):
        self.session = session

    def create_with_services(self, booking: Booking, services: List[BookingServiceItem]) -> Booking:
        try:
            self.session.add(booking)
            self.session.flush()  # assigns booking.id
            self._add_services(booking.id, services)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return self._reload(booking)

    def get(self, booking_id: str) -> Optional[Booking]:
        return self.session.scalars(select(Booking).where(Booking.id == booking_id)).first()

    def search(self, on_date: Optional[date], phone: Optional[str], status: Optional[str],
               offset: int, limit: int) -> Tuple[List[Booking], int]:
        conditions = []
        if on_date is not None:
            conditions.append(Booking.date == on_date)
        if phone:
            conditions.append(Booking.phone == phone)
        if status:
            conditions.append(Booking.status == status)

        total = self.session.scalar(select(func.count()).select_from(Booking).where(*conditions))
        bookings = self.session.scalars(
            select(Booking)
            .where(*conditions)
            .order_by(desc(Booking.date), desc(Booking.time))
            .offset(offset)
            .limit(limit)
        ).all()
        return list(bookings), total or 0

    def save(self, booking: Booking, replace_services: Optional[List[BookingServiceItem]] = None) -> Booking:
        try:
            if replace_services is not None:
                # delete-orphan drops every existing row for this booking
                for position, service in enumerate(replace_services):
                    service.position = position
                booking.services = replace_services
            self.session.add(booking)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return self._reload(booking)

    def _add_services(self, booking_id: str, services: List[BookingServiceItem]) -> None:
        for position, service in enumerate(services):
            service.booking_id = booking_id
            service.position = position
            self.session.add(service)

    def _reload(self, booking: Booking) -> Booking:
        booking_id = booking.id
        self.session.expire(booking)
        return self.get(booking_id)
