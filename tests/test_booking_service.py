from datetime import date

import pytest

from homemadefood.application.booking_service import BookingService
from homemadefood.core.exceptions import NotFoundError
from homemadefood.domain.models import BookingServiceItem, BookingStatus
from homemadefood.domain.schemas import CreateBookingRequest, UpdateBookingRequest
from homemadefood.infrastructure.repositories.booking_repository import PostgresBookingRepository


def make_service(session) -> BookingService:
    return BookingService(PostgresBookingRepository(session))


def booking(on=date(2025, 12, 25), at="14:30", phone="+923001112233", services=None) -> CreateBookingRequest:
    return CreateBookingRequest(
        name="Ahmed Ali",
        phone=phone,
        date=on,
        time=at,
        services=services or [
            {"serviceId": "svc-1", "serviceName": "Classic Haircut"},
            {"serviceId": "svc-2", "serviceName": "Beard Trim"},
        ],
    )


def test_create_with_services(session):
    created = make_service(session).create(booking())

    assert created.status == BookingStatus.PENDING
    assert [s.service_name for s in created.services] == ["Classic Haircut", "Beard Trim"]
    assert all(s.booking_id == created.id for s in created.services)


def test_invalid_time_is_rejected():
    with pytest.raises(ValueError):
        booking(at="25:00")


def test_get_missing_booking(session):
    with pytest.raises(NotFoundError):
        make_service(session).get("missing")


def test_list_filters_and_orders(session):
    service = make_service(session)
    service.create(booking(on=date(2025, 12, 24), at="10:00"))
    late = service.create(booking(on=date(2025, 12, 25), at="18:00"))
    early = service.create(booking(on=date(2025, 12, 25), at="09:00"))
    service.create(booking(on=date(2025, 12, 25), at="12:00", phone="+923009998877"))

    page = service.list(on_date=date(2025, 12, 25), phone="+923001112233")

    assert page.total == 2
    assert [b.id for b in page.bookings] == [late.id, early.id]


def test_list_by_status_with_paging(session):
    service = make_service(session)
    created = [service.create(booking(at=f"1{n}:00")) for n in range(5)]
    service.update_status(created[0].id, BookingStatus.CONFIRMED)

    pending = service.list(status=BookingStatus.PENDING, page=2, limit=3)

    assert pending.total == 4
    assert pending.total_pages == 2
    assert len(pending.bookings) == 1


def test_update_status(session):
    service = make_service(session)
    created = service.create(booking())

    updated = service.update_status(created.id, BookingStatus.COMPLETED)

    assert updated.status == BookingStatus.COMPLETED


def test_partial_update_keeps_untouched_fields(session):
    service = make_service(session)
    created = service.create(booking())

    updated = service.update(created.id, UpdateBookingRequest(time="16:15", notes="Window seat"))

    assert updated.time == "16:15"
    assert updated.notes == "Window seat"
    assert updated.name == "Ahmed Ali"
    assert len(updated.services) == 2


def test_partial_update_replaces_services(session):
    service = make_service(session)
    created = service.create(booking())

    updated = service.update(created.id, UpdateBookingRequest(
        services=[{"serviceId": "svc-9", "serviceName": "Facial"}],
    ))

    assert [s.service_id for s in updated.services] == ["svc-9"]
    remaining = session.query(BookingServiceItem).filter_by(booking_id=created.id).count()
    assert remaining == 1


def test_update_missing_booking(session):
    with pytest.raises(NotFoundError):
        make_service(session).update("missing", UpdateBookingRequest(notes="x"))
