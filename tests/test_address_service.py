import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from homemadefood.application.address_service import AddressService
from homemadefood.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from homemadefood.domain.models import Address
from homemadefood.domain.schemas import CreateAddressRequest
from homemadefood.infrastructure.repositories.address_repository import PostgresAddressRepository
from homemadefood.infrastructure.repositories.user_repository import PostgresUserRepository


def make_service(session) -> AddressService:
    return AddressService(PostgresAddressRepository(session), PostgresUserRepository(session))


def address(title="Home", is_default=None) -> CreateAddressRequest:
    return CreateAddressRequest(
        title=title,
        address=f"{title}, Street 4, Islamabad",
        latitude=33.72,
        longitude=73.05,
        is_default=is_default,
    )


def defaults_for(session, user_id):
    return session.scalars(
        select(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
    ).all()


def test_list_without_addresses_is_empty(session, customer):
    assert make_service(session).list(customer.id, customer.id) == []


def test_list_unknown_user_is_not_found(session):
    with pytest.raises(NotFoundError):
        make_service(session).list("missing-user", "missing-user")


def test_create_unknown_user_is_not_found(session):
    with pytest.raises(NotFoundError):
        make_service(session).create("missing-user", address(), "missing-user")


def test_is_default_omitted_means_false(session, customer):
    created = make_service(session).create(customer.id, address(), customer.id)

    assert created.is_default is False
    assert created.user_id == customer.id


def test_new_default_clears_previous_default(session, customer):
    service = make_service(session)
    first = service.create(customer.id, address("Home", is_default=True), customer.id)
    second = service.create(customer.id, address("Office", is_default=True), customer.id)

    defaults = defaults_for(session, customer.id)
    assert [a.id for a in defaults] == [second.id]

    listed = service.list(customer.id, customer.id)
    assert listed[0].id == second.id
    assert {a.id: a.is_default for a in listed}[first.id] is False


def test_back_to_back_defaults_leave_one(session, customer):
    service = make_service(session)
    for n in range(5):
        service.create(customer.id, address(f"Place {n}", is_default=True), customer.id)

    assert len(defaults_for(session, customer.id)) == 1
    assert len(service.list(customer.id, customer.id)) == 5


def test_non_default_keeps_existing_default(session, customer):
    service = make_service(session)
    home = service.create(customer.id, address("Home", is_default=True), customer.id)
    service.create(customer.id, address("Gym", is_default=False), customer.id)

    assert [a.id for a in defaults_for(session, customer.id)] == [home.id]


def test_other_owner_default_untouched(session, customer, other_customer):
    service = make_service(session)
    theirs = service.create(other_customer.id, address("Their home", is_default=True), other_customer.id)
    service.create(customer.id, address("My home", is_default=True), customer.id)

    assert [a.id for a in defaults_for(session, other_customer.id)] == [theirs.id]


def test_default_listed_first(session, customer):
    service = make_service(session)
    service.create(customer.id, address("Gym"), customer.id)
    home = service.create(customer.id, address("Home", is_default=True), customer.id)
    service.create(customer.id, address("Office"), customer.id)

    assert service.list(customer.id, customer.id)[0].id == home.id


def test_non_defaults_listed_newest_first(session, customer):
    service = make_service(session)
    gym = service.create(customer.id, address("Gym"), customer.id)
    office = service.create(customer.id, address("Office"), customer.id)

    assert [a.id for a in service.list(customer.id, customer.id)] == [office.id, gym.id]


def test_other_users_addresses_are_forbidden(session, customer, other_customer):
    service = make_service(session)

    with pytest.raises(ForbiddenError) as listed:
        service.list(customer.id, other_customer.id)
    with pytest.raises(ForbiddenError) as created:
        service.create(customer.id, address(), other_customer.id)

    assert listed.value.message == "You can only access your own addresses"
    assert created.value.message == "You can only create addresses for yourself"
    assert service.list(customer.id, customer.id) == []


def test_admin_manages_any_addresses(session, customer, admin):
    service = make_service(session)
    created = service.create(customer.id, address(), admin.id, is_admin=True)

    assert [a.id for a in service.list(customer.id, admin.id, is_admin=True)] == [created.id]


def test_verify_ownership(session, customer, other_customer):
    service = make_service(session)
    mine = service.create(customer.id, address(), customer.id)

    assert service.verify_ownership(mine.id, customer.id) is True
    assert service.verify_ownership(mine.id, other_customer.id) is False
    assert service.verify_ownership("missing", customer.id) is False


def test_partial_index_rejects_second_default(session, customer):
    session.add_all([
        Address(title="A", address="a", latitude=0, longitude=0, is_default=True, user_id=customer.id),
        Address(title="B", address="b", latitude=0, longitude=0, is_default=True, user_id=customer.id),
    ])

    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_partial_index_allows_many_non_defaults(session, customer):
    session.add_all([
        Address(title=t, address=t, latitude=0, longitude=0, is_default=False, user_id=customer.id)
        for t in ("A", "B", "C")
    ])
    session.commit()

    assert len(make_service(session).list(customer.id, customer.id)) == 3


def test_index_violation_surfaces_as_conflict(session, customer, monkeypatch):
    service = make_service(session)

    def racing(user_id, new_address):
        raise IntegrityError("INSERT INTO addresses", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(service.address_repo, "create_for_user", racing)

    with pytest.raises(ConflictError):
        service.create(customer.id, address(is_default=True), customer.id)
