"""Request-scoped wiring: session, caller identity and services built on them."""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from homemadefood.application.address_service import AddressService
from homemadefood.application.booking_service import BookingService
from homemadefood.application.catalog_service import CatalogService
from homemadefood.application.meal_suggestion_service import MealSuggestionService
from homemadefood.application.order_service import OrderService
from homemadefood.application.user_service import UserService
from homemadefood.core.exceptions import ForbiddenError, UnauthorizedError
from homemadefood.domain.models import UserRole
from homemadefood.infrastructure.database import get_db
from homemadefood.infrastructure.repositories.address_repository import PostgresAddressRepository
from homemadefood.infrastructure.repositories.booking_repository import PostgresBookingRepository
from homemadefood.infrastructure.repositories.catalog_repository import PostgresCatalogRepository
from homemadefood.infrastructure.repositories.order_repository import PostgresOrderRepository
from homemadefood.infrastructure.repositories.user_repository import PostgresUserRepository


@dataclass
class CurrentUser:
    id: str
    role: str = UserRole.CUSTOMER.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> CurrentUser:
    """Identity set by the auth gateway in front of this service."""
    if not x_user_id:
        raise UnauthorizedError("Unauthorized")
    return CurrentUser(id=x_user_id, role=(x_user_role or UserRole.CUSTOMER.value).lower())


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def get_address_service(db: Session = Depends(get_db)) -> AddressService:
    return AddressService(PostgresAddressRepository(db), PostgresUserRepository(db))


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    address_service = AddressService(PostgresAddressRepository(db), PostgresUserRepository(db))
    return OrderService(PostgresOrderRepository(db), address_service)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(PostgresUserRepository(db))


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(PostgresBookingRepository(db))


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(PostgresCatalogRepository(db))


def get_meal_suggestion_service(request: Request, db: Session = Depends(get_db)) -> MealSuggestionService:
    # Providers and recipe sources are built once at startup (see main.py)
    return MealSuggestionService(
        PostgresCatalogRepository(db),
        providers=getattr(request.app.state, "meal_providers", []),
        recipe_sources=getattr(request.app.state, "recipe_sources", []),
    )
