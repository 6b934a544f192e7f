import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from homemadefood.core.exceptions import ConflictError, ForbiddenError, NotFoundError, PersistenceError
from homemadefood.domain.models import Address
from homemadefood.domain.schemas import AddressRead, CreateAddressRequest
from homemadefood.interfaces.IAddressRepository import IAddressRepository
from homemadefood.interfaces.IUserRepository import IUserRepository

logger = logging.getLogger(__name__)


class AddressService:
    def __init__(self, address_repo: IAddressRepository, user_repo: IUserRepository):
        self.address_repo = address_repo
        self.user_repo = user_repo

    def list(self, user_id: str, requester_id: str, is_admin: bool = False) -> List[AddressRead]:
        if requester_id != user_id and not is_admin:
            raise ForbiddenError("You can only access your own addresses")
        self._require_user(user_id)
        return [AddressRead.model_validate(a) for a in self.address_repo.list_for_user(user_id)]

    def create(self, user_id: str, request: CreateAddressRequest, requester_id: str,
               is_admin: bool = False) -> AddressRead:
        if requester_id != user_id and not is_admin:
            raise ForbiddenError("You can only create addresses for yourself")
        self._require_user(user_id)

        address = Address(
            title=request.title,
            address=request.address,
            latitude=request.latitude,
            longitude=request.longitude,
            is_default=bool(request.is_default),
        )
        try:
            created = self.address_repo.create_for_user(user_id, address)
        except IntegrityError as e:
            logger.warning(f"⚠️ Concurrent default address write rejected for user {user_id}")
            raise ConflictError("Another default address was set at the same time, please retry") from e
        except SQLAlchemyError as e:
            logger.error(f"❌ Address creation failed for user {user_id}: {e}")
            raise PersistenceError("Failed to create address") from e

        if created.is_default:
            logger.info(f"📍 Address {created.id} is now the default for user {user_id}")
        return AddressRead.model_validate(created)

    def verify_ownership(self, address_id: str, user_id: str) -> bool:
        try:
            return self.address_repo.exists_for_user(address_id, user_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Ownership check failed for address {address_id}: {e}")
            return False

    def _require_user(self, user_id: str) -> None:
        if not self.user_repo.exists(user_id):
            raise NotFoundError(f"User with ID {user_id} not found")
