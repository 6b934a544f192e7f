import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from homemadefood.application.pagination import page_offset, total_pages
from homemadefood.core.exceptions import ConflictError, NotFoundError, PersistenceError
from homemadefood.domain.models import User
from homemadefood.domain.schemas import CreateUserRequest, UpdateUserRequest, UserPage, UserRead
from homemadefood.interfaces.IUserRepository import IUserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: IUserRepository):
        self.user_repo = user_repo

    def create(self, request: CreateUserRequest) -> UserRead:
        user = User(
            name=request.name,
            email=request.email.lower(),
            phone=request.phone,
            role=request.role.value,
        )
        created = self._save(user, "Failed to create user")
        logger.info(f"👤 User {created.id} created")
        return UserRead.model_validate(created)

    def list(self, page: int = 1, limit: int = 10) -> UserPage:
        offset = page_offset(page, limit)
        users, total = self.user_repo.list(offset, limit)
        return UserPage(
            users=[UserRead.model_validate(u) for u in users],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )

    def get(self, user_id: str) -> UserRead:
        return UserRead.model_validate(self._get(user_id))

    def update(self, user_id: str, request: UpdateUserRequest) -> UserRead:
        user = self._get(user_id)
        changes = request.model_dump(exclude_unset=True)
        if changes.get("name"):
            user.name = changes["name"]
        if changes.get("email"):
            user.email = changes["email"].lower()
        if "phone" in changes:
            user.phone = changes["phone"]
        if changes.get("role"):
            user.role = changes["role"].value
        return UserRead.model_validate(self._save(user, "Failed to update user"))

    def delete(self, user_id: str) -> None:
        user = self._get(user_id)
        try:
            self.user_repo.delete(user)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to delete user {user_id}: {e}")
            raise PersistenceError("Failed to delete user") from e
        logger.info(f"🗑️ User {user_id} deleted")

    def _get(self, user_id: str) -> User:
        user = self.user_repo.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def _save(self, user: User, failure: str) -> User:
        try:
            return self.user_repo.save(user)
        except IntegrityError as e:
            raise ConflictError("A user with this email already exists") from e
        except SQLAlchemyError as e:
            logger.error(f"❌ {failure}: {e}")
            raise PersistenceError(failure) from e
