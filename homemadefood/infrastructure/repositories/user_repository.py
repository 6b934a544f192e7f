from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homemadefood.domain.models import User
from homemadefood.interfaces.IUserRepository import IUserRepository


class PostgresUserRepository(IUserRepository):

    def __init__(self, session: Session):
        self.session = session

    def add(self, user: User) -> User:
        return self.save(user)

    def get(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def exists(self, user_id: str) -> bool:
        return self.session.scalar(select(User.id).where(User.id == user_id)) is not None

    def list(self, offset: int, limit: int) -> Tuple[List[User], int]:
        total = self.session.scalar(select(func.count()).select_from(User))
        users = self.session.scalars(
            select(User).order_by(User.created_at, User.email).offset(offset).limit(limit)
        ).all()
        return list(users), total or 0

    def save(self, user: User) -> User:
        try:
            self.session.add(user)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        try:
            self.session.delete(user)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
