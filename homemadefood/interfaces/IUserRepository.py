from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from homemadefood.domain.models import User

class IUserRepository(ABC):
    @abstractmethod
    def add(self, user: User) -> User:
        pass

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def exists(self, user_id: str) -> bool:
        pass

    @abstractmethod
    def list(self, offset: int, limit: int) -> Tuple[List[User], int]:
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        pass

    @abstractmethod
    def delete(self, user: User) -> None:
        pass
