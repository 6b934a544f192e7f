from abc import ABC, abstractmethod
from typing import List

from homemadefood.domain.models import Address

class IAddressRepository(ABC):
    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Address]:
        pass

    @abstractmethod
    def create_for_user(self, user_id: str, address: Address) -> Address:
        pass

    @abstractmethod
    def exists_for_user(self, address_id: str, user_id: str) -> bool:
        pass
