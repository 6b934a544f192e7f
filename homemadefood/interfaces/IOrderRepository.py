from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from homemadefood.domain.models import Order, OrderItem

class IOrderRepository(ABC):
    @abstractmethod
    def create_with_items(self, order: Order, items: List[OrderItem]) -> Order:
        pass

    @abstractmethod
    def get(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str, offset: int, limit: int) -> Tuple[List[Order], int]:
        pass

    @abstractmethod
    def save(self, order: Order) -> Order:
        pass
