from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from homemadefood.domain.models import Category, FoodItem

class ICatalogRepository(ABC):
    @abstractmethod
    def list_categories(self, active_only: bool = True) -> List[Category]:
        pass

    @abstractmethod
    def add_category(self, category: Category) -> Category:
        pass

    @abstractmethod
    def search_items(self, query: Optional[str], category: Optional[str], offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        pass

    @abstractmethod
    def list_flagged(self, flag: str, limit: int) -> List[FoodItem]:
        pass

    @abstractmethod
    def list_by_restaurant(self, restaurant_id: str, offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        pass

    @abstractmethod
    def list_all_items(self, offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        pass

    @abstractmethod
    def list_available_by_rating(self, limit: int) -> List[FoodItem]:
        pass

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[FoodItem]:
        pass

    @abstractmethod
    def save_item(self, item: FoodItem) -> FoodItem:
        pass

    @abstractmethod
    def delete_item(self, item: FoodItem) -> None:
        pass
