import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from homemadefood.application.pagination import check_limit, page_offset, total_pages
from homemadefood.core.exceptions import ConflictError, NotFoundError, PersistenceError
from homemadefood.domain.models import Category, FoodItem
from homemadefood.domain.schemas import (
    CategoryRead,
    CreateCategoryRequest,
    CreateFoodItemRequest,
    FoodItemPage,
    FoodItemRead,
    UpdateFoodItemRequest,
)
from homemadefood.interfaces.ICatalogRepository import ICatalogRepository

logger = logging.getLogger(__name__)

# Columns a partial update must never null out
REQUIRED_ITEM_FIELDS = {
    "name", "description", "price", "rating", "is_available", "is_featured",
    "is_popular", "is_vegetarian", "is_vegan", "is_spicy",
}


class CatalogService:
    def __init__(self, catalog_repo: ICatalogRepository):
        self.catalog_repo = catalog_repo

    # --- categories ---

    def list_categories(self, active_only: bool = True) -> List[CategoryRead]:
        return [CategoryRead.model_validate(c) for c in self.catalog_repo.list_categories(active_only)]

    def create_category(self, request: CreateCategoryRequest) -> CategoryRead:
        category = Category(
            name=request.name,
            description=request.description,
            icon=request.icon or "restaurant",
        )
        try:
            created = self.catalog_repo.add_category(category)
        except IntegrityError as e:
            raise ConflictError(f"Category '{request.name}' already exists") from e
        except SQLAlchemyError as e:
            logger.error(f"❌ Category creation failed: {e}")
            raise PersistenceError("Failed to create category") from e
        logger.info(f"🗂️ Category {created.name} created")
        return CategoryRead.model_validate(created)

    # --- public item reads ---

    def search(self, query: Optional[str] = None, category: Optional[str] = None,
               page: int = 1, limit: int = 20) -> FoodItemPage:
        offset = page_offset(page, limit)
        items, total = self.catalog_repo.search_items(query, category, offset, limit)
        return self._page(items, total, page, limit)

    def featured(self, limit: int = 10) -> List[FoodItemRead]:
        return [FoodItemRead.model_validate(i) for i in self.catalog_repo.list_flagged("featured", check_limit(limit))]

    def popular(self, limit: int = 10) -> List[FoodItemRead]:
        return [FoodItemRead.model_validate(i) for i in self.catalog_repo.list_flagged("popular", check_limit(limit))]

    def by_restaurant(self, restaurant_id: str, page: int = 1, limit: int = 20) -> FoodItemPage:
        offset = page_offset(page, limit)
        items, total = self.catalog_repo.list_by_restaurant(restaurant_id, offset, limit)
        return self._page(items, total, page, limit)

    def get_item(self, item_id: str) -> FoodItemRead:
        return FoodItemRead.model_validate(self._get(item_id))

    # --- admin ---

    def list_all(self, page: int = 1, limit: int = 20) -> FoodItemPage:
        offset = page_offset(page, limit)
        items, total = self.catalog_repo.list_all_items(offset, limit)
        return self._page(items, total, page, limit)

    def create_item(self, request: CreateFoodItemRequest) -> FoodItemRead:
        item = FoodItem(**request.model_dump())
        saved = self._save(item, "Failed to create food item")
        logger.info(f"🍽️ Food item {saved.name} created ({saved.id})")
        return FoodItemRead.model_validate(saved)

    def update_item(self, item_id: str, request: UpdateFoodItemRequest) -> FoodItemRead:
        item = self._get(item_id)
        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field in REQUIRED_ITEM_FIELDS:
                continue
            setattr(item, field, value)
        return FoodItemRead.model_validate(self._save(item, "Failed to update food item"))

    def delete_item(self, item_id: str) -> None:
        item = self._get(item_id)
        try:
            self.catalog_repo.delete_item(item)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to delete food item {item_id}: {e}")
            raise PersistenceError("Failed to delete food item") from e
        logger.info(f"🗑️ Food item {item_id} deleted")

    # --- helpers ---

    def _get(self, item_id: str) -> FoodItem:
        item = self.catalog_repo.get_item(item_id)
        if not item:
            raise NotFoundError(f"Food item with ID {item_id} not found")
        return item

    def _save(self, item: FoodItem, failure: str) -> FoodItem:
        try:
            return self.catalog_repo.save_item(item)
        except SQLAlchemyError as e:
            logger.error(f"❌ {failure}: {e}")
            raise PersistenceError(failure) from e

    @staticmethod
    def _page(items, total: int, page: int, limit: int) -> FoodItemPage:
        return FoodItemPage(
            items=[FoodItemRead.model_validate(i) for i in items],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )
