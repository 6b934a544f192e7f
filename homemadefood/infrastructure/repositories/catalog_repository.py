from typing import List, Optional, Tuple

from sqlalchemy import desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homemadefood.domain.models import Category, FoodItem
from homemadefood.interfaces.ICatalogRepository import ICatalogRepository

FLAGS = {
    "featured": FoodItem.is_featured,
    "popular": FoodItem.is_popular,
}


class PostgresCatalogRepository(ICatalogRepository):

    def __init__(self, session: Session):
        self.session = session

    # --- categories ---

    def list_categories(self, active_only: bool = True) -> List[Category]:
        stmt = select(Category).order_by(Category.name)
        if active_only:
            stmt = stmt.where(Category.is_active.is_(True))
        return list(self.session.scalars(stmt).all())

    def add_category(self, category: Category) -> Category:
        self._commit(category)
        return category

    # --- food items ---

    def search_items(self, query: Optional[str], category: Optional[str], offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        conditions = [FoodItem.is_available.is_(True)]
        if query:
            pattern = f"%{query.lower()}%"
            conditions.append(or_(
                func.lower(FoodItem.name).like(pattern),
                func.lower(FoodItem.description).like(pattern),
            ))
        if category:
            conditions.append(FoodItem.category == category)
        return self._page(conditions, offset, limit)

    def list_flagged(self, flag: str, limit: int) -> List[FoodItem]:
        stmt = (
            select(FoodItem)
            .where(FLAGS[flag].is_(True), FoodItem.is_available.is_(True))
            .order_by(desc(FoodItem.created_at))
            .limit(limit)
        )
        return list(self.session.scalars(stmt).all())

    def list_by_restaurant(self, restaurant_id: str, offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        conditions = [FoodItem.restaurant_id == restaurant_id, FoodItem.is_available.is_(True)]
        return self._page(conditions, offset, limit)

    def list_all_items(self, offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        return self._page([], offset, limit)

    def list_available_by_rating(self, limit: int) -> List[FoodItem]:
        stmt = (
            select(FoodItem)
            .where(FoodItem.is_available.is_(True))
            .order_by(desc(FoodItem.rating), FoodItem.name)
            .limit(limit)
        )
        return list(self.session.scalars(stmt).all())

    def get_item(self, item_id: str) -> Optional[FoodItem]:
        return self.session.get(FoodItem, item_id)

    def save_item(self, item: FoodItem) -> FoodItem:
        self._commit(item)
        return item

    def delete_item(self, item: FoodItem) -> None:
        try:
            self.session.delete(item)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    # --- helpers ---

    def _page(self, conditions, offset: int, limit: int) -> Tuple[List[FoodItem], int]:
        total = self.session.scalar(select(func.count()).select_from(FoodItem).where(*conditions))
        items = self.session.scalars(
            select(FoodItem)
            .where(*conditions)
            .order_by(desc(FoodItem.created_at), FoodItem.name)
            .offset(offset)
            .limit(limit)
        ).all()
        return list(items), total or 0

    def _commit(self, entity) -> None:
        try:
            self.session.add(entity)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(entity)
