import logging
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homemadefood.domain.models import Order, OrderItem
from homemadefood.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


class PostgresOrderRepository(IOrderRepository):

    def __init__(self, session: Session):
        self.session = session

    def create_with_items(self, order: Order, items: List[OrderItem]) -> Order:
        """Order row first, then items keyed on the generated id, one transaction."""
        try:
            self.session.add(order)
            self.session.flush()  # assigns order.id

            for item in items:
                item.order_id = order.id
                self.session.add(item)

            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        # Fresh read so the caller sees exactly what was stored
        order_id = order.id
        self.session.expire(order)
        return self.get(order_id)

    def get(self, order_id: str, user_id: Optional[str] = None) -> Optional[Order]:
        stmt = select(Order).where(Order.id == order_id)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        return self.session.scalars(stmt).first()

    def list_for_user(self, user_id: str, offset: int, limit: int) -> Tuple[List[Order], int]:
        total = self.session.scalar(
            select(func.count()).select_from(Order).where(Order.user_id == user_id)
        )
        orders = self.session.scalars(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(desc(Order.order_date), desc(Order.created_at))
            .offset(offset)
            .limit(limit)
        ).all()
        return list(orders), total or 0

    def save(self, order: Order) -> Order:
        try:
            self.session.add(order)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(order)
        return order
