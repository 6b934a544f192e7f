import logging
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from homemadefood.application.address_service import AddressService
from homemadefood.application.pagination import page_offset, total_pages
from homemadefood.core.config import settings
from homemadefood.core.exceptions import NotFoundError, PersistenceError, ValidationError
from homemadefood.domain.models import Order, OrderItem, OrderStatus
from homemadefood.domain.order_lifecycle import can_cancel, can_transition
from homemadefood.domain.schemas import CreateOrderRequest, OrderHistoryRead, OrderRead
from homemadefood.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


def new_tracking_id() -> str:
    return f"TRK_{uuid.uuid4().hex[:16].upper()}"


class OrderService:
    def __init__(self, order_repo: IOrderRepository, address_service: AddressService,
                 eta_minutes: Optional[int] = None, enforce_transitions: Optional[bool] = None):
        self.order_repo = order_repo
        self.address_service = address_service
        self.eta_minutes = settings.ORDER_ETA_MINUTES if eta_minutes is None else eta_minutes
        self.enforce_transitions = (
            settings.ENFORCE_ORDER_TRANSITIONS if enforce_transitions is None else enforce_transitions
        )

    def create(self, user_id: str, request: CreateOrderRequest) -> OrderRead:
        self._validate(user_id, request)

        now = datetime.now(timezone.utc)
        order = Order(
            user_id=user_id,
            restaurant_id=request.restaurant_id,
            restaurant_name=request.restaurant_name,
            subtotal=request.subtotal,
            delivery_fee=request.delivery_fee,
            tax=request.tax,
            grand_total=request.grand_total,
            promo_code=request.promo_code,
            promo_discount=request.promo_discount,
            status=OrderStatus.PENDING.value,
            delivery_address=request.delivery_address.model_dump(),
            payment_method=request.payment_method,
            special_instructions=request.special_instructions,
            tracking_id=new_tracking_id(),
            order_date=now,
            estimated_delivery_time=now + timedelta(minutes=self.eta_minutes),
        )
        items = [
            OrderItem(
                line_number=line_number,
                food_item_id=item.food_item_id,
                name=item.name,
                image=item.image,
                price=item.price,
                quantity=item.quantity,
                total_price=item.price * item.quantity,
                special_instructions=item.special_instructions,
            )
            for line_number, item in enumerate(request.items, start=1)
        ]

        try:
            created = self.order_repo.create_with_items(order, items)
        except SQLAlchemyError as e:
            logger.error(f"❌ Order creation failed for user {user_id}: {e}")
            raise PersistenceError("Failed to create order") from e

        logger.info(f"✅ Order {created.id} created for user {user_id} ({len(items)} items, total {created.grand_total})")
        return OrderRead.model_validate(created)

    def get_by_id(self, order_id: str, user_id: str) -> OrderRead:
        return OrderRead.model_validate(self._get(order_id, user_id))

    def get_history(self, user_id: str, page: int = 1, limit: int = 10) -> OrderHistoryRead:
        offset = page_offset(page, limit)
        orders, total = self.order_repo.list_for_user(user_id, offset, limit)
        return OrderHistoryRead(
            orders=[OrderRead.model_validate(o) for o in orders],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
            has_next=page * limit < total,
            has_previous=page > 1,
        )

    def update_status(self, order_id: str, status: OrderStatus, user_id: Optional[str] = None) -> OrderRead:
        """Admins pass no user_id and may touch any order."""
        order = self._get(order_id, user_id)
        current = OrderStatus(order.status)

        if self.enforce_transitions and not can_transition(current, status):
            raise ValidationError(f"Cannot change order status from {current.value} to {status.value}")

        order.status = status.value
        order.updated_at = datetime.now(timezone.utc)
        if status == OrderStatus.DELIVERED:
            order.actual_delivery_time = order.updated_at

        saved = self._save(order)
        logger.info(f"🔄 Order {order_id}: {current.value} -> {status.value}")
        return OrderRead.model_validate(saved)

    def cancel(self, order_id: str, user_id: str, reason: Optional[str] = None) -> OrderRead:
        order = self._get(order_id, user_id)
        if not can_cancel(OrderStatus(order.status)):
            raise ValidationError("Order cannot be cancelled in current status")

        order.status = OrderStatus.CANCELLED.value
        order.updated_at = datetime.now(timezone.utc)
        order.cancellation_reason = reason

        saved = self._save(order)
        logger.info(f"🚫 Order {order_id} cancelled by user {user_id}. Reason: {reason or 'not given'}")
        return OrderRead.model_validate(saved)

    # --- helpers ---

    def _validate(self, user_id: str, request: CreateOrderRequest) -> None:
        if not request.items:
            raise ValidationError("Order must contain at least one item")
        if not request.delivery_address or not (request.delivery_address.address or "").strip():
            raise ValidationError("Delivery address is required")
        if not (request.payment_method or "").strip():
            raise ValidationError("Payment method is required")
        if request.subtotal <= 0:
            raise ValidationError("Total amount must be greater than 0")
        if request.grand_total <= 0:
            raise ValidationError("Grand total must be greater than 0")

        expected = request.subtotal + request.delivery_fee + request.tax
        if request.grand_total.quantize(Decimal("0.01")) != expected.quantize(Decimal("0.01")):
            raise ValidationError(
                f"Grand total {request.grand_total} does not match subtotal + delivery fee + tax ({expected})"
            )

        if request.address_id and not self.address_service.verify_ownership(request.address_id, user_id):
            raise ValidationError("Delivery address does not belong to this user")

    def _get(self, order_id: str, user_id: Optional[str]) -> Order:
        order = self.order_repo.get(order_id, user_id)
        if not order:
            raise NotFoundError(f"Order with ID {order_id} not found")
        return order

    def _save(self, order: Order) -> Order:
        try:
            return self.order_repo.save(order)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to update order {order.id}: {e}")
            raise PersistenceError("Failed to update order") from e
