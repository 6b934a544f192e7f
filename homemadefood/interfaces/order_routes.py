from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from homemadefood.application.order_service import OrderService
from homemadefood.domain.schemas import CancelOrderRequest, CreateOrderRequest, UpdateOrderStatusRequest
from homemadefood.interfaces.dependencies import CurrentUser, get_current_user, get_order_service
from homemadefood.interfaces.responses import envelope

router = APIRouter(prefix="/orders", tags=["orders"])

@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    request: CreateOrderRequest,
    user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.create(user.id, request)
    return envelope(order, "Order created successfully")


@router.get("/history")
def order_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return envelope(service.get_history(user.id, page, limit), "Order history retrieved successfully")


@router.get("/{order_id}")
def get_order(
    order_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return envelope(service.get_by_id(order_id, user.id), "Order retrieved successfully")


@router.put("/{order_id}/status")
def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    owner = None if user.is_admin else user.id
    order = service.update_status(order_id, request.status, owner)
    return envelope(order, "Order status updated successfully")


@router.put("/{order_id}/cancel")
def cancel_order(
    order_id: str,
    request: Optional[CancelOrderRequest] = None,
    user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.cancel(order_id, user.id, request.reason if request else None)
    return envelope(order, "Order cancelled successfully")
