from fastapi import APIRouter, Depends, Query, status

from homemadefood.application.address_service import AddressService
from homemadefood.application.user_service import UserService
from homemadefood.domain.schemas import CreateAddressRequest, CreateUserRequest, UpdateUserRequest
from homemadefood.interfaces.dependencies import (
    CurrentUser,
    get_address_service,
    get_current_user,
    get_user_service,
    require_admin,
)
from homemadefood.interfaces.responses import envelope

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return envelope(service.create(request), "User created successfully")


@router.get("")
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return envelope(service.list(page, limit), "Users retrieved successfully")


@router.get("/profile")
def get_profile(
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return envelope(service.get(user.id), "Profile retrieved successfully")


# --- addresses ---

@router.get("/{user_id}/addresses")
def list_addresses(
    user_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return envelope(service.list(user_id, user.id, user.is_admin), "Addresses retrieved successfully")


@router.post("/{user_id}/addresses", status_code=status.HTTP_201_CREATED)
def create_address(
    user_id: str,
    request: CreateAddressRequest,
    user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
):
    return envelope(service.create(user_id, request, user.id, user.is_admin), "Address created successfully")


# --- single user ---

@router.get("/{user_id}")
def get_user(
    user_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return envelope(service.get(user_id), "User retrieved successfully")


@router.patch("/{user_id}")
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return envelope(service.update(user_id, request), "User updated successfully")


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    service.delete(user_id)
    return envelope(None, "User deleted successfully")
