import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from homemadefood.domain.models import BookingStatus, OrderStatus, UserRole

PHONE_PATTERN = r"^\+?[0-9]{7,15}$"
TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------
# ORDERS
# ---------------------------------------------------------
class DeliveryAddress(CamelModel):
    title: str = ""
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OrderItemRequest(CamelModel):
    food_item_id: str
    name: str
    image: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    special_instructions: Optional[str] = None


class CreateOrderRequest(CamelModel):
    restaurant_id: Optional[str] = None
    restaurant_name: Optional[str] = None
    items: List[OrderItemRequest] = []
    # Older clients send the subtotal as "totalAmount"
    subtotal: Decimal = Field(..., validation_alias=AliasChoices("subtotal", "totalAmount"))
    delivery_fee: Decimal = Field(Decimal("0"), ge=0)
    tax: Decimal = Field(Decimal("0"), ge=0)
    grand_total: Decimal
    delivery_address: Optional[DeliveryAddress] = None
    address_id: Optional[str] = None  # saved address the snapshot was taken from
    payment_method: Optional[str] = None
    special_instructions: Optional[str] = None
    promo_code: Optional[str] = None
    promo_discount: Optional[Decimal] = Field(None, ge=0)


class UpdateOrderStatusRequest(CamelModel):
    status: OrderStatus


class CancelOrderRequest(CamelModel):
    reason: Optional[str] = None


class OrderItemRead(CamelModel):
    id: str
    food_item_id: str
    name: str
    image: Optional[str]
    price: float
    quantity: int
    total_price: float
    special_instructions: Optional[str]


class OrderRead(CamelModel):
    id: str
    user_id: str
    restaurant_id: Optional[str]
    restaurant_name: Optional[str]
    items: List[OrderItemRead]
    subtotal: float = Field(..., serialization_alias="totalAmount")
    delivery_fee: float
    tax: float
    grand_total: float
    promo_code: Optional[str]
    promo_discount: Optional[float]
    status: OrderStatus
    delivery_address: DeliveryAddress
    payment_method: str
    special_instructions: Optional[str]
    cancellation_reason: Optional[str]
    tracking_id: Optional[str]
    order_date: Optional[datetime]
    estimated_delivery_time: Optional[datetime]
    actual_delivery_time: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class OrderHistoryRead(CamelModel):
    orders: List[OrderRead]
    total: int
    page: int
    total_pages: int
    has_next: bool
    has_previous: bool


# ---------------------------------------------------------
# USERS & ADDRESSES
# ---------------------------------------------------------
class CreateUserRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    role: UserRole = UserRole.CUSTOMER


class UpdateUserRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    role: Optional[UserRole] = None


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str]
    role: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class UserPage(CamelModel):
    users: List[UserRead]
    total: int
    page: int
    total_pages: int


class CreateAddressRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    is_default: Optional[bool] = None


class AddressRead(CamelModel):
    id: str
    title: str
    address: str
    latitude: float
    longitude: float
    is_default: bool
    user_id: str
    created_at: Optional[datetime]


# ---------------------------------------------------------
# CATALOG
# ---------------------------------------------------------
class CreateCategoryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = None


class CategoryRead(CamelModel):
    id: str
    name: str
    description: Optional[str]
    icon: Optional[str]
    is_active: bool


class CreateFoodItemRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    restaurant_id: Optional[str] = None
    restaurant_name: Optional[str] = None
    rating: Decimal = Field(Decimal("0"), ge=0, le=5)
    calories: Optional[int] = Field(None, ge=0)
    is_available: bool = True
    is_featured: bool = False
    is_popular: bool = False
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_spicy: bool = False


class UpdateFoodItemRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    restaurant_name: Optional[str] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5)
    calories: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_popular: Optional[bool] = None
    is_vegetarian: Optional[bool] = None
    is_vegan: Optional[bool] = None
    is_spicy: Optional[bool] = None


class FoodItemRead(CamelModel):
    id: str
    name: str
    description: str
    price: float
    image: Optional[str]
    category: Optional[str]
    restaurant_id: Optional[str]
    restaurant_name: Optional[str]
    rating: float
    calories: Optional[int]
    is_available: bool
    is_featured: bool
    is_popular: bool
    is_vegetarian: bool
    is_vegan: bool
    is_spicy: bool
    created_at: Optional[datetime]


class FoodItemPage(CamelModel):
    items: List[FoodItemRead]
    total: int
    page: int
    total_pages: int


# ---------------------------------------------------------
# BOOKINGS
# ---------------------------------------------------------
class BookingServiceRequest(CamelModel):
    service_id: str = Field(..., min_length=1, max_length=100)
    service_name: str = Field(..., min_length=1, max_length=200)


class CreateBookingRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    date: date
    time: str = Field(..., pattern=TIME_PATTERN)
    services: List[BookingServiceRequest]
    notes: Optional[str] = None


class UpdateBookingRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    services: Optional[List[BookingServiceRequest]] = None
    notes: Optional[str] = None
    status: Optional[BookingStatus] = None


class UpdateBookingStatusRequest(CamelModel):
    status: BookingStatus


class BookingServiceRead(CamelModel):
    id: str
    booking_id: str
    service_id: str
    service_name: str
    created_at: Optional[datetime]


class BookingRead(CamelModel):
    id: str
    name: str
    phone: str
    date: date
    time: str
    status: BookingStatus
    notes: Optional[str]
    services: List[BookingServiceRead]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class BookingPage(CamelModel):
    bookings: List[BookingRead]
    total: int
    page: int
    total_pages: int
