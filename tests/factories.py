from decimal import Decimal

from homemadefood.domain.models import FoodItem, User, UserRole
from homemadefood.domain.schemas import CreateOrderRequest


def make_user(session, name="Ayesha", email="ayesha@example.com", role=UserRole.CUSTOMER) -> User:
    user = User(name=name, email=email, role=role.value)
    session.add(user)
    session.commit()
    return user


def make_food_item(session, name, price="10.00", rating="4.0", category="Traditional", **flags) -> FoodItem:
    item = FoodItem(
        name=name,
        description=f"{name} made at home",
        price=Decimal(price),
        rating=Decimal(rating),
        category=category,
        restaurant_id="r-1",
        restaurant_name="Ammi's Kitchen",
        **flags,
    )
    session.add(item)
    session.commit()
    return item


def order_payload(**overrides) -> dict:
    """Wire-format order body: 2 x 12.50 biryani + 3.00 delivery + 2.00 tax."""
    payload = {
        "restaurantId": "r-1",
        "restaurantName": "Ammi's Kitchen",
        "items": [
            {"foodItemId": "f-1", "name": "Chicken Biryani", "price": "12.50", "quantity": 2},
        ],
        "totalAmount": "25.00",
        "deliveryFee": "3.00",
        "tax": "2.00",
        "grandTotal": "30.00",
        "deliveryAddress": {"title": "Home", "address": "House 12, Street 4, F-7", "latitude": 33.72, "longitude": 73.05},
        "paymentMethod": "cash",
    }
    payload.update(overrides)
    return payload


def order_request(**overrides) -> CreateOrderRequest:
    return CreateOrderRequest.model_validate(order_payload(**overrides))


def auth(user: User) -> dict:
    return {"X-User-Id": user.id, "X-User-Role": user.role}
