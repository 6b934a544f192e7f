"""Sample data for local development: python -m homemadefood.infrastructure.seed"""
import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from homemadefood.domain.models import Category, FoodItem, User, UserRole
from homemadefood.infrastructure.database import SessionLocal, init_db

logger = logging.getLogger(__name__)

RESTAURANT_ID = "7c0d3f0e-5a1b-4c7e-9a51-0f1e2d3c4b5a"
RESTAURANT_NAME = "Ammi's Kitchen"

CATEGORIES = [
    ("Breakfast", "Parathas, halwa puri and morning favourites", "free_breakfast"),
    ("Traditional", "Home-style curries and rice", "restaurant"),
    ("BBQ", "Grilled and tandoor dishes", "outdoor_grill"),
    ("Healthy", "Light and nutritious meals", "eco"),
    ("Desserts", "Sweets and mithai", "cake"),
]

USERS = [
    ("Admin", "admin@homemadefood.app", "+923001234567", UserRole.ADMIN),
    ("Ayesha Khan", "ayesha@example.com", "+923331112233", UserRole.CUSTOMER),
]

# name, description, price, category, rating, calories, flags
FOOD_ITEMS = [
    ("Aloo Paratha", "Flaky flatbread stuffed with spiced potatoes", "4.50", "Breakfast", "4.6", 420,
     {"is_vegetarian": True, "is_featured": True}),
    ("Halwa Puri", "Semolina halwa with fried puris and chickpeas", "6.00", "Breakfast", "4.4", 780,
     {"is_vegetarian": True, "is_popular": True}),
    ("Chicken Biryani", "Layered basmati rice with spiced chicken", "12.50", "Traditional", "4.8", 650,
     {"is_spicy": True, "is_popular": True}),
    ("Daal Chawal", "Yellow lentils with steamed rice", "7.00", "Traditional", "4.2", 480,
     {"is_vegetarian": True, "is_vegan": True}),
    ("Seekh Kebab", "Minced beef skewers from the tandoor", "14.00", "BBQ", "4.5", 520,
     {"is_spicy": True, "is_featured": True}),
    ("Chana Chaat", "Chickpea salad with tamarind and mint", "5.50", "Healthy", "4.1", 310,
     {"is_vegetarian": True, "is_vegan": True}),
    ("Gulab Jamun", "Milk dumplings in rose syrup", "4.00", "Desserts", "4.7", 350,
     {"is_vegetarian": True}),
]


def seed(session: Session) -> None:
    existing_categories = set(session.scalars(select(Category.name)).all())
    for name, description, icon in CATEGORIES:
        if name not in existing_categories:
            session.add(Category(name=name, description=description, icon=icon))

    existing_emails = set(session.scalars(select(User.email)).all())
    for name, email, phone, role in USERS:
        if email not in existing_emails:
            session.add(User(name=name, email=email, phone=phone, role=role.value))

    existing_items = set(session.scalars(select(FoodItem.name)).all())
    for name, description, price, category, rating, calories, flags in FOOD_ITEMS:
        if name in existing_items:
            continue
        session.add(FoodItem(
            name=name,
            description=description,
            price=Decimal(price),
            category=category,
            restaurant_id=RESTAURANT_ID,
            restaurant_name=RESTAURANT_NAME,
            rating=Decimal(rating),
            calories=calories,
            **flags,
        ))

    session.commit()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if not init_db():
        raise SystemExit(1)
    with SessionLocal() as session:
        seed(session)
    logger.info("✅ Sample data inserted.")
