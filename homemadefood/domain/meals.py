from datetime import datetime
from typing import List, Optional

import pytz
from pydantic import Field

from homemadefood.domain.schemas import CamelModel

WEEKEND_DAYS = ("Saturday", "Sunday")
FEATURED_MIN_RATING = 4.0


class MealPreferences(CamelModel):
    dietary_restrictions: Optional[List[str]] = None
    favorite_categories: Optional[List[str]] = None
    max_price: Optional[float] = Field(None, gt=0)


class MealCandidate(CamelModel):
    """A dish the suggestion can pick: a catalog item or an external recipe."""
    id: str
    name: str
    description: str = ""
    category: str = "General"
    price: float = 0.0
    rating: float = 0.0
    image: Optional[str] = None
    restaurant_name: Optional[str] = None
    calories: Optional[int] = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_spicy: bool = False
    is_featured: bool = False
    is_popular: bool = False
    source: str = "internal"

    @classmethod
    def from_food_item(cls, item) -> "MealCandidate":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description or "",
            category=item.category or "General",
            price=float(item.price),
            rating=float(item.rating or 0),
            image=item.image,
            restaurant_name=item.restaurant_name,
            calories=item.calories,
            is_vegetarian=item.is_vegetarian,
            is_vegan=item.is_vegan,
            is_spicy=item.is_spicy,
            is_featured=item.is_featured,
            is_popular=item.is_popular,
        )


class SuggestedMeal(CamelModel):
    id: str
    name: str
    description: str
    category: str
    price: float
    restaurant_name: str
    image: str
    rating: float


class NutritionalInfo(CamelModel):
    calories: Optional[int] = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_spicy: bool = False


class MealSuggestion(CamelModel):
    meal: SuggestedMeal
    reason: str
    nutritional_info: NutritionalInfo
    provider: str


class MealContext(CamelModel):
    day_of_week: str
    meal_time: str
    day_ordinal: int


PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x300?text=Food+Image"


def meal_time_for_hour(hour: int) -> str:
    if hour < 10:
        return "breakfast"
    if hour < 15:
        return "lunch"
    return "dinner"


def current_meal_context(timezone: str, now: Optional[datetime] = None) -> MealContext:
    now = now or datetime.now(pytz.timezone(timezone))
    return MealContext(
        day_of_week=now.strftime("%A"),
        meal_time=meal_time_for_hour(now.hour),
        day_ordinal=now.toordinal(),
    )


def filter_candidates(candidates: List[MealCandidate], prefs: Optional[MealPreferences]) -> List[MealCandidate]:
    """Apply price, category and dietary filters. Too strict -> all candidates."""
    if not prefs:
        return list(candidates)

    filtered = list(candidates)
    if prefs.max_price:
        filtered = [c for c in filtered if c.price <= prefs.max_price]
    if prefs.favorite_categories:
        filtered = [c for c in filtered if c.category in prefs.favorite_categories]
    restrictions = prefs.dietary_restrictions or []
    if "vegetarian" in restrictions:
        filtered = [c for c in filtered if c.is_vegetarian]
    if "vegan" in restrictions:
        filtered = [c for c in filtered if c.is_vegan]
    if "no-spicy" in restrictions:
        filtered = [c for c in filtered if not c.is_spicy]

    return filtered or list(candidates)


def pick_by_heuristic(candidates: List[MealCandidate]) -> MealCandidate:
    """Featured, then popular (both rated 4.0+), then the best rated. Deterministic."""
    for flag in ("is_featured", "is_popular"):
        for candidate in candidates:
            if candidate.source == "internal" and getattr(candidate, flag) and candidate.rating >= FEATURED_MIN_RATING:
                return candidate
    return sorted(candidates, key=lambda c: (-c.rating, c.name))[0]


def personalized_reason(candidate: MealCandidate, context: MealContext) -> str:
    day, meal_time = context.day_of_week, context.meal_time
    reasons = []

    if day in WEEKEND_DAYS:
        reasons.append(f"Perfect for a relaxing {day} {meal_time}!")
        reasons.append(f"A special treat for your {day} {meal_time}!")
    else:
        reasons.append(f"Great {meal_time} choice to fuel your {day}!")
        reasons.append(f"Perfect {meal_time} pick for a productive {day}!")

    if candidate.rating >= 4.5:
        reasons.append(f"Highly rated at {candidate.rating:.1f}⭐ - a crowd favorite!")
    elif candidate.rating >= 4.0:
        reasons.append(f"Rated {candidate.rating:.1f}⭐ - consistently delicious!")

    category = candidate.category.lower()
    if "healthy" in category or candidate.is_vegetarian:
        reasons.append(f"Nutritious and satisfying - perfect for a healthy {meal_time}!")
    if "comfort" in category:
        reasons.append(f"Comfort food at its finest for your {meal_time}!")
    if meal_time == "breakfast" and ("breakfast" in category or "egg" in category):
        reasons.append("Start your day right with this delicious breakfast!")
    if meal_time == "dinner" and "dinner" in category:
        reasons.append("A hearty dinner option to end your day on a high note!")

    if candidate.is_featured:
        reasons.append("Featured favorite - specially selected for today!")
    if candidate.is_popular:
        reasons.append("Popular choice - loved by many customers!")

    if candidate.price < 10:
        reasons.append(f"Great value for an amazing {meal_time}!")
    elif candidate.price > 20:
        reasons.append("Premium quality worth every penny!")

    # Same reason all day, a different one tomorrow
    return reasons[context.day_ordinal % len(reasons)]


def to_suggestion(candidate: MealCandidate, reason: str, provider: str) -> MealSuggestion:
    return MealSuggestion(
        meal=SuggestedMeal(
            id=candidate.id,
            name=candidate.name,
            description=candidate.description or "Delicious meal recommendation",
            category=candidate.category,
            price=candidate.price,
            restaurant_name=candidate.restaurant_name or "External Recommendation",
            image=candidate.image or PLACEHOLDER_IMAGE,
            rating=candidate.rating,
        ),
        reason=reason,
        nutritional_info=NutritionalInfo(
            calories=candidate.calories,
            is_vegetarian=candidate.is_vegetarian,
            is_vegan=candidate.is_vegan,
            is_spicy=candidate.is_spicy,
        ),
        provider=provider,
    )
