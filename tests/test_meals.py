from datetime import datetime

import pytest
import pytz

from homemadefood.domain.meals import (
    MealCandidate,
    MealContext,
    MealPreferences,
    current_meal_context,
    filter_candidates,
    meal_time_for_hour,
    personalized_reason,
    pick_by_heuristic,
)


def candidate(name, **fields) -> MealCandidate:
    return MealCandidate(id=name.lower(), name=name, **fields)


@pytest.mark.parametrize("hour, meal_time", [
    (0, "breakfast"), (9, "breakfast"), (10, "lunch"), (14, "lunch"), (15, "dinner"), (23, "dinner"),
])
def test_meal_time_for_hour(hour, meal_time):
    assert meal_time_for_hour(hour) == meal_time


def test_context_uses_configured_timezone():
    # 05:00 UTC is 10:00 in Karachi
    now = datetime(2025, 3, 10, 5, 0, tzinfo=pytz.utc).astimezone(pytz.timezone("Asia/Karachi"))

    context = current_meal_context("Asia/Karachi", now)

    assert context.meal_time == "lunch"
    assert context.day_of_week == "Monday"


def test_filters_apply_in_order():
    menu = [
        candidate("Biryani", price=12.5, category="Traditional", is_spicy=True),
        candidate("Daal", price=7.0, category="Traditional", is_vegetarian=True, is_vegan=True),
        candidate("Kheer", price=4.0, category="Desserts", is_vegetarian=True),
    ]
    prefs = MealPreferences(max_price=10, favorite_categories=["Traditional"], dietary_restrictions=["no-spicy"])

    assert [c.name for c in filter_candidates(menu, prefs)] == ["Daal"]


def test_filters_fall_back_to_everything():
    menu = [candidate("Biryani", price=12.5)]

    assert filter_candidates(menu, MealPreferences(dietary_restrictions=["vegan"])) == menu


def test_heuristic_popular_when_no_featured():
    menu = [
        candidate("Top Rated", rating=4.9),
        candidate("Popular", rating=4.2, is_popular=True),
    ]
    assert pick_by_heuristic(menu).name == "Popular"


def test_heuristic_ignores_low_rated_featured():
    menu = [
        candidate("Featured", rating=3.5, is_featured=True),
        candidate("Best", rating=4.6),
        candidate("Also Best", rating=4.6),
    ]
    # ties broken by name
    assert pick_by_heuristic(menu).name == "Also Best"


def test_heuristic_skips_external_featured():
    menu = [
        candidate("Recipe", rating=4.5, is_featured=True, source="spoonacular"),
        candidate("Home Dish", rating=4.1, is_featured=True),
    ]
    assert pick_by_heuristic(menu).name == "Home Dish"


def test_reason_changes_by_day_not_by_call():
    dish = candidate("Kebab", rating=4.7, price=14.0, is_featured=True)
    monday = MealContext(day_of_week="Monday", meal_time="dinner", day_ordinal=739320)
    tuesday = MealContext(day_of_week="Tuesday", meal_time="dinner", day_ordinal=739321)

    assert personalized_reason(dish, monday) == personalized_reason(dish, monday)
    assert personalized_reason(dish, monday) != personalized_reason(dish, tuesday)
