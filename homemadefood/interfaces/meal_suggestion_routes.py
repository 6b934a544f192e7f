from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from homemadefood.application.meal_suggestion_service import MealSuggestionService
from homemadefood.domain.meals import MealPreferences
from homemadefood.interfaces.dependencies import get_meal_suggestion_service
from homemadefood.interfaces.responses import envelope

router = APIRouter(prefix="/meal-suggestions", tags=["meal-suggestions"])


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    """'vegetarian, no-spicy' -> ['vegetarian', 'no-spicy']"""
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()] or None


@router.get("/today")
async def today_suggestion(
    dietary_restrictions: Optional[str] = Query(None, alias="dietaryRestrictions"),
    favorite_categories: Optional[str] = Query(None, alias="favoriteCategories"),
    max_price: Optional[float] = Query(None, alias="maxPrice", gt=0),
    service: MealSuggestionService = Depends(get_meal_suggestion_service),
):
    preferences = MealPreferences(
        dietary_restrictions=split_csv(dietary_restrictions),
        favorite_categories=split_csv(favorite_categories),
        max_price=max_price,
    )
    suggestion = await service.suggest(preferences)
    return envelope(suggestion, "Meal suggestion retrieved successfully")


@router.post("/suggest")
async def suggest_meal(
    preferences: Optional[MealPreferences] = None,
    service: MealSuggestionService = Depends(get_meal_suggestion_service),
):
    suggestion = await service.suggest(preferences)
    return envelope(suggestion, "Meal suggestion retrieved successfully")
