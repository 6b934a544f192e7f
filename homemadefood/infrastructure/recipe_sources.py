import logging
import re
from typing import List, Optional

import httpx

from homemadefood.core.config import Settings
from homemadefood.core.exceptions import ExternalProviderError
from homemadefood.domain.meals import PLACEHOLDER_IMAGE, MealCandidate, MealPreferences
from homemadefood.interfaces.IRecipeSource import IRecipeSource

logger = logging.getLogger(__name__)

DEFAULT_RECIPE_PRICE = 12.0
HTML_TAG = re.compile(r"<[^>]*>")


def _diet(preferences: Optional[MealPreferences]) -> Optional[str]:
    restrictions = (preferences.dietary_restrictions if preferences else None) or []
    if "vegan" in restrictions:
        return "vegan"
    if "vegetarian" in restrictions:
        return "vegetarian"
    return None


def _estimated_price(preferences: Optional[MealPreferences]) -> float:
    if preferences and preferences.max_price:
        return round(preferences.max_price * 0.8, 2)
    return DEFAULT_RECIPE_PRICE


def _summary(text: Optional[str]) -> str:
    if not text:
        return "Delicious recipe"
    return HTML_TAG.sub("", text)[:200]


class SpoonacularSource(IRecipeSource):
    name = "spoonacular"
    API_URL = "https://api.spoonacular.com/recipes/complexSearch"

    def __init__(self, api_key: str, timeout: float, client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self.timeout = timeout
        self.client = client

    async def search(self, preferences: Optional[MealPreferences], meal_time: str) -> List[MealCandidate]:
        params = {
            "apiKey": self.api_key,
            "type": meal_time,
            "number": 10,
            "addRecipeInformation": "true",
            "sort": "popularity",
        }
        diet = _diet(preferences)
        if diet:
            params["diet"] = diet

        try:
            client = self.client or httpx.AsyncClient(timeout=self.timeout)
            try:
                r = await client.get(self.API_URL, params=params)
                r.raise_for_status()
                results = r.json().get("results") or []
            finally:
                if self.client is None:
                    await client.aclose()
        except Exception as e:
            raise ExternalProviderError(self.name, str(e)) from e

        return [self._to_candidate(recipe, meal_time, preferences) for recipe in results]

    def _to_candidate(self, recipe: dict, meal_time: str, preferences: Optional[MealPreferences]) -> MealCandidate:
        price_per_serving = recipe.get("pricePerServing")
        score = recipe.get("spoonacularScore")
        calories = None
        for nutrient in (recipe.get("nutrition") or {}).get("nutrients") or []:
            if nutrient.get("name") == "Calories":
                calories = int(round(nutrient.get("amount") or 0))
                break

        return MealCandidate(
            id=f"spoonacular-{recipe.get('id')}",
            name=recipe.get("title") or "Recipe",
            description=_summary(recipe.get("summary")),
            category=meal_time.capitalize(),
            price=price_per_serving / 100 if price_per_serving else _estimated_price(preferences),
            rating=score / 20 if score else 4.2,
            image=recipe.get("image") or PLACEHOLDER_IMAGE,
            restaurant_name="Recommended Recipe",
            calories=calories,
            is_vegetarian=bool(recipe.get("vegetarian")),
            is_vegan=bool(recipe.get("vegan")),
            is_spicy=bool(recipe.get("spicy")),
            source=self.name,
        )


class EdamamSource(IRecipeSource):
    name = "edamam"
    API_URL = "https://api.edamam.com/api/recipes/v2"

    def __init__(self, app_id: str, app_key: str, timeout: float, client: Optional[httpx.AsyncClient] = None):
        self.app_id = app_id
        self.app_key = app_key
        self.timeout = timeout
        self.client = client

    async def search(self, preferences: Optional[MealPreferences], meal_time: str) -> List[MealCandidate]:
        params = {
            "type": "public",
            "q": meal_time,
            "app_id": self.app_id,
            "app_key": self.app_key,
        }
        diet = _diet(preferences)
        if diet:
            params["health"] = diet

        try:
            client = self.client or httpx.AsyncClient(timeout=self.timeout)
            try:
                r = await client.get(self.API_URL, params=params)
                r.raise_for_status()
                hits = r.json().get("hits") or []
            finally:
                if self.client is None:
                    await client.aclose()
        except Exception as e:
            raise ExternalProviderError(self.name, str(e)) from e

        return [self._to_candidate(hit.get("recipe") or {}, meal_time, preferences) for hit in hits[:10]]

    def _to_candidate(self, recipe: dict, meal_time: str, preferences: Optional[MealPreferences]) -> MealCandidate:
        health_labels = recipe.get("healthLabels") or []
        diet_labels = recipe.get("dietLabels") or []
        calories = recipe.get("calories")

        return MealCandidate(
            id=f"edamam-{(recipe.get('uri') or '').split('_')[-1]}",
            name=recipe.get("label") or "Recipe",
            description=_summary(recipe.get("summary")),
            category=meal_time.capitalize(),
            price=_estimated_price(preferences),
            rating=4.3,
            image=recipe.get("image") or PLACEHOLDER_IMAGE,
            restaurant_name="Recommended Recipe",
            calories=int(round(calories)) if calories else None,
            is_vegetarian="Vegetarian" in health_labels,
            is_vegan="Vegan" in health_labels,
            is_spicy=any("spicy" in label.lower() for label in diet_labels),
            source=self.name,
        )


def build_recipe_sources(settings: Settings) -> List[IRecipeSource]:
    """Spoonacular first, Edamam second; each only when its keys are set."""
    timeout = settings.RECIPE_SOURCE_TIMEOUT_SECONDS
    sources: List[IRecipeSource] = []
    if settings.SPOONACULAR_API_KEY:
        sources.append(SpoonacularSource(settings.SPOONACULAR_API_KEY, timeout))
    if settings.EDAMAM_APP_ID and settings.EDAMAM_APP_KEY:
        sources.append(EdamamSource(settings.EDAMAM_APP_ID, settings.EDAMAM_APP_KEY, timeout))
    if sources:
        logger.info(f"✅ Recipe sources: {[s.name for s in sources]}")
    return sources
