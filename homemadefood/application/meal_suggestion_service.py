import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from homemadefood.core.config import settings
from homemadefood.core.exceptions import ExternalProviderError, NotFoundError
from homemadefood.domain.meals import (
    MealCandidate,
    MealPreferences,
    MealSuggestion,
    current_meal_context,
    filter_candidates,
    personalized_reason,
    pick_by_heuristic,
    to_suggestion,
)
from homemadefood.interfaces.ICatalogRepository import ICatalogRepository
from homemadefood.interfaces.IMealSuggestionProvider import IMealSuggestionProvider
from homemadefood.interfaces.IRecipeSource import IRecipeSource

logger = logging.getLogger(__name__)

MAX_EXTERNAL_CANDIDATES = 10
# Later recipe sources are only asked while the earlier ones returned fewer than this
ENOUGH_EXTERNAL_CANDIDATES = 5


class MealSuggestionService:
    def __init__(self, catalog_repo: ICatalogRepository,
                 providers: Optional[List[IMealSuggestionProvider]] = None,
                 recipe_sources: Optional[List[IRecipeSource]] = None,
                 provider_timeout: Optional[float] = None,
                 candidate_limit: Optional[int] = None,
                 timezone: Optional[str] = None):
        self.catalog_repo = catalog_repo
        self.providers = providers or []
        self.recipe_sources = recipe_sources or []
        self.provider_timeout = provider_timeout or settings.AI_PROVIDER_TIMEOUT_SECONDS
        self.candidate_limit = candidate_limit or settings.MEAL_CANDIDATE_LIMIT
        self.timezone = timezone or settings.TIMEZONE

    async def suggest(self, preferences: Optional[MealPreferences] = None,
                      now: Optional[datetime] = None) -> MealSuggestion:
        context = current_meal_context(self.timezone, now)

        candidates = await self._load_candidates(preferences, context.meal_time)
        if not candidates:
            raise NotFoundError("No food items available")

        filtered = filter_candidates(candidates, preferences)
        logger.info(f"🍽️ {len(filtered)}/{len(candidates)} candidates for {context.day_of_week} {context.meal_time}")

        for provider in self.providers:
            try:
                suggestion = await asyncio.wait_for(
                    provider.suggest(filtered, preferences), timeout=self.provider_timeout
                )
                logger.info(f"🤖 Suggestion from {provider.name}: {suggestion.meal.name}")
                return suggestion
            except asyncio.TimeoutError:
                logger.warning(f"⚠️ {provider.name} timed out after {self.provider_timeout}s, trying next provider")
            except ExternalProviderError as e:
                logger.warning(f"⚠️ {e.message}, trying next provider")
            except Exception as e:
                logger.error(f"❌ {provider.name} failed unexpectedly: {e!r}, trying next provider")

        selected = pick_by_heuristic(filtered)
        logger.info(f"🧠 Local suggestion: {selected.name}")
        return to_suggestion(selected, personalized_reason(selected, context), "local")

    async def _load_candidates(self, preferences: Optional[MealPreferences], meal_time: str) -> List[MealCandidate]:
        items = await run_in_threadpool(self.catalog_repo.list_available_by_rating, self.candidate_limit)
        candidates = [MealCandidate.from_food_item(item) for item in items]
        return candidates + await self._external_candidates(preferences, meal_time)

    async def _external_candidates(self, preferences: Optional[MealPreferences], meal_time: str) -> List[MealCandidate]:
        found: List[MealCandidate] = []
        for index, source in enumerate(self.recipe_sources):
            if index > 0 and len(found) >= ENOUGH_EXTERNAL_CANDIDATES:
                break
            try:
                found.extend(await source.search(preferences, meal_time))
            except ExternalProviderError as e:
                logger.warning(f"⚠️ Recipe search failed: {e.message}")
        return found[:MAX_EXTERNAL_CANDIDATES]
