from abc import ABC, abstractmethod
from typing import List, Optional

from homemadefood.domain.meals import MealCandidate, MealPreferences, MealSuggestion

class IMealSuggestionProvider(ABC):
    """One external AI backend. Any failure is raised as ExternalProviderError."""

    name: str = "provider"

    @abstractmethod
    async def suggest(self, candidates: List[MealCandidate], preferences: Optional[MealPreferences]) -> MealSuggestion:
        pass
