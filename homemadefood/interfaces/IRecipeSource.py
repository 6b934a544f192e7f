from abc import ABC, abstractmethod
from typing import List, Optional

from homemadefood.domain.meals import MealCandidate, MealPreferences

class IRecipeSource(ABC):
    name: str = "recipes"

    @abstractmethod
    async def search(self, preferences: Optional[MealPreferences], meal_time: str) -> List[MealCandidate]:
        pass
