"""
Meal repository interface
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.meal_entity import Meal


class MealRepository(ABC):
    """Repository interface for the meal catalog"""

    @abstractmethod
    async def find_all(self, name_contains: Optional[str] = None) -> List[Meal]:
        """List meals sorted by name, optionally filtered by a name fragment"""
        pass

    @abstractmethod
    async def find_by_id(self, meal_id: str) -> Optional[Meal]:
        """Get a meal by ID"""
        pass

    @abstractmethod
    async def create(self, meal: Meal) -> Meal:
        """Insert a meal and return it with its ID"""
        pass

    @abstractmethod
    async def delete(self, meal_id: str) -> bool:
        """Delete a meal; line items referencing it are left untouched"""
        pass
