"""
SQLAlchemy implementation of MealRepository
"""

from typing import List, Optional

from sqlalchemy import select

from viandas.domain.entities.meal_entity import Meal as DomainMeal
from viandas.domain.repositories.meal_repository import MealRepository
from viandas.infrastructure.database.models import Meal as SQLMeal
from viandas.infrastructure.repositories.session_handler import SQLAlchemyRepository


class SQLAlchemyMealRepository(SQLAlchemyRepository, MealRepository):
    """SQLAlchemy implementation of the meal catalog"""

    async def find_all(self, name_contains: Optional[str] = None) -> List[DomainMeal]:
        """List meals sorted by name"""
        with self._session("meals.list") as session:
            query = select(SQLMeal).order_by(SQLMeal.name)
            if name_contains:
                query = query.where(SQLMeal.name.ilike(f"%{name_contains.strip()}%"))
            return [self._map_to_domain(row) for row in session.scalars(query)]

    async def find_by_id(self, meal_id: str) -> Optional[DomainMeal]:
        with self._session("meals.get") as session:
            sql_meal = session.get(SQLMeal, meal_id)
            return self._map_to_domain(sql_meal) if sql_meal else None

    async def create(self, meal: DomainMeal) -> DomainMeal:
        """Insert a meal"""
        with self._session("meals.insert") as session:
            sql_meal = SQLMeal(name=meal.name)
            if meal.created_at is not None:
                sql_meal.created_at = meal.created_at
            session.add(sql_meal)
            session.flush()
            session.refresh(sql_meal)
            self._logger.info("🍱 MEAL CREATED: %s (%s)", sql_meal.name, sql_meal.id)
            return self._map_to_domain(sql_meal)

    async def delete(self, meal_id: str) -> bool:
        with self._session("meals.delete") as session:
            sql_meal = session.get(SQLMeal, meal_id)
            if not sql_meal:
                return False
            session.delete(sql_meal)
            self._logger.info("🗑️ MEAL DELETED: %s", meal_id)
            return True

    @staticmethod
    def _map_to_domain(sql_meal: SQLMeal) -> DomainMeal:
        return DomainMeal(id=sql_meal.id, name=sql_meal.name, created_at=sql_meal.created_at)
