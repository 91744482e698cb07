"""
Domain repository interfaces

Contains abstract repository interfaces that define contracts for data access.
"""

from .customer_repository import CustomerRepository
from .followup_repository import FollowupRepository
from .meal_repository import MealRepository
from .order_repository import OrderRepository
from .profile_repository import ProfileRepository

__all__ = [
    "CustomerRepository",
    "FollowupRepository",
    "MealRepository",
    "OrderRepository",
    "ProfileRepository",
]
