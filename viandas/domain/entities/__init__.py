"""
Domain entities package
"""

from .customer_entity import Customer
from .followup_entity import FollowupTask
from .meal_entity import Meal
from .order_entity import Order, OrderLineItem
from .profile_entity import Profile, Role

__all__ = [
    "Customer",
    "FollowupTask",
    "Meal",
    "Order",
    "OrderLineItem",
    "Profile",
    "Role",
]
