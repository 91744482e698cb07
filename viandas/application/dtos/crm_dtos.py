"""
CRM DTOs

Responses for the customer, meal catalog, follow-up and dashboard screens.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.meal_entity import Meal
from viandas.domain.services.dashboard_aggregator import DashboardStats


@dataclass
class CustomerListResponse:
    success: bool
    customers: List[Customer] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class CustomerResponse:
    success: bool
    customer: Optional[Customer] = None
    error_message: Optional[str] = None
    error_field: Optional[str] = None


@dataclass
class MealListResponse:
    success: bool
    meals: List[Meal] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class MealResponse:
    success: bool
    meal: Optional[Meal] = None
    error_message: Optional[str] = None
    error_field: Optional[str] = None


@dataclass
class FollowupListResponse:
    success: bool
    followups: List[FollowupTask] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class FollowupResponse:
    """Result of marking a follow-up as sent

    ``changed`` is False when the task was already sent.
    """

    success: bool
    followup: Optional[FollowupTask] = None
    changed: bool = False
    error_message: Optional[str] = None


@dataclass
class DashboardResponse:
    success: bool
    stats: Optional[DashboardStats] = None
    error_message: Optional[str] = None
