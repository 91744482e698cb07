"""
Application Use Cases

Contains all use cases that orchestrate business logic.
"""

from .crm_use_cases import (
    CustomerManagementUseCase,
    FollowupManagementUseCase,
    MealCatalogUseCase,
)
from .dashboard_use_case import DashboardUseCase
from .order_creation_use_case import OrderCreationUseCase
from .order_management_use_case import OrderManagementUseCase

__all__ = [
    "CustomerManagementUseCase",
    "DashboardUseCase",
    "FollowupManagementUseCase",
    "MealCatalogUseCase",
    "OrderCreationUseCase",
    "OrderManagementUseCase",
]
