"""
Domain value objects package

Contains immutable value objects that represent concepts in the business domain.
"""

from .customer_name import CustomerName
from .customer_status import CustomerStatus
from .followup_type import FollowupStatus, FollowupType
from .order_type import OrderStatus, OrderType
from .period import Period

__all__ = [
    "CustomerName",
    "CustomerStatus",
    "FollowupStatus",
    "FollowupType",
    "OrderStatus",
    "OrderType",
    "Period",
]
