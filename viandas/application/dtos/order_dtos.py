"""
Order DTOs

Data Transfer Objects for order-related operations.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from viandas.domain.entities.order_entity import Order
from viandas.domain.services.followup_scheduler import FollowupSchedulingResult


@dataclass
class LineItemRequest:
    """One meal row of the new-order form"""

    meal_id: str
    qty: Any = 1


@dataclass
class CreateOrderRequest:
    """Request to create an order"""

    customer_name: str
    order_type: str = "single"
    phone: str = ""
    delivery: bool = False
    manual_subtotal: Any = None  # only read for 'other' orders
    other_label: Optional[str] = None
    notes: str = ""
    status: str = "pending"
    customer_id: Optional[str] = None
    channel: Optional[str] = None
    items: List[LineItemRequest] = field(default_factory=list)


@dataclass
class OrderCreationResponse:
    """Response from order creation

    ``order_saved`` is True whenever the order row exists, even if a later
    step (line items) failed and ``success`` is False.
    """

    success: bool
    order: Optional[Order] = None
    order_saved: bool = False
    followup: Optional[FollowupSchedulingResult] = None
    error_message: Optional[str] = None
    error_field: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class OrderListRequest:
    """Filters of the orders screen"""

    search: str = ""
    status: Optional[str] = None  # None or "all" keeps every status
    period: str = "today"  # today, week, month or all


@dataclass
class OrderListResponse:
    """Response with list of orders"""

    success: bool
    orders: List[Order] = field(default_factory=list)
    total_count: int = 0
    error_message: Optional[str] = None


@dataclass
class OrderOperationResponse:
    """Response from a status change or deletion"""

    success: bool
    order: Optional[Order] = None
    error_message: Optional[str] = None
