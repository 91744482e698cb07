# pylint: disable=too-many-instance-attributes
"""
Order domain entities

An order and the line items it owns.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from viandas.domain.entities.meal_entity import Meal
from viandas.domain.value_objects.order_type import OrderStatus, OrderType


@dataclass
class OrderLineItem:
    """A quantity of one meal inside an order"""

    id: Optional[str]
    order_id: Optional[str]
    meal_id: str
    qty: int
    meal: Optional[Meal] = None

    @property
    def meal_name(self) -> Optional[str]:
        """Name of the resolved meal, None when the meal no longer exists"""
        return self.meal.name if self.meal else None


@dataclass
class Order:
    """
    Order domain entity

    ``customer_id`` is a soft reference: an order can carry only a free-text
    name and phone.
    """

    id: Optional[str]
    customer_name: str
    order_type: OrderType
    subtotal: float
    delivery_fee: float
    total: float
    created_by: Optional[str]
    phone: str = ""
    customer_id: Optional[str] = None
    other_label: Optional[str] = None
    delivery: bool = False
    status: OrderStatus = OrderStatus.PENDING
    notes: str = ""
    item_count: int = 0
    order_date: Optional[date] = None
    created_at: Optional[datetime] = None
    channel: Optional[str] = None
    items: List[OrderLineItem] = field(default_factory=list)

    @property
    def is_pack(self) -> bool:
        return self.order_type.is_pack

    def matches(self, query: str) -> bool:
        """Case-insensitive customer name match or phone substring match"""
        term = query.strip().lower()
        return term in self.customer_name.lower() or (
            bool(self.phone) and term in self.phone
        )

    def __str__(self) -> str:
        return (
            f"Order(id={self.id}, customer={self.customer_name}, "
            f"type={self.order_type.value}, total={self.total})"
        )
