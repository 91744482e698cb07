# pylint: disable=too-many-instance-attributes
"""
Customer domain entity

Represents a customer of the meal-delivery business.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from viandas.domain.value_objects.customer_status import CustomerStatus


@dataclass
class Customer:
    """
    Customer domain entity

    ``status``, ``total_spent``, ``orders_count`` and ``last_order_at`` are
    derived from the customer's orders and maintained as orders are created.
    """

    id: Optional[str]
    full_name: str
    phone: str = ""
    status: CustomerStatus = CustomerStatus.INACTIVE
    total_spent: float = 0.0
    orders_count: int = 0
    created_at: Optional[datetime] = None
    last_order_at: Optional[datetime] = None
    notes: Optional[str] = None

    def has_ordered(self) -> bool:
        """True once the customer has at least one order"""
        return self.orders_count > 0

    def is_repeat_buyer(self) -> bool:
        """True when the customer has ordered more than once"""
        return self.orders_count > 1

    def record_order(self, total: float, ordered_at: datetime) -> None:
        """Fold a newly created order into the running totals"""
        self.orders_count += 1
        self.total_spent += total
        self.last_order_at = ordered_at

    def matches(self, query: str) -> bool:
        """Case-insensitive name match or phone substring match"""
        term = query.strip().lower()
        return term in self.full_name.lower() or term in (self.phone or "")

    def __str__(self) -> str:
        return f"Customer(id={self.id}, name={self.full_name}, status={self.status.value})"
