"""
Order repository interface

Defines the contract for order data access operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order_entity import Order, OrderLineItem
from ..value_objects.order_type import OrderStatus


class OrderRepository(ABC):
    """Repository interface for order operations"""

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """Insert the order row only and return it with its ID"""
        pass

    @abstractmethod
    async def add_items(
        self, order_id: str, items: List[OrderLineItem]
    ) -> List[OrderLineItem]:
        """Bulk insert line items for an order"""
        pass

    @abstractmethod
    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID, with its line items and their meals"""
        pass

    @abstractmethod
    async def get_all_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        """Orders newest first, with line items and resolved meals"""
        pass

    @abstractmethod
    async def update_order_status(self, order_id: str, status: OrderStatus) -> bool:
        """Update order status; False when the order does not exist"""
        pass

    @abstractmethod
    async def delete_order(self, order_id: str) -> bool:
        """Delete an order together with its line items"""
        pass
