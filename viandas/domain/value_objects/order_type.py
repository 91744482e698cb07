"""
Order type and order status value objects
"""

from enum import Enum


class OrderType(str, Enum):
    """What the customer bought: one meal, a bundle, or a manually priced order"""

    SINGLE = "single"
    PACK5 = "pack5"
    PACK10 = "pack10"
    OTHER = "other"

    @property
    def is_pack(self) -> bool:
        """Bundled multi-meal order types"""
        return self.value.startswith("pack")

    @property
    def has_fixed_price(self) -> bool:
        return self is not OrderType.OTHER


class OrderStatus(str, Enum):
    """Fulfillment status of an order"""

    PENDING = "pending"
    PAID = "paid"
    DELIVERED = "delivered"

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """Status only moves forward; delivered is terminal"""
        return OrderStatus(new_status) in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.DELIVERED},
    OrderStatus.PAID: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
}
