"""
Pricing & Order Total Calculator

Maps order type, delivery flag and an optional manual price to a total.
Malformed numeric input degrades to 0 instead of raising.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from viandas.domain.value_objects.order_type import OrderType


@dataclass(frozen=True)
class PriceTable:
    """Fixed bundle prices and the delivery fee"""

    single: float
    pack5: float
    pack10: float
    delivery: float

    def price_for(self, order_type: OrderType) -> float:
        """Fixed price of a single/pack order type"""
        prices = {
            OrderType.SINGLE: self.single,
            OrderType.PACK5: self.pack5,
            OrderType.PACK10: self.pack10,
        }
        if order_type not in prices:
            raise KeyError(f"No fixed price for order type: {order_type.value}")
        return prices[order_type]


@dataclass(frozen=True)
class OrderTotals:
    """Result of a total calculation"""

    subtotal: float
    delivery_fee: float
    total: float


def parse_amount(value: Any) -> Optional[float]:
    """Parse a user-entered amount; None when it is not a finite number"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_amount(value: Any) -> float:
    """Lenient amount: absent, non-numeric or negative input becomes 0"""
    number = parse_amount(value)
    if number is None or number < 0:
        return 0.0
    return number


def calculate_order_total(
    order_type: OrderType,
    delivery: bool,
    price_table: PriceTable,
    manual_subtotal: Any = None,
) -> OrderTotals:
    """Compute subtotal, delivery fee and total for an order"""
    order_type = OrderType(order_type)
    if order_type.has_fixed_price:
        subtotal = float(price_table.price_for(order_type))
    else:
        subtotal = coerce_amount(manual_subtotal)

    delivery_fee = float(price_table.delivery) if delivery else 0.0
    return OrderTotals(
        subtotal=subtotal, delivery_fee=delivery_fee, total=subtotal + delivery_fee
    )
