"""
Customer Lifecycle Classifier

Derives a customer's engagement tier from the recency of their last order,
on calendar-day granularity relative to the supplied ``now``:

* no order yet        -> inactive
* 0 to 14 days        -> active
* 15 to 30 days       -> warming
* more than 30 days   -> inactive
"""

import dataclasses
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from viandas.domain.business_rules import LifecycleSettings
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.services.clock import local_date
from viandas.domain.value_objects.customer_status import CustomerStatus


def round_half_up(value: float) -> int:
    """Round .5 away from zero, as a percentage shown to staff expects"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def days_since(last_order_at: datetime, now: datetime) -> int:
    """Whole calendar days between the last order and today; never negative"""
    delta = (now.date() - local_date(last_order_at, now)).days
    return max(delta, 0)


def classify_customer(
    last_order_at: Optional[datetime], now: datetime
) -> CustomerStatus:
    """Classify a customer by recency of purchase"""
    if last_order_at is None:
        return CustomerStatus.INACTIVE

    days = days_since(last_order_at, now)
    if days <= LifecycleSettings.ACTIVE_MAX_DAYS:
        return CustomerStatus.ACTIVE
    if days <= LifecycleSettings.WARMING_MAX_DAYS:
        return CustomerStatus.WARMING
    return CustomerStatus.INACTIVE


def with_current_status(customer: Customer, now: datetime) -> Customer:
    """Copy of ``customer`` whose status reflects ``now``"""
    status = classify_customer(customer.last_order_at, now)
    if status == customer.status:
        return customer
    return dataclasses.replace(customer, status=status)


def repeat_purchase_rate(customers: Iterable[Customer]) -> int:
    """Percentage of ordering customers who ordered more than once"""
    ordering = 0
    repeat = 0
    for customer in customers:
        if customer.has_ordered():
            ordering += 1
            if customer.is_repeat_buyer():
                repeat += 1
    if ordering == 0:
        return 0
    return round_half_up(100 * repeat / ordering)
