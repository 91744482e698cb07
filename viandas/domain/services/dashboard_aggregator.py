"""
Dashboard Aggregator

Reduces already-fetched orders, customers and follow-ups into the summary
shown on the dashboard. Pure and synchronous; recompute on every call.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from viandas.domain.business_rules import DashboardSettings
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.order_entity import Order
from viandas.domain.services.clock import align_timezone
from viandas.domain.services.customer_lifecycle import (
    repeat_purchase_rate,
    round_half_up,
)
from viandas.domain.value_objects.customer_status import CustomerStatus
from viandas.domain.value_objects.period import Period


@dataclass(frozen=True)
class MealRanking:
    """Units sold of one meal"""

    name: str
    qty: int


@dataclass
class DashboardStats:
    """Dashboard summary for one period"""

    period: Period
    window_start: datetime
    revenue: float = 0.0
    count: int = 0
    avg_ticket: float = 0.0
    by_type: dict[str, int] = field(default_factory=dict)
    pack_ratio: int = 0
    top_meals: list[MealRanking] = field(default_factory=list)
    active_clients: int = 0
    retention_rate: int = 0
    pending_followups: int = 0


def period_start(period: Period, now: datetime) -> datetime:
    """Start of the window: local midnight, this Monday, or the 1st of the month"""
    period = Period(period)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period is Period.TODAY:
        return midnight
    if period is Period.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    return midnight.replace(day=1)


def orders_in_window(
    orders: Iterable[Order], window_start: datetime
) -> list[Order]:
    """Orders created at or after ``window_start``"""
    return [
        order
        for order in orders
        if order.created_at is not None
        and align_timezone(order.created_at, window_start) >= window_start
    ]


def rank_meals(
    orders: Iterable[Order], limit: Optional[int] = DashboardSettings.TOP_MEALS_LIMIT
) -> list[MealRanking]:
    """Units per meal name, best sellers first; ties keep first-seen order"""
    totals: dict[str, int] = {}
    for order in orders:
        for item in order.items:
            name = item.meal_name
            if name is None:
                continue  # meal deleted since the order was taken
            totals[name] = totals.get(name, 0) + item.qty

    ranked = sorted(totals.items(), key=lambda entry: entry[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [MealRanking(name=name, qty=qty) for name, qty in ranked]


def aggregate_dashboard(
    orders: Sequence[Order],
    customers: Sequence[Customer],
    followups: Sequence[FollowupTask],
    period: Period,
    now: datetime,
) -> DashboardStats:
    """Compute every dashboard metric for ``period`` as of ``now``"""
    window_start = period_start(period, now)
    subset = orders_in_window(orders, window_start)

    count = len(subset)
    revenue = sum(order.total or 0 for order in subset)
    type_counts = Counter(order.order_type.value for order in subset)
    pack_count = sum(1 for order in subset if order.is_pack)

    return DashboardStats(
        period=Period(period),
        window_start=window_start,
        revenue=revenue,
        count=count,
        avg_ticket=revenue / count if count > 0 else 0,
        by_type=dict(type_counts),
        pack_ratio=round_half_up(100 * pack_count / count) if count > 0 else 0,
        top_meals=rank_meals(subset),
        active_clients=sum(
            1 for customer in customers if customer.status == CustomerStatus.ACTIVE
        ),
        retention_rate=repeat_purchase_rate(customers),
        pending_followups=sum(1 for task in followups if task.is_pending),
    )
