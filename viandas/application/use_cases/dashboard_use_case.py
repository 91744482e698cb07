"""
Dashboard Use Case

Reads the shared collections and hands them to the dashboard aggregator.
"""

import logging
from datetime import datetime
from typing import Optional

from viandas.application.dtos.crm_dtos import DashboardResponse
from viandas.domain.services.clock import Clock, resolve_now
from viandas.domain.services.customer_lifecycle import with_current_status
from viandas.domain.services.dashboard_aggregator import aggregate_dashboard
from viandas.domain.value_objects.period import Period
from viandas.infrastructure.cache.read_through_cache import ReadThroughCache
from viandas.infrastructure.utilities.exceptions import DatabaseError


class DashboardUseCase:
    """Use case for the dashboard summary"""

    def __init__(
        self,
        orders_cache: ReadThroughCache,
        customers_cache: ReadThroughCache,
        followups_cache: ReadThroughCache,
        clock: Clock,
    ):
        self._orders_cache = orders_cache
        self._customers_cache = customers_cache
        self._followups_cache = followups_cache
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_stats(
        self, period: str = Period.TODAY.value, now: Optional[datetime] = None
    ) -> DashboardResponse:
        """Metrics for today, this week or this month"""
        try:
            period = Period(period)
        except ValueError:
            return DashboardResponse(success=False, error_message=f"Unknown period: {period}")

        now = resolve_now(now, self._clock)
        try:
            orders = await self._orders_cache.get()
            customers = await self._customers_cache.get()
            followups = await self._followups_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 DASHBOARD DATA NOT LOADED: %s", e)
            return DashboardResponse(success=False, error_message=e.user_message)

        customers = [with_current_status(customer, now) for customer in customers]
        stats = aggregate_dashboard(orders, customers, followups, period, now)
        self._logger.info(
            "📊 DASHBOARD %s: %d orders, revenue %.2f",
            period.value,
            stats.count,
            stats.revenue,
        )
        return DashboardResponse(success=True, stats=stats)
