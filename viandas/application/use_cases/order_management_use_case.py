"""
Order Management Use Case

Orders screen: filtered listing, status changes and admin deletion.
"""

import logging
from datetime import datetime
from typing import Optional

from viandas.application.dtos.order_dtos import (
    OrderListRequest,
    OrderListResponse,
    OrderOperationResponse,
)
from viandas.domain.repositories.order_repository import OrderRepository
from viandas.domain.services.clock import Clock, resolve_now
from viandas.domain.services.dashboard_aggregator import orders_in_window, period_start
from viandas.domain.value_objects.order_type import OrderStatus
from viandas.domain.value_objects.period import Period
from viandas.infrastructure.auth.auth_service import AuthService
from viandas.infrastructure.cache.read_through_cache import ReadThroughCache
from viandas.infrastructure.logging.logger_config import get_structured_logger
from viandas.infrastructure.utilities.exceptions import (
    BusinessLogicError,
    DatabaseError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ValidationError,
    ViandasError,
)

ALL = "all"


class OrderManagementUseCase:
    """Use case for browsing and maintaining existing orders"""

    def __init__(
        self,
        order_repository: OrderRepository,
        orders_cache: ReadThroughCache,
        auth_service: AuthService,
        clock: Clock,
    ):
        self._order_repository = order_repository
        self._orders_cache = orders_cache
        self._auth_service = auth_service
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)
        self._audit = get_structured_logger("viandas.audit")

    async def list_orders(
        self, request: Optional[OrderListRequest] = None, now: Optional[datetime] = None
    ) -> OrderListResponse:
        """Orders matching the search box, status chip and period selector"""
        request = request or OrderListRequest()
        try:
            status = None
            if request.status and request.status != ALL:
                status = OrderStatus(request.status)
            period = None
            if request.period and request.period != ALL:
                period = Period(request.period)
        except ValueError as e:
            return OrderListResponse(success=False, error_message=f"Invalid filter: {e}")

        try:
            orders = await self._orders_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 ORDERS NOT LOADED: %s", e)
            return OrderListResponse(success=False, error_message=e.user_message)

        if status is not None:
            orders = [order for order in orders if order.status == status]
        if period is not None:
            orders = orders_in_window(orders, period_start(period, resolve_now(now, self._clock)))
        if request.search and request.search.strip():
            orders = [order for order in orders if order.matches(request.search)]

        return OrderListResponse(success=True, orders=orders, total_count=len(orders))

    async def update_status(self, order_id: str, new_status: str) -> OrderOperationResponse:
        """Move an order forward through pending, paid and delivered"""
        try:
            self._auth_service.require_user()
            try:
                status = OrderStatus(new_status)
            except ValueError as e:
                raise ValidationError(
                    f"Unknown order status: {new_status}", field="status"
                ) from e

            order = await self._order_repository.get_order_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            if not order.status.can_transition_to(status):
                raise InvalidStatusTransitionError(order.status.value, status.value)

            if not await self._order_repository.update_order_status(order_id, status):
                raise OrderNotFoundError(order_id)
        except BusinessLogicError as e:
            self._logger.warning("⚠️ STATUS CHANGE REFUSED for %s: %s", order_id, e)
            return OrderOperationResponse(success=False, error_message=e.user_message)
        except ViandasError as e:
            self._logger.error("💥 STATUS CHANGE FAILED for %s: %s", order_id, e)
            return OrderOperationResponse(success=False, error_message=e.user_message)

        order.status = status
        self._orders_cache.invalidate()
        self._logger.info("🔄 ORDER %s -> %s", order_id, status.value)
        return OrderOperationResponse(success=True, order=order)

    async def delete_order(self, order_id: str) -> OrderOperationResponse:
        """Admin only. The order's line items are removed with it."""
        try:
            admin = self._auth_service.require_admin("delete order")
            if not await self._order_repository.delete_order(order_id):
                raise OrderNotFoundError(order_id)
        except ViandasError as e:
            self._logger.warning("⚠️ ORDER %s NOT DELETED: %s", order_id, e)
            return OrderOperationResponse(success=False, error_message=e.user_message)

        self._orders_cache.invalidate()
        self._logger.info("🗑️ ORDER %s DELETED", order_id)
        self._audit.info("order_deleted", order_id=order_id, deleted_by=admin.id)
        return OrderOperationResponse(success=True)
