"""
Order Creation Use Case

Validates the new-order form, prices it and runs the creation chain:
order row, line items, follow-up, customer stats.
"""

import logging
from datetime import datetime
from typing import List, Optional

from viandas.application.dtos.order_dtos import (
    CreateOrderRequest,
    LineItemRequest,
    OrderCreationResponse,
)
from viandas.domain.business_rules import ValidationLimits
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.order_entity import Order, OrderLineItem
from viandas.domain.repositories.customer_repository import CustomerRepository
from viandas.domain.repositories.order_repository import OrderRepository
from viandas.domain.services.clock import Clock, resolve_now
from viandas.domain.services.customer_lifecycle import classify_customer
from viandas.domain.services.followup_scheduler import FollowupScheduler
from viandas.domain.services.pricing import (
    OrderTotals,
    PriceTable,
    calculate_order_total,
    parse_amount,
)
from viandas.domain.value_objects.customer_name import CustomerName
from viandas.domain.value_objects.order_type import OrderStatus, OrderType
from viandas.infrastructure.auth.auth_service import AuthService
from viandas.infrastructure.cache.read_through_cache import ReadThroughCache
from viandas.infrastructure.logging.logger_config import get_structured_logger
from viandas.infrastructure.utilities.exceptions import (
    DatabaseError,
    DuplicateSubmissionError,
    ErrorReporter,
    ValidationError,
    ViandasError,
)


class OrderCreationUseCase:
    """Use case for creating orders from the new-order form"""

    def __init__(
        self,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
        followup_scheduler: FollowupScheduler,
        auth_service: AuthService,
        price_table: PriceTable,
        clock: Clock,
        orders_cache: Optional[ReadThroughCache] = None,
        customers_cache: Optional[ReadThroughCache] = None,
        followups_cache: Optional[ReadThroughCache] = None,
    ):
        self._order_repository = order_repository
        self._customer_repository = customer_repository
        self._followup_scheduler = followup_scheduler
        self._auth_service = auth_service
        self._price_table = price_table
        self._clock = clock
        self._orders_cache = orders_cache
        self._customers_cache = customers_cache
        self._followups_cache = followups_cache
        self._in_flight = False
        self._logger = logging.getLogger(self.__class__.__name__)
        self._audit = get_structured_logger("viandas.audit")

    def preview(self, request: CreateOrderRequest) -> OrderTotals:
        """Totals shown live while the form is filled in"""
        return calculate_order_total(
            self._parse_order_type(request.order_type),
            bool(request.delivery),
            self._price_table,
            request.manual_subtotal,
        )

    async def create_order(
        self, request: CreateOrderRequest, now: Optional[datetime] = None
    ) -> OrderCreationResponse:
        """Create an order and everything that hangs off it"""
        if self._in_flight:
            error = DuplicateSubmissionError()
            self._logger.warning("⏳ DUPLICATE SUBMISSION for %s", request.customer_name)
            return OrderCreationResponse(success=False, error_message=error.user_message)

        self._in_flight = True
        try:
            return await self._create_order(request, resolve_now(now, self._clock))
        finally:
            self._in_flight = False

    async def _create_order(
        self, request: CreateOrderRequest, now: datetime
    ) -> OrderCreationResponse:
        self._logger.info("📝 ===== ORDER CREATION STARTED =====")

        try:
            order = self._build_order(request, now)
        except ValidationError as e:
            self._logger.warning("⚠️ ORDER REJECTED: %s", e)
            return OrderCreationResponse(
                success=False, error_message=e.user_message, error_field=e.field
            )
        except ViandasError as e:
            self._logger.warning("⚠️ ORDER REJECTED: %s", e)
            return OrderCreationResponse(success=False, error_message=e.user_message)

        try:
            saved = await self._order_repository.create_order(order)
        except DatabaseError as e:
            self._logger.error("💥 ORDER INSERT FAILED: %s", e)
            return OrderCreationResponse(success=False, error_message=e.user_message)

        self._invalidate(self._orders_cache)

        if order.items:
            try:
                saved.items = await self._order_repository.add_items(
                    saved.id, order.items
                )
            except DatabaseError as e:
                self._logger.error(
                    "💥 LINE ITEMS NOT SAVED for order %s: %s", saved.id, e
                )
                return OrderCreationResponse(
                    success=False,
                    order=saved,
                    order_saved=True,
                    error_message=(
                        "The order was saved but its meals could not be recorded. "
                        "Please review the order."
                    ),
                )

        response = OrderCreationResponse(success=True, order=saved, order_saved=True)

        response.followup = await self._followup_scheduler.schedule_for_order(saved, now)
        if response.followup.failed:
            response.warnings.append("The follow-up reminder could not be scheduled.")
        else:
            self._invalidate(self._followups_cache)

        if saved.customer_id:
            warning = await self._update_customer_stats(saved, now)
            if warning:
                response.warnings.append(warning)

        self._audit.info(
            "order_created",
            order_id=saved.id,
            order_type=saved.order_type.value,
            total=saved.total,
            created_by=saved.created_by,
            followup_scheduled=response.followup.scheduled,
        )
        self._logger.info(
            "🎉 ===== ORDER CREATED: %s total=%.2f =====", saved.id, saved.total
        )
        return response

    def _build_order(self, request: CreateOrderRequest, now: datetime) -> Order:
        """Validate the form and turn it into an unsaved order"""
        user = self._auth_service.require_user()

        try:
            name = CustomerName(request.customer_name)
        except ValueError as e:
            raise ValidationError(str(e), field="customer_name") from e

        order_type = self._parse_order_type(request.order_type)
        try:
            status = OrderStatus(request.status)
        except ValueError as e:
            raise ValidationError(
                f"Unknown order status: {request.status}", field="status"
            ) from e

        manual_subtotal = None
        other_label = None
        if order_type == OrderType.OTHER:
            manual_subtotal = parse_amount(request.manual_subtotal)
            if manual_subtotal is None or manual_subtotal < 0:
                raise ValidationError(
                    "Enter a valid price for this order", field="manual_subtotal"
                )
            other_label = (request.other_label or "").strip()
            if not other_label:
                raise ValidationError(
                    "Describe what this order is", field="other_label"
                )

        notes = (request.notes or "").strip()
        if len(notes) > ValidationLimits.MAX_NOTES_LENGTH:
            raise ValidationError(
                f"Notes cannot exceed {ValidationLimits.MAX_NOTES_LENGTH} characters",
                field="notes",
            )

        items = self._build_items(request.items)
        totals = calculate_order_total(
            order_type, bool(request.delivery), self._price_table, manual_subtotal
        )

        return Order(
            id=None,
            customer_name=name.value,
            phone=(request.phone or "").strip(),
            customer_id=request.customer_id or None,
            order_type=order_type,
            other_label=other_label,
            delivery=bool(request.delivery),
            status=status,
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            total=totals.total,
            notes=notes,
            item_count=sum(item.qty for item in items),
            order_date=now.date(),
            created_at=now,
            created_by=user.id,
            channel=request.channel,
            items=items,
        )

    @staticmethod
    def _parse_order_type(value) -> OrderType:
        try:
            return OrderType(value)
        except ValueError as e:
            raise ValidationError(
                f"Unknown order type: {value}", field="order_type"
            ) from e

    @staticmethod
    def _build_items(requested: List[LineItemRequest]) -> List[OrderLineItem]:
        items = []
        for line in requested or []:
            if not line.meal_id:
                raise ValidationError("Choose a meal for every row", field="items")
            qty = parse_amount(line.qty)
            if qty is None or qty < 1 or qty != int(qty):
                raise ValidationError(
                    "Meal quantities must be whole numbers of at least 1", field="items"
                )
            items.append(
                OrderLineItem(id=None, order_id=None, meal_id=line.meal_id, qty=int(qty))
            )
        return items

    async def _update_customer_stats(self, order: Order, now: datetime) -> Optional[str]:
        """Fold the order into the linked customer's totals; best-effort"""
        try:
            customer: Optional[Customer] = await self._customer_repository.find_by_id(
                order.customer_id
            )
            if customer is None:
                self._logger.warning(
                    "👤 CUSTOMER %s NOT FOUND; stats not updated", order.customer_id
                )
                return None

            customer.record_order(order.total, now)
            customer.status = classify_customer(customer.last_order_at, now)
            await self._customer_repository.update(customer)
        except DatabaseError as e:
            ErrorReporter.report_business_error(e, order.created_by)
            self._logger.error(
                "💥 CUSTOMER STATS NOT UPDATED for %s: %s", order.customer_id, e
            )
            return "The customer's totals could not be updated."

        self._invalidate(self._customers_cache)
        self._logger.info(
            "👤 CUSTOMER %s: %d orders, status %s",
            customer.id,
            customer.orders_count,
            customer.status.value,
        )
        return None

    @staticmethod
    def _invalidate(cache: Optional[ReadThroughCache]) -> None:
        if cache is not None:
            cache.invalidate()
