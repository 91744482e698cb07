"""
CRM Use Cases

Customer list and autocomplete, the meal catalog and the follow-up queue.
"""

import logging
from datetime import datetime
from typing import Optional

from viandas.application.dtos.crm_dtos import (
    CustomerListResponse,
    CustomerResponse,
    FollowupListResponse,
    FollowupResponse,
    MealListResponse,
    MealResponse,
)
from viandas.domain.business_rules import SearchSettings, ValidationLimits
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.meal_entity import Meal
from viandas.domain.repositories.customer_repository import CustomerRepository
from viandas.domain.repositories.followup_repository import FollowupRepository
from viandas.domain.repositories.meal_repository import MealRepository
from viandas.domain.services.clock import Clock, resolve_now
from viandas.domain.services.customer_lifecycle import classify_customer, with_current_status
from viandas.domain.services.followup_scheduler import get_message_template
from viandas.domain.value_objects.customer_name import CustomerName
from viandas.domain.value_objects.customer_status import CustomerStatus
from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType
from viandas.infrastructure.auth.auth_service import AuthService
from viandas.infrastructure.cache.read_through_cache import ReadThroughCache
from viandas.infrastructure.utilities.exceptions import (
    DatabaseError,
    FollowupNotFoundError,
    ValidationError,
    ViandasError,
)


class CustomerManagementUseCase:
    """Use case for the customers screen and the order-form autocomplete"""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        customers_cache: ReadThroughCache,
        auth_service: AuthService,
        clock: Clock,
    ):
        self._customer_repository = customer_repository
        self._customers_cache = customers_cache
        self._auth_service = auth_service
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_customers(
        self,
        search: str = "",
        status: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CustomerListResponse:
        """Customers with their status as of ``now``, filtered by search and status"""
        try:
            wanted = CustomerStatus(status) if status and status != "all" else None
        except ValueError:
            return CustomerListResponse(
                success=False, error_message=f"Unknown customer status: {status}"
            )

        try:
            customers = await self._customers_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 CUSTOMERS NOT LOADED: %s", e)
            return CustomerListResponse(success=False, error_message=e.user_message)

        now = resolve_now(now, self._clock)
        customers = [with_current_status(customer, now) for customer in customers]
        if wanted is not None:
            customers = [c for c in customers if c.status == wanted]
        if search and search.strip():
            customers = [c for c in customers if c.matches(search)]
        return CustomerListResponse(success=True, customers=customers)

    async def search_customers(
        self, query: str, limit: int = SearchSettings.CUSTOMER_SEARCH_LIMIT
    ) -> CustomerListResponse:
        """Autocomplete suggestions; an empty query suggests nothing"""
        if not query or not query.strip():
            return CustomerListResponse(success=True, customers=[])

        try:
            customers = await self._customers_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 CUSTOMER SEARCH FAILED: %s", e)
            return CustomerListResponse(success=False, error_message=e.user_message)

        matches = [customer for customer in customers if customer.matches(query)]
        return CustomerListResponse(success=True, customers=matches[:limit])

    async def create_customer(
        self,
        full_name: str,
        phone: str = "",
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CustomerResponse:
        """Register a customer who has not ordered yet"""
        try:
            self._auth_service.require_user()
            try:
                name = CustomerName(full_name)
            except ValueError as e:
                raise ValidationError(str(e), field="full_name") from e
            notes = (notes or "").strip() or None
            if notes and len(notes) > ValidationLimits.MAX_NOTES_LENGTH:
                raise ValidationError(
                    f"Notes cannot exceed {ValidationLimits.MAX_NOTES_LENGTH} characters",
                    field="notes",
                )

            customer = await self._customer_repository.create(
                Customer(
                    id=None,
                    full_name=name.value,
                    phone=(phone or "").strip(),
                    status=CustomerStatus.INACTIVE,
                    created_at=resolve_now(now, self._clock),
                    notes=notes,
                )
            )
        except ValidationError as e:
            return CustomerResponse(
                success=False, error_message=e.user_message, error_field=e.field
            )
        except ViandasError as e:
            self._logger.error("💥 CUSTOMER NOT CREATED: %s", e)
            return CustomerResponse(success=False, error_message=e.user_message)

        self._customers_cache.invalidate()
        return CustomerResponse(success=True, customer=customer)

    async def refresh_statuses(self, now: Optional[datetime] = None) -> int:
        """Persist statuses that drifted with the passage of time; returns how many"""
        now = resolve_now(now, self._clock)
        try:
            customers = await self._customers_cache.refresh()
        except DatabaseError as e:
            self._logger.error("💥 STATUS REFRESH ABORTED: %s", e)
            return 0

        changed = 0
        for customer in customers:
            status = classify_customer(customer.last_order_at, now)
            if status == customer.status:
                continue
            previous = customer.status
            customer.status = status
            try:
                await self._customer_repository.update(customer)
            except DatabaseError as e:
                self._logger.error("💥 STATUS NOT SAVED for %s: %s", customer.id, e)
                customer.status = previous
                continue
            changed += 1
            self._logger.info(
                "🔁 CUSTOMER %s: %s -> %s", customer.id, previous.value, status.value
            )

        if changed:
            self._customers_cache.invalidate()
        self._logger.info("🔁 STATUS REFRESH: %d of %d changed", changed, len(customers))
        return changed


class MealCatalogUseCase:
    """Use case for the meal catalog"""

    def __init__(
        self,
        meal_repository: MealRepository,
        meals_cache: ReadThroughCache,
        auth_service: AuthService,
        clock: Clock,
    ):
        self._meal_repository = meal_repository
        self._meals_cache = meals_cache
        self._auth_service = auth_service
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_meals(self, name_contains: Optional[str] = None) -> MealListResponse:
        try:
            meals = await self._meals_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 MEALS NOT LOADED: %s", e)
            return MealListResponse(success=False, error_message=e.user_message)

        if name_contains and name_contains.strip():
            term = name_contains.strip().lower()
            meals = [meal for meal in meals if term in meal.name.lower()]
        return MealListResponse(success=True, meals=meals)

    async def add_meal(self, name: str) -> MealResponse:
        """Add a meal to the catalog"""
        cleaned = (name or "").strip()
        if not cleaned:
            return MealResponse(
                success=False, error_message="Meal name cannot be empty", error_field="name"
            )
        if len(cleaned) > ValidationLimits.MAX_NAME_LENGTH:
            return MealResponse(
                success=False,
                error_message=(
                    f"Meal name cannot exceed {ValidationLimits.MAX_NAME_LENGTH} characters"
                ),
                error_field="name",
            )

        try:
            self._auth_service.require_user()
            meal = await self._meal_repository.create(
                Meal(id=None, name=cleaned, created_at=self._clock())
            )
        except ViandasError as e:
            self._logger.error("💥 MEAL NOT ADDED: %s", e)
            return MealResponse(success=False, error_message=e.user_message)

        self._meals_cache.invalidate()
        return MealResponse(success=True, meal=meal)

    async def delete_meal(self, meal_id: str) -> MealResponse:
        """Remove a meal; past orders keep pointing at it"""
        try:
            self._auth_service.require_user()
            deleted = await self._meal_repository.delete(meal_id)
        except ViandasError as e:
            self._logger.error("💥 MEAL %s NOT DELETED: %s", meal_id, e)
            return MealResponse(success=False, error_message=e.user_message)

        if not deleted:
            return MealResponse(success=False, error_message="The meal no longer exists.")
        self._meals_cache.invalidate()
        self._logger.info("🗑️ MEAL %s DELETED", meal_id)
        return MealResponse(success=True)


class FollowupManagementUseCase:
    """Use case for the follow-up queue"""

    def __init__(
        self,
        followup_repository: FollowupRepository,
        followups_cache: ReadThroughCache,
        clock: Clock,
    ):
        self._followup_repository = followup_repository
        self._followups_cache = followups_cache
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_followups(self, status: Optional[str] = None) -> FollowupListResponse:
        """Tasks by due date, optionally only one status"""
        try:
            wanted = FollowupStatus(status) if status and status != "all" else None
        except ValueError:
            return FollowupListResponse(
                success=False, error_message=f"Unknown follow-up status: {status}"
            )

        try:
            tasks = await self._followups_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 FOLLOW-UPS NOT LOADED: %s", e)
            return FollowupListResponse(success=False, error_message=e.user_message)

        if wanted is not None:
            tasks = [task for task in tasks if task.status == wanted]
        return FollowupListResponse(success=True, followups=tasks)

    async def due_today_count(self, now: Optional[datetime] = None) -> int:
        """Pending tasks due today or earlier"""
        today = resolve_now(now, self._clock).date()
        try:
            tasks = await self._followups_cache.get()
        except DatabaseError as e:
            self._logger.error("💥 FOLLOW-UPS NOT LOADED: %s", e)
            return 0
        return sum(1 for task in tasks if task.is_due(today))

    def is_overdue(self, task: FollowupTask, now: Optional[datetime] = None) -> bool:
        return task.is_overdue(resolve_now(now, self._clock).date())

    async def mark_as_sent(self, followup_id: str) -> FollowupResponse:
        """Mark a task as sent; repeating the call changes nothing"""
        try:
            task = await self._followup_repository.find_by_id(followup_id)
            if task is None:
                raise FollowupNotFoundError(followup_id)
            if not task.mark_sent():
                return FollowupResponse(success=True, followup=task, changed=False)
            if not await self._followup_repository.update_status(
                followup_id, FollowupStatus.SENT
            ):
                raise FollowupNotFoundError(followup_id)
        except ViandasError as e:
            self._logger.warning("⚠️ FOLLOW-UP %s NOT MARKED: %s", followup_id, e)
            return FollowupResponse(success=False, error_message=e.user_message)

        self._followups_cache.invalidate()
        self._logger.info("📨 FOLLOW-UP %s SENT", followup_id)
        return FollowupResponse(success=True, followup=task, changed=True)

    def get_message(self, followup_type: str) -> Optional[str]:
        """Canned outreach text to copy into a chat; None for an unknown type"""
        try:
            return get_message_template(FollowupType(followup_type))
        except ValueError:
            self._logger.warning("⚠️ NO MESSAGE for follow-up type %r", followup_type)
            return None

