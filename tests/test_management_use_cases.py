"""
Order management, CRM and dashboard use case tests
"""

import dataclasses
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from viandas.application.dtos.order_dtos import OrderListRequest
from viandas.application.use_cases.crm_use_cases import (
    CustomerManagementUseCase,
    FollowupManagementUseCase,
    MealCatalogUseCase,
)
from viandas.application.use_cases.dashboard_use_case import DashboardUseCase
from viandas.application.use_cases.order_management_use_case import OrderManagementUseCase
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.meal_entity import Meal
from viandas.domain.entities.order_entity import Order
from viandas.domain.entities.profile_entity import Profile, Role
from viandas.domain.value_objects.customer_status import CustomerStatus
from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType
from viandas.domain.value_objects.order_type import OrderStatus, OrderType
from viandas.infrastructure.utilities.exceptions import (
    PermissionDeniedError,
    StoreOperationError,
)

STAFF = Profile(id="staff-1", email="ana@viandas.test")
ADMIN = Profile(id="admin-1", email="jefa@viandas.test", role=Role.ADMIN)


def make_cache(items):
    cache = MagicMock()
    cache.get = AsyncMock(return_value=list(items))
    cache.refresh = AsyncMock(return_value=list(items))
    return cache


def make_auth(profile=STAFF):
    auth = MagicMock()
    auth.require_user.return_value = profile
    if profile.is_admin:
        auth.require_admin.return_value = profile
    else:
        auth.require_admin.side_effect = PermissionDeniedError("delete order")
    return auth


def order(order_id, name, phone, status, created_at, order_type=OrderType.SINGLE):
    return Order(
        id=order_id,
        customer_name=name,
        phone=phone,
        order_type=order_type,
        subtotal=9800,
        delivery_fee=0,
        total=9800,
        created_by="staff-1",
        status=status,
        created_at=created_at,
    )


class TestOrderManagementUseCase:
    @pytest.fixture
    def orders(self, now):
        return [
            order("o1", "Lucía Gómez", "1155550000", OrderStatus.PENDING, now - timedelta(hours=1)),
            order("o2", "Marta Díaz", "1144441111", OrderStatus.PAID, now - timedelta(days=1)),
            order("o3", "Lucas Pérez", "1133332222", OrderStatus.DELIVERED, now - timedelta(days=20)),
        ]

    def make_use_case(self, orders, now, profile=STAFF, repo=None):
        return OrderManagementUseCase(
            order_repository=repo or MagicMock(),
            orders_cache=make_cache(orders),
            auth_service=make_auth(profile),
            clock=lambda: now,
        )

    @pytest.mark.asyncio
    async def test_filters(self, orders, now):
        use_case = self.make_use_case(orders, now)

        async def ids(**kwargs):
            response = await use_case.list_orders(OrderListRequest(**kwargs))
            return [o.id for o in response.orders]

        assert await ids(period="today") == ["o1"]
        assert await ids(period="week") == ["o1", "o2"]
        assert await ids(period="all") == ["o1", "o2", "o3"]
        assert await ids(period="all", search="LUC") == ["o1", "o3"]
        assert await ids(period="all", search="4444") == ["o2"]
        assert await ids(period="all", status="delivered") == ["o3"]
        assert await ids(period="month", status="all") == ["o1", "o2"]

    @pytest.mark.asyncio
    async def test_bad_filter_and_store_failure(self, orders, now):
        use_case = self.make_use_case(orders, now)
        assert (await use_case.list_orders(OrderListRequest(status="lost"))).success is False

        use_case._orders_cache.get.side_effect = StoreOperationError("orders.list", "down")
        response = await use_case.list_orders(OrderListRequest())
        assert response.success is False
        assert response.error_message

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "current,requested,allowed",
        [
            (OrderStatus.PENDING, "paid", True),
            (OrderStatus.PENDING, "delivered", True),
            (OrderStatus.PAID, "delivered", True),
            (OrderStatus.PAID, "pending", False),
            (OrderStatus.DELIVERED, "paid", False),
            (OrderStatus.DELIVERED, "pending", False),
            (OrderStatus.PENDING, "pending", False),
        ],
    )
    async def test_status_transitions(self, now, current, requested, allowed):
        repo = MagicMock()
        repo.get_order_by_id = AsyncMock(return_value=order("o1", "Ana", "", current, now))
        repo.update_order_status = AsyncMock(return_value=True)
        use_case = self.make_use_case([], now, repo=repo)

        response = await use_case.update_status("o1", requested)

        assert response.success is allowed
        assert repo.update_order_status.await_count == (1 if allowed else 0)
        if allowed:
            assert response.order.status == OrderStatus(requested)
            use_case._orders_cache.invalidate.assert_called_once()

    @pytest.mark.asyncio
    async def test_status_of_missing_order(self, now):
        repo = MagicMock()
        repo.get_order_by_id = AsyncMock(return_value=None)
        use_case = self.make_use_case([], now, repo=repo)

        response = await use_case.update_status("gone", "paid")

        assert response.success is False
        assert response.error_message == "The order no longer exists."

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, now):
        repo = MagicMock()
        repo.delete_order = AsyncMock(return_value=True)

        staff_response = await self.make_use_case([], now, repo=repo).delete_order("o1")
        assert staff_response.success is False
        repo.delete_order.assert_not_called()

        admin_use_case = self.make_use_case([], now, profile=ADMIN, repo=repo)
        assert (await admin_use_case.delete_order("o1")).success is True
        repo.delete_order.assert_awaited_once_with("o1")
        admin_use_case._orders_cache.invalidate.assert_called_once()


class TestCustomerManagementUseCase:
    @pytest.fixture
    def customers(self, now):
        return [
            Customer(id="c1", full_name="Lucía Gómez", phone="1155550000", status=CustomerStatus.ACTIVE, orders_count=2, last_order_at=now - timedelta(days=2)),
            Customer(id="c2", full_name="Lucas Pérez", phone="1133332222", status=CustomerStatus.ACTIVE, orders_count=1, last_order_at=now - timedelta(days=20)),
            Customer(id="c3", full_name="Marta Díaz", phone="1144441111", status=CustomerStatus.INACTIVE),
        ]

    def make_use_case(self, customers, now, repo=None):
        return CustomerManagementUseCase(
            customer_repository=repo or MagicMock(),
            customers_cache=make_cache(customers),
            auth_service=make_auth(),
            clock=lambda: now,
        )

    @pytest.mark.asyncio
    async def test_list_uses_current_status(self, customers, now):
        use_case = self.make_use_case(customers, now)

        response = await use_case.list_customers(status="warming")
        assert [c.id for c in response.customers] == ["c2"]

        response = await use_case.list_customers(search="luc")
        assert [c.id for c in response.customers] == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_search_for_autocomplete(self, customers, now):
        use_case = self.make_use_case(customers, now)

        assert (await use_case.search_customers("")).customers == []
        assert (await use_case.search_customers("   ")).customers == []
        use_case._customers_cache.get.assert_not_called()

        assert [c.id for c in (await use_case.search_customers("1144")).customers] == ["c3"]
        assert len((await use_case.search_customers("u", limit=1)).customers) == 1

    @pytest.mark.asyncio
    async def test_create_customer(self, now):
        repo = MagicMock()
        repo.create = AsyncMock(side_effect=lambda c: dataclasses.replace(c, id="new"))
        use_case = self.make_use_case([], now, repo=repo)

        response = await use_case.create_customer("  Ana   Ruiz ", " 11 ", "prefiere sin sal")

        assert response.success is True
        assert response.customer.full_name == "Ana Ruiz"
        assert response.customer.phone == "11"
        assert response.customer.status == CustomerStatus.INACTIVE
        assert response.customer.orders_count == 0
        use_case._customers_cache.invalidate.assert_called_once()

        invalid = await use_case.create_customer("")
        assert invalid.success is False
        assert invalid.error_field == "full_name"

    @pytest.mark.asyncio
    async def test_refresh_statuses_persists_drift(self, customers, now):
        repo = MagicMock()
        repo.update = AsyncMock(side_effect=lambda c: c)
        use_case = self.make_use_case(customers, now, repo=repo)

        changed = await use_case.refresh_statuses()

        assert changed == 1
        updated = repo.update.call_args.args[0]
        assert updated.id == "c2"
        assert updated.status == CustomerStatus.WARMING

    @pytest.mark.asyncio
    async def test_refresh_statuses_survives_update_failure(self, customers, now):
        repo = MagicMock()
        repo.update = AsyncMock(side_effect=StoreOperationError("customers.update", "down"))
        use_case = self.make_use_case(customers, now, repo=repo)

        assert await use_case.refresh_statuses() == 0
        assert customers[1].status == CustomerStatus.ACTIVE


class TestMealCatalogUseCase:
    def make_use_case(self, meals, now, repo=None):
        return MealCatalogUseCase(
            meal_repository=repo or MagicMock(),
            meals_cache=make_cache(meals),
            auth_service=make_auth(),
            clock=lambda: now,
        )

    @pytest.mark.asyncio
    async def test_list_and_filter(self, now):
        use_case = self.make_use_case([Meal(id="1", name="Guiso"), Meal(id="2", name="Tarta")], now)
        assert len((await use_case.list_meals()).meals) == 2
        assert [m.name for m in (await use_case.list_meals(" tar ")).meals] == ["Tarta"]

    @pytest.mark.asyncio
    async def test_add_meal_validation(self, now):
        repo = MagicMock()
        repo.create = AsyncMock(side_effect=lambda m: dataclasses.replace(m, id="m1"))
        use_case = self.make_use_case([], now, repo=repo)

        assert (await use_case.add_meal("   ")).success is False
        assert (await use_case.add_meal("x" * 101)).success is False
        repo.create.assert_not_called()

        response = await use_case.add_meal("  Milanesa con puré ")
        assert response.success is True
        assert response.meal.name == "Milanesa con puré"
        use_case._meals_cache.invalidate.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete_meal(self, now):
        repo = MagicMock()
        repo.delete = AsyncMock(side_effect=[True, False])
        use_case = self.make_use_case([], now, repo=repo)

        assert (await use_case.delete_meal("m1")).success is True
        assert (await use_case.delete_meal("m1")).success is False


class TestFollowupManagementUseCase:
    @pytest.fixture
    def tasks(self):
        def task(task_id, due, status=FollowupStatus.PENDING):
            return FollowupTask(
                id=task_id,
                customer_name="Ana",
                customer_phone="11",
                type=FollowupType.RECOMPRA,
                due_date=due,
                status=status,
            )

        return [
            task("f1", date(2024, 6, 10)),
            task("f2", date(2024, 6, 12)),
            task("f3", date(2024, 6, 14)),
            task("f4", date(2024, 6, 1), FollowupStatus.SENT),
        ]

    def make_use_case(self, tasks, now, repo=None):
        return FollowupManagementUseCase(
            followup_repository=repo or MagicMock(),
            followups_cache=make_cache(tasks),
            clock=lambda: now,
        )

    @pytest.mark.asyncio
    async def test_listing_and_due_count(self, tasks, now):
        use_case = self.make_use_case(tasks, now)

        assert len((await use_case.list_followups()).followups) == 4
        assert [t.id for t in (await use_case.list_followups("sent")).followups] == ["f4"]
        assert await use_case.due_today_count() == 2
        assert use_case.is_overdue(tasks[0]) is True
        assert use_case.is_overdue(tasks[1]) is False
        assert use_case.is_overdue(tasks[3]) is False

    @pytest.mark.asyncio
    async def test_mark_as_sent_twice(self, tasks, now):
        stored = dataclasses.replace(tasks[0])
        repo = MagicMock()
        repo.find_by_id = AsyncMock(side_effect=lambda _id: dataclasses.replace(stored))
        repo.update_status = AsyncMock(side_effect=lambda _id, status: setattr(stored, "status", status) or True)
        use_case = self.make_use_case(tasks, now, repo=repo)

        first = await use_case.mark_as_sent("f1")
        second = await use_case.mark_as_sent("f1")

        assert first.success is True and first.changed is True
        assert second.success is True and second.changed is False
        assert second.followup.status == FollowupStatus.SENT
        repo.update_status.assert_awaited_once_with("f1", FollowupStatus.SENT)

    @pytest.mark.asyncio
    async def test_mark_missing_task(self, now):
        repo = MagicMock()
        repo.find_by_id = AsyncMock(return_value=None)
        response = await self.make_use_case([], now, repo=repo).mark_as_sent("gone")
        assert response.success is False

    def test_messages(self, now):
        use_case = self.make_use_case([], now)
        assert "próxima semana" in use_case.get_message("recompra")
        assert use_case.get_message("spam") is None
        assert use_case.get_message(None) is None

    @pytest.mark.asyncio
    async def test_due_count_survives_store_failure(self, now):
        cache = MagicMock()
        cache.get = AsyncMock(side_effect=StoreOperationError("followups.list", "down"))
        use_case = FollowupManagementUseCase(
            followup_repository=MagicMock(), followups_cache=cache, clock=lambda: now
        )

        assert await use_case.due_today_count() == 0


class TestDashboardUseCase:
    @pytest.mark.asyncio
    async def test_stats_use_current_customer_status(self, now):
        customers = [
            Customer(id="c1", full_name="A", status=CustomerStatus.ACTIVE, orders_count=2, last_order_at=now - timedelta(days=40)),
            Customer(id="c2", full_name="B", status=CustomerStatus.INACTIVE, orders_count=1, last_order_at=now - timedelta(days=1)),
        ]
        orders = [order("o1", "A", "", OrderStatus.PENDING, now, OrderType.PACK5)]
        use_case = DashboardUseCase(make_cache(orders), make_cache(customers), make_cache([]), lambda: now)

        response = await use_case.get_stats("today")

        assert response.success is True
        assert response.stats.count == 1
        assert response.stats.pack_ratio == 100
        assert response.stats.active_clients == 1
        assert response.stats.retention_rate == 50

    @pytest.mark.asyncio
    async def test_naive_now_is_read_in_business_timezone(self, now):
        late_last_night = datetime(2024, 6, 12, 2, 30, tzinfo=timezone.utc)
        just_after_midnight = datetime(2024, 6, 12, 3, 45, tzinfo=timezone.utc)
        orders = [
            order("o1", "A", "", OrderStatus.PENDING, late_last_night),
            order("o2", "B", "", OrderStatus.PENDING, just_after_midnight),
        ]
        use_case = DashboardUseCase(make_cache(orders), make_cache([]), make_cache([]), lambda: now)

        response = await use_case.get_stats("today", now=datetime(2024, 6, 12, 1, 0))

        assert response.success is True
        assert response.stats.count == 1

    @pytest.mark.asyncio
    async def test_invalid_period_and_store_failure(self, now):
        failing = make_cache([])
        failing.get.side_effect = StoreOperationError("orders.list", "down")
        use_case = DashboardUseCase(failing, make_cache([]), make_cache([]), lambda: now)

        assert (await use_case.get_stats("year")).success is False
        assert (await use_case.get_stats("week")).success is False
