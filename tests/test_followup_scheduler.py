"""
Follow-up scheduler tests
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.order_entity import Order
from viandas.domain.services.followup_scheduler import (
    FollowupScheduler,
    get_message_template,
    plan_followup,
)
from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType
from viandas.domain.value_objects.order_type import OrderType
from viandas.infrastructure.utilities.exceptions import StoreOperationError


def make_order(order_type: OrderType) -> Order:
    return Order(
        id="order-1",
        customer_name="Lucía Gómez",
        phone="1155550000",
        order_type=order_type,
        subtotal=9800,
        delivery_fee=0,
        total=9800,
        created_by="staff-1",
    )


class TestPlanFollowup:
    """Which order types spawn which follow-up"""

    def test_single_spawns_pack_upsell_in_three_days(self, now):
        plan = plan_followup(OrderType.SINGLE, "Lucía", "11", "o1", now)
        assert plan.type == FollowupType.REVENTA_PACK
        assert plan.due_date == date(2024, 6, 15)

    @pytest.mark.parametrize("order_type", [OrderType.PACK5, OrderType.PACK10])
    def test_packs_spawn_repurchase_in_six_days(self, now, order_type):
        plan = plan_followup(order_type, "Lucía", "11", "o1", now)
        assert plan.type == FollowupType.RECOMPRA
        assert plan.due_date == date(2024, 6, 18)

    def test_other_spawns_nothing(self, now):
        assert plan_followup(OrderType.OTHER, "Lucía", "11", "o1", now) is None

    def test_task_carries_customer_contact(self, now):
        task = plan_followup(OrderType.SINGLE, "Lucía", "11", "o1", now).to_task(now)
        assert task.status == FollowupStatus.PENDING
        assert task.customer_name == "Lucía"
        assert task.customer_phone == "11"
        assert task.order_id == "o1"
        assert task.id is None


class TestFollowupScheduler:
    """Best-effort insert"""

    @pytest.mark.asyncio
    async def test_inserts_one_task(self, now):
        repo = MagicMock()
        repo.create = AsyncMock(side_effect=lambda task: task)
        scheduler = FollowupScheduler(repo)

        result = await scheduler.schedule_for_order(make_order(OrderType.PACK10), now)

        assert result.scheduled is True
        assert result.failed is False
        assert result.followup.type == FollowupType.RECOMPRA
        repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_order_skips_store(self, now):
        repo = MagicMock()
        repo.create = AsyncMock()
        scheduler = FollowupScheduler(repo)

        result = await scheduler.schedule_for_order(make_order(OrderType.OTHER), now)

        assert result.skipped is True
        assert result.scheduled is False
        repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_not_raised(self, now):
        repo = MagicMock()
        repo.create = AsyncMock(side_effect=StoreOperationError("followups.insert", "down"))
        scheduler = FollowupScheduler(repo)

        result = await scheduler.schedule_for_order(make_order(OrderType.SINGLE), now)

        assert result.scheduled is False
        assert result.failed is True
        assert "followups.insert" in result.error


class TestFollowupTask:
    def test_mark_sent_is_idempotent(self):
        task = FollowupTask(
            id="f1",
            customer_name="Ana",
            customer_phone="",
            type=FollowupType.RECOMPRA,
            due_date=date(2024, 6, 12),
        )
        assert task.mark_sent() is True
        assert task.mark_sent() is False
        assert task.status == FollowupStatus.SENT

    def test_due_and_overdue(self):
        task = FollowupTask(
            id="f1",
            customer_name="Ana",
            customer_phone="",
            type=FollowupType.RECOMPRA,
            due_date=date(2024, 6, 12),
        )
        assert task.is_due(date(2024, 6, 12)) is True
        assert task.is_overdue(date(2024, 6, 12)) is False
        assert task.is_overdue(date(2024, 6, 13)) is True
        task.mark_sent()
        assert task.is_due(date(2024, 6, 13)) is False


def test_message_templates_exist_for_every_type():
    for followup_type in FollowupType:
        assert get_message_template(followup_type).startswith("Hola")
    assert "pack de 10" in get_message_template("reventa_pack")
