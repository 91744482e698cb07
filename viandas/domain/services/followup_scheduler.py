"""
Follow-up Scheduler

Decides whether a new order spawns a follow-up task and inserts it. Runs
once, synchronously, right after the order is saved. A failure to insert the
task is reported in the returned result and never undoes the order.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from viandas.domain.business_rules import FollowupSettings
from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.entities.order_entity import Order
from viandas.domain.repositories.errors import RepositoryError
from viandas.domain.repositories.followup_repository import FollowupRepository
from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType
from viandas.domain.value_objects.order_type import OrderType


@dataclass(frozen=True)
class FollowupRule:
    """Which follow-up an order type spawns and when it is due"""

    type: FollowupType
    offset_days: int


FOLLOWUP_RULES: dict[OrderType, FollowupRule] = {
    OrderType.SINGLE: FollowupRule(
        FollowupType.REVENTA_PACK, FollowupSettings.REVENTA_PACK_OFFSET_DAYS
    ),
    OrderType.PACK5: FollowupRule(
        FollowupType.RECOMPRA, FollowupSettings.RECOMPRA_OFFSET_DAYS
    ),
    OrderType.PACK10: FollowupRule(
        FollowupType.RECOMPRA, FollowupSettings.RECOMPRA_OFFSET_DAYS
    ),
}

MESSAGE_TEMPLATES: dict[FollowupType, str] = {
    FollowupType.REVENTA_PACK: (
        "Hola! 🙌\n"
        "Te escribo porque muchos clientes están resolviendo la semana con el "
        "pack de 10 comidas, que es más práctico y conveniente que pedir suelto.\n"
        "Si querés, esta semana lo podemos armar así 💪"
    ),
    FollowupType.RECOMPRA: (
        "Hola! 👋\n"
        "Te aviso que ya estamos tomando pedidos para la próxima semana.\n"
        "Si querés repetir el pack, avisame y lo dejamos reservado."
    ),
}


def get_message_template(followup_type: FollowupType) -> str:
    """Canned outreach message for a follow-up type"""
    return MESSAGE_TEMPLATES[FollowupType(followup_type)]


@dataclass(frozen=True)
class FollowupPlan:
    """A follow-up the scheduler decided to create"""

    type: FollowupType
    due_date: date
    customer_name: str
    customer_phone: str
    order_id: Optional[str]

    def to_task(self, created_at: datetime) -> FollowupTask:
        return FollowupTask(
            id=None,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            type=self.type,
            due_date=self.due_date,
            status=FollowupStatus.PENDING,
            order_id=self.order_id,
            created_at=created_at,
        )


def plan_followup(
    order_type: OrderType,
    customer_name: str,
    customer_phone: str,
    order_id: Optional[str],
    now: datetime,
) -> Optional[FollowupPlan]:
    """Pure scheduling decision; None when the order type spawns nothing"""
    rule = FOLLOWUP_RULES.get(OrderType(order_type))
    if rule is None:
        return None
    return FollowupPlan(
        type=rule.type,
        due_date=now.date() + timedelta(days=rule.offset_days),
        customer_name=customer_name,
        customer_phone=customer_phone,
        order_id=order_id,
    )


@dataclass
class FollowupSchedulingResult:
    """Outcome of the best-effort follow-up insert"""

    scheduled: bool
    followup: Optional[FollowupTask] = None
    skipped: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class FollowupScheduler:
    """Inserts the follow-up task an order calls for"""

    def __init__(self, followup_repository: FollowupRepository):
        self._followup_repository = followup_repository
        self._logger = logging.getLogger(self.__class__.__name__)

    async def schedule_for_order(
        self, order: Order, now: datetime
    ) -> FollowupSchedulingResult:
        """Schedule the follow-up for a freshly created order"""
        plan = plan_followup(
            order.order_type, order.customer_name, order.phone, order.id, now
        )
        if plan is None:
            self._logger.info(
                "⏭️ NO FOLLOW-UP for %s order %s", order.order_type.value, order.id
            )
            return FollowupSchedulingResult(scheduled=False, skipped=True)

        try:
            task = await self._followup_repository.create(plan.to_task(now))
        except RepositoryError as e:
            self._logger.error(
                "💥 FOLLOW-UP NOT SCHEDULED for order %s: %s", order.id, e
            )
            return FollowupSchedulingResult(scheduled=False, error=str(e))

        self._logger.info(
            "📅 FOLLOW-UP SCHEDULED: %s for order %s due %s",
            task.type.value,
            order.id,
            task.due_date.isoformat(),
        )
        return FollowupSchedulingResult(scheduled=True, followup=task)
