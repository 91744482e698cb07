"""
SQLAlchemy implementation of FollowupRepository
"""

from typing import List, Optional

from sqlalchemy import select

from viandas.domain.entities.followup_entity import FollowupTask
from viandas.domain.repositories.followup_repository import FollowupRepository
from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType
from viandas.infrastructure.database.models import Followup
from viandas.infrastructure.repositories.session_handler import SQLAlchemyRepository


class SQLAlchemyFollowupRepository(SQLAlchemyRepository, FollowupRepository):
    """SQLAlchemy implementation of follow-up tasks"""

    async def create(self, task: FollowupTask) -> FollowupTask:
        with self._session("followups.insert") as session:
            sql_task = Followup(
                customer_name=task.customer_name,
                customer_phone=task.customer_phone or "",
                order_id=task.order_id,
                type=FollowupType(task.type).value,
                status=FollowupStatus(task.status).value,
                due_date=task.due_date,
            )
            if task.created_at is not None:
                sql_task.created_at = task.created_at
            session.add(sql_task)
            session.flush()
            session.refresh(sql_task)
            return self._map_to_domain(sql_task)

    async def find_all(
        self, status: Optional[FollowupStatus] = None
    ) -> List[FollowupTask]:
        """Tasks by due date, earliest first"""
        with self._session("followups.list") as session:
            query = select(Followup).order_by(Followup.due_date.asc(), Followup.created_at.asc())
            if status is not None:
                query = query.where(Followup.status == FollowupStatus(status).value)
            return [self._map_to_domain(row) for row in session.scalars(query)]

    async def find_by_id(self, followup_id: str) -> Optional[FollowupTask]:
        with self._session("followups.get") as session:
            sql_task = session.get(Followup, followup_id)
            return self._map_to_domain(sql_task) if sql_task else None

    async def update_status(self, followup_id: str, status: FollowupStatus) -> bool:
        with self._session("followups.update") as session:
            sql_task = session.get(Followup, followup_id)
            if not sql_task:
                return False
            sql_task.status = FollowupStatus(status).value
            return True

    @staticmethod
    def _map_to_domain(sql_task: Followup) -> FollowupTask:
        return FollowupTask(
            id=sql_task.id,
            customer_name=sql_task.customer_name,
            customer_phone=sql_task.customer_phone or "",
            type=FollowupType(sql_task.type),
            due_date=sql_task.due_date,
            status=FollowupStatus(sql_task.status),
            order_id=sql_task.order_id,
            created_at=sql_task.created_at,
        )
