"""
Follow-up task domain entity
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from viandas.domain.value_objects.followup_type import FollowupStatus, FollowupType


@dataclass
class FollowupTask:
    """A scheduled outreach reminder spawned by an order"""

    id: Optional[str]
    customer_name: str
    customer_phone: str
    type: FollowupType
    due_date: date
    status: FollowupStatus = FollowupStatus.PENDING
    order_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == FollowupStatus.PENDING

    def mark_sent(self) -> bool:
        """Move to ``sent``. Returns False when the task was already sent."""
        if self.status == FollowupStatus.SENT:
            return False
        self.status = FollowupStatus.SENT
        return True

    def is_due(self, today: date) -> bool:
        """Pending and due today or earlier"""
        return self.is_pending and self.due_date <= today

    def is_overdue(self, today: date) -> bool:
        """Pending and due before today"""
        return self.is_pending and self.due_date < today
