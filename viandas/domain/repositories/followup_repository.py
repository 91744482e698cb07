"""
Follow-up repository interface
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.followup_entity import FollowupTask
from ..value_objects.followup_type import FollowupStatus


class FollowupRepository(ABC):
    """Repository interface for follow-up tasks"""

    @abstractmethod
    async def create(self, task: FollowupTask) -> FollowupTask:
        """Insert a follow-up task"""
        pass

    @abstractmethod
    async def find_all(
        self, status: Optional[FollowupStatus] = None
    ) -> List[FollowupTask]:
        """Tasks ordered by due date, earliest first"""
        pass

    @abstractmethod
    async def find_by_id(self, followup_id: str) -> Optional[FollowupTask]:
        """Get a task by ID"""
        pass

    @abstractmethod
    async def update_status(self, followup_id: str, status: FollowupStatus) -> bool:
        """Set a task's status; False when the task does not exist"""
        pass
