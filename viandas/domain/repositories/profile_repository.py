"""
Staff profile repository interface
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..entities.profile_entity import Profile


class ProfileRepository(ABC):
    """Repository interface for staff identities"""

    @abstractmethod
    async def find_credentials(self, email: str) -> Optional[Tuple[Profile, str]]:
        """Profile and stored password hash for an email, None if unknown"""
        pass

    @abstractmethod
    async def find_by_id(self, profile_id: str) -> Optional[Profile]:
        """Get a profile by ID"""
        pass

    @abstractmethod
    async def create(self, profile: Profile, password_hash: str) -> Profile:
        """Insert a profile with its password hash"""
        pass
