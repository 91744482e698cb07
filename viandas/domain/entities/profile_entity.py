"""
Staff profile domain entity
"""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Staff role"""

    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class Profile:
    """Signed-in staff member"""

    id: str
    email: str
    role: Role = Role.STAFF

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
