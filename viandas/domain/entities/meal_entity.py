"""
Meal domain entity
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Meal:
    """A dish in the catalog, referenced by order line items"""

    id: Optional[str]
    name: str
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        return self.name
