"""
Customer lifecycle status value object
"""

from enum import Enum


class CustomerStatus(str, Enum):
    """Recency-based engagement tier"""

    ACTIVE = "active"
    WARMING = "warming"
    INACTIVE = "inactive"
