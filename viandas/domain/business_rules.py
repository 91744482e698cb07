"""
Business rule constants for the Viandas CRM
"""

from typing import Final


class PriceDefaults:
    """Default price table (whole pesos)"""

    SINGLE: Final[float] = 9800
    PACK5: Final[float] = 49000
    PACK10: Final[float] = 92000
    DELIVERY: Final[float] = 3300


class LifecycleSettings:
    """Customer recency tiers, in calendar days since the last order"""

    ACTIVE_MAX_DAYS: Final[int] = 14
    WARMING_MAX_DAYS: Final[int] = 30


class FollowupSettings:
    """Follow-up due date offsets, in days after the order"""

    REVENTA_PACK_OFFSET_DAYS: Final[int] = 3
    RECOMPRA_OFFSET_DAYS: Final[int] = 6


class DashboardSettings:
    """Dashboard limits"""

    TOP_MEALS_LIMIT: Final[int] = 5


class SearchSettings:
    """Customer autocomplete settings"""

    CUSTOMER_SEARCH_LIMIT: Final[int] = 5


class ValidationLimits:
    """Field length limits"""

    MAX_NAME_LENGTH: Final[int] = 100
    MAX_NOTES_LENGTH: Final[int] = 1000
    MIN_PASSWORD_LENGTH: Final[int] = 8
