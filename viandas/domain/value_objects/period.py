"""
Reporting period value object
"""

from enum import Enum


class Period(str, Enum):
    """Time window selector for dashboard and order list filters"""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
