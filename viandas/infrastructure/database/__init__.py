"""
Database Infrastructure

Contains SQLAlchemy models and engine/session management.
"""

from .models import Base
from .operations import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
