"""
Application context wiring
"""

from .dependency_injection import DependencyContainer

__all__ = ["DependencyContainer"]
