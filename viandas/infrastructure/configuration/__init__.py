"""
Configuration Infrastructure

Contains application configuration management.
"""

from .config import Settings, get_config

__all__ = ["get_config", "Settings"]
