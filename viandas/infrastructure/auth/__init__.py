"""
Authentication collaborator
"""

from .auth_service import AuthService
from .password_hashing import hash_password, verify_password

__all__ = ["AuthService", "hash_password", "verify_password"]
