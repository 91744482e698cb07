"""
Session-based staff authentication

Holds the identity of the staff member using this application context. The
business rules only read ``current_user.id`` (stamped on new orders) and
``is_admin`` (gates destructive actions).
"""

import logging
from typing import Optional

from viandas.domain.business_rules import ValidationLimits
from viandas.domain.entities.profile_entity import Profile, Role
from viandas.domain.repositories.profile_repository import ProfileRepository
from viandas.infrastructure.auth.password_hashing import hash_password, verify_password
from viandas.infrastructure.utilities.exceptions import (
    AuthenticationError,
    NotAuthenticatedError,
    PermissionDeniedError,
    ValidationError,
)


class AuthService:
    """Sign-in session for one staff member at a time"""

    def __init__(self, profile_repository: ProfileRepository):
        self._profile_repository = profile_repository
        self._current_user: Optional[Profile] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def current_user(self) -> Optional[Profile]:
        return self._current_user

    @property
    def is_admin(self) -> bool:
        return self._current_user is not None and self._current_user.is_admin

    async def sign_in(self, email: str, password: str) -> Profile:
        """Verify credentials and open the session"""
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        credentials = await self._profile_repository.find_credentials(email)
        if credentials is None or not verify_password(password, credentials[1]):
            self._logger.warning("🔒 SIGN-IN REJECTED for %s", email)
            raise AuthenticationError()

        self._current_user = credentials[0]
        self._logger.info(
            "🔓 SIGNED IN: %s (%s)", self._current_user.email, self._current_user.role.value
        )
        return self._current_user

    def sign_out(self) -> None:
        """Close the session"""
        if self._current_user is not None:
            self._logger.info("👋 SIGNED OUT: %s", self._current_user.email)
        self._current_user = None

    def require_user(self) -> Profile:
        """Signed-in profile or NotAuthenticatedError"""
        if self._current_user is None:
            raise NotAuthenticatedError()
        return self._current_user

    def require_admin(self, action: str) -> Profile:
        """Signed-in admin profile or an error naming the refused action"""
        user = self.require_user()
        if not user.is_admin:
            self._logger.warning("⛔ %s refused for %s: not admin", action, user.email)
            raise PermissionDeniedError(action)
        return user

    async def register(self, email: str, password: str, role: Role = Role.STAFF) -> Profile:
        """Create a staff profile (used by the provisioning script)"""
        if not email or "@" not in email:
            raise ValidationError("A valid email is required", field="email")
        if len(password or "") < ValidationLimits.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {ValidationLimits.MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        profile = Profile(id="", email=email.strip().lower(), role=Role(role))
        return await self._profile_repository.create(profile, hash_password(password))
