"""
Staff authentication tests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from viandas.domain.entities.profile_entity import Profile, Role
from viandas.infrastructure.auth.auth_service import AuthService
from viandas.infrastructure.auth.password_hashing import hash_password, verify_password
from viandas.infrastructure.utilities.exceptions import (
    AuthenticationError,
    NotAuthenticatedError,
    PermissionDeniedError,
    ValidationError,
)


class TestPasswordHashing:
    def test_round_trip(self):
        encoded = hash_password("correct horse", iterations=1000)
        assert encoded.startswith("pbkdf2_sha256$1000$")
        assert verify_password("correct horse", encoded) is True
        assert verify_password("wrong horse", encoded) is False

    def test_salted(self):
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    @pytest.mark.parametrize("encoded", ["", "garbage", "md5$1$aa$bb", "pbkdf2_sha256$x$zz$00", None])
    def test_malformed_hash_never_matches(self, encoded):
        assert verify_password("anything", encoded) is False


def make_service(profile=None, password="secret-pass"):
    repo = MagicMock()
    if profile is None:
        repo.find_credentials = AsyncMock(return_value=None)
    else:
        repo.find_credentials = AsyncMock(
            return_value=(profile, hash_password(password, iterations=1000))
        )
    repo.create = AsyncMock(side_effect=lambda p, h: Profile(id="new", email=p.email, role=p.role))
    return AuthService(repo), repo


class TestAuthService:
    @pytest.mark.asyncio
    async def test_sign_in_and_out(self):
        staff = Profile(id="p1", email="ana@viandas.test")
        service, _ = make_service(staff)

        assert await service.sign_in("ana@viandas.test", "secret-pass") == staff
        assert service.current_user == staff
        assert service.is_admin is False

        service.sign_out()
        assert service.current_user is None

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        service, _ = make_service(Profile(id="p1", email="ana@viandas.test"))
        with pytest.raises(AuthenticationError):
            await service.sign_in("ana@viandas.test", "nope")
        assert service.current_user is None

    @pytest.mark.asyncio
    async def test_unknown_email_and_blank_fields(self):
        service, _ = make_service()
        with pytest.raises(AuthenticationError):
            await service.sign_in("x@viandas.test", "secret-pass")
        with pytest.raises(AuthenticationError):
            await service.sign_in("", "")

    @pytest.mark.asyncio
    async def test_require_admin(self):
        service, _ = make_service(Profile(id="p1", email="ana@viandas.test"))
        with pytest.raises(NotAuthenticatedError):
            service.require_admin("delete order")

        await service.sign_in("ana@viandas.test", "secret-pass")
        with pytest.raises(PermissionDeniedError) as exc_info:
            service.require_admin("delete order")
        assert exc_info.value.action == "delete order"

    @pytest.mark.asyncio
    async def test_admin_passes(self):
        admin = Profile(id="p2", email="jefa@viandas.test", role=Role.ADMIN)
        service, _ = make_service(admin)
        await service.sign_in("jefa@viandas.test", "secret-pass")
        assert service.require_admin("delete order") == admin

    @pytest.mark.asyncio
    async def test_register_validates_and_hashes(self):
        service, repo = make_service()

        with pytest.raises(ValidationError):
            await service.register("no-at-sign", "long-enough")
        with pytest.raises(ValidationError):
            await service.register("ok@viandas.test", "short")

        profile = await service.register(" OK@Viandas.test ", "long-enough", Role.ADMIN)
        assert profile.email == "ok@viandas.test"
        assert profile.role == Role.ADMIN
        stored_hash = repo.create.call_args.args[1]
        assert verify_password("long-enough", stored_hash)
