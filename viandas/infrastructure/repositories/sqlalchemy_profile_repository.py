"""
SQLAlchemy implementation of ProfileRepository
"""

from typing import Optional, Tuple

from sqlalchemy import func, select

from viandas.domain.entities.profile_entity import Profile as DomainProfile
from viandas.domain.entities.profile_entity import Role
from viandas.domain.repositories.profile_repository import ProfileRepository
from viandas.infrastructure.database.models import Profile
from viandas.infrastructure.repositories.session_handler import SQLAlchemyRepository


class SQLAlchemyProfileRepository(SQLAlchemyRepository, ProfileRepository):
    """Staff identities stored next to the business data"""

    async def find_credentials(self, email: str) -> Optional[Tuple[DomainProfile, str]]:
        with self._session("profiles.get") as session:
            query = select(Profile).where(func.lower(Profile.email) == email.strip().lower())
            sql_profile = session.scalars(query).first()
            if not sql_profile:
                return None
            return self._map_to_domain(sql_profile), sql_profile.password_hash

    async def find_by_id(self, profile_id: str) -> Optional[DomainProfile]:
        with self._session("profiles.get") as session:
            sql_profile = session.get(Profile, profile_id)
            return self._map_to_domain(sql_profile) if sql_profile else None

    async def create(self, profile: DomainProfile, password_hash: str) -> DomainProfile:
        with self._session("profiles.insert") as session:
            sql_profile = Profile(
                email=profile.email.strip().lower(),
                password_hash=password_hash,
                role=Role(profile.role).value,
            )
            if profile.id:
                sql_profile.id = profile.id
            session.add(sql_profile)
            session.flush()
            self._logger.info("👤 PROFILE CREATED: %s (%s)", sql_profile.email, sql_profile.role)
            return self._map_to_domain(sql_profile)

    @staticmethod
    def _map_to_domain(sql_profile: Profile) -> DomainProfile:
        return DomainProfile(
            id=sql_profile.id, email=sql_profile.email, role=Role(sql_profile.role)
        )
