"""
Database engine and session management

The record store is whatever SQLAlchemy URL the settings point at: a
Supabase Postgres connection string in production, SQLite locally and in tests.
"""

import logging
import time
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from viandas.infrastructure.configuration.config import get_config
from viandas.infrastructure.database.models import Base
from viandas.infrastructure.utilities.constants import DatabaseSettings
from viandas.infrastructure.utilities.exceptions import DatabaseError

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 1000


class DatabaseManager:
    """Owns the engine and session factory for one application context"""

    def __init__(self, config: Optional[Any] = None, database_url: Optional[str] = None):
        self.config = config or get_config()
        self._database_url = database_url or self.config.effective_database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def database_url(self) -> str:
        return self._database_url

    def get_engine(self) -> Engine:
        """Get database engine with proper configuration"""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create database engine with environment-specific settings"""
        database_url = self._database_url

        if database_url.startswith("sqlite"):
            engine_kwargs = {
                "poolclass": StaticPool,
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": DatabaseSettings.CONNECTION_TIMEOUT_SECONDS,
                },
            }
        else:
            if self.config.environment == "production":
                pool_size = DatabaseSettings.PRODUCTION_POOL_SIZE
                max_overflow = DatabaseSettings.PRODUCTION_MAX_OVERFLOW
            else:
                pool_size = DatabaseSettings.DEVELOPMENT_POOL_SIZE
                max_overflow = DatabaseSettings.DEVELOPMENT_MAX_OVERFLOW
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_recycle": DatabaseSettings.POOL_RECYCLE_SECONDS,
                "pool_pre_ping": True,
            }

        engine = create_engine(database_url, **engine_kwargs)
        self._setup_engine_events(engine)

        self.logger.info("🔌 DATABASE ENGINE CREATED: %s", engine.url.render_as_string(hide_password=True))
        return engine

    def _setup_engine_events(self, engine: Engine) -> None:
        """Log slow statements"""

        @event.listens_for(engine, "before_cursor_execute")
        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            context._query_start_time = time.time()

        @event.listens_for(engine, "after_cursor_execute")
        def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            total_time_ms = (time.time() - context._query_start_time) * 1000
            if total_time_ms > SLOW_QUERY_THRESHOLD_MS:
                self.logger.warning(
                    "Slow query detected",
                    extra={
                        "query_time_ms": total_time_ms,
                        "statement": statement[:200] + "..." if len(statement) > 200 else statement,
                    }
                )

    def get_session(self) -> Session:
        """Open a new session"""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.get_engine(), autoflush=False, expire_on_commit=False
            )
        return self._session_factory()

    def create_tables(self) -> None:
        """Create all tables that do not exist yet"""
        try:
            Base.metadata.create_all(self.get_engine())
        except SQLAlchemyError as e:
            self.logger.error("💥 TABLE CREATION FAILED: %s", e)
            raise DatabaseError(f"Table creation failed: {e}", operation="create_tables") from e
        self.logger.info("📋 Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

    def check_connection(self) -> bool:
        """Round-trip a trivial statement"""
        try:
            with self.get_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            self.logger.error("💥 DATABASE CONNECTION CHECK FAILED: %s", e)
            return False

    def dispose(self) -> None:
        """Release pooled connections"""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
