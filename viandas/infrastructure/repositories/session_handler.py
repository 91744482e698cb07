"""
Context manager for handling database sessions and exceptions.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from viandas.infrastructure.database.operations import DatabaseManager
from viandas.infrastructure.utilities.exceptions import StoreOperationError

logger = logging.getLogger(__name__)


@contextmanager
def managed_session(
    database: DatabaseManager, operation: str
) -> Generator[Session, None, None]:
    """
    Context manager for a unit of work against the record store.

    Commits on success and rolls back on failure. SQLAlchemy errors are
    re-raised as StoreOperationError naming the operation; nothing is retried.

    Yields:
        Session: The SQLAlchemy session object.
    """
    session = database.get_session()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        logger.error("💥 DATABASE ERROR during %s: %s", operation, e)
        session.rollback()
        raise StoreOperationError(operation, str(e)) from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class SQLAlchemyRepository:
    """Shared plumbing for the SQLAlchemy repositories"""

    def __init__(self, database: DatabaseManager):
        self._database = database
        self._logger = logging.getLogger(self.__class__.__name__)

    def _session(self, operation: str):
        return managed_session(self._database, operation)
