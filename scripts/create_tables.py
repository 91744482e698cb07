#!/usr/bin/env python3
"""
Create the record store tables for the Viandas CRM.
"""

import logging
import sys

from dotenv import load_dotenv

from viandas.infrastructure.configuration.config import get_config
from viandas.infrastructure.database.operations import DatabaseManager
from viandas.infrastructure.logging.logger_config import (
    options_from_settings,
    setup_logging,
)
from viandas.infrastructure.utilities.exceptions import DatabaseError, ErrorReporter

logger = logging.getLogger(__name__)


def create_tables() -> int:
    """Create all database tables"""
    config = get_config()
    setup_logging(options_from_settings(config))

    database = DatabaseManager(config)
    if not database.check_connection():
        logger.error("❌ Cannot reach the %s database", config.environment)
        database.dispose()
        return 1

    logger.info("🗄️ Creating database tables...")
    try:
        database.create_tables()
    except DatabaseError as e:
        ErrorReporter.report_critical_error(e)
        return 1
    finally:
        database.dispose()

    logger.info("✅ Database tables created successfully!")
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(create_tables())
