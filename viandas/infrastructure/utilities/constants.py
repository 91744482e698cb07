"""
Infrastructure constants for the Viandas CRM

Infrastructure settings: pools, log files, caching and password hashing.
Business rules live in viandas.domain.business_rules.
"""

from typing import Final


# Database configuration constants
class DatabaseSettings:
    """Database connection and pool configuration"""

    POOL_RECYCLE_SECONDS: Final[int] = 3600  # 1 hour

    # Production settings
    PRODUCTION_POOL_SIZE: Final[int] = 10
    PRODUCTION_MAX_OVERFLOW: Final[int] = 20

    # Development settings
    DEVELOPMENT_POOL_SIZE: Final[int] = 5
    DEVELOPMENT_MAX_OVERFLOW: Final[int] = 10

    CONNECTION_TIMEOUT_SECONDS: Final[int] = 30


# Logging configuration constants
class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10


class FileSettings:
    """Log file names"""

    MAIN_LOG_FILE: Final[str] = "viandas.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
    JSON_LOG_FILE: Final[str] = "viandas.json.log"


class CacheSettings:
    """Cache TTL settings"""

    DEFAULT_TTL_SECONDS: Final[int] = 300  # 5 minutes


class PasswordHashing:
    """PBKDF2 parameters for staff passwords"""

    ALGORITHM: Final[str] = "sha256"
    ITERATIONS: Final[int] = 260_000
    SALT_BYTES: Final[int] = 16
    SCHEME: Final[str] = "pbkdf2_sha256"
