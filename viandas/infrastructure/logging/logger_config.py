"""
Logging Configuration

Console, rotating file and JSON handlers for the standard library loggers,
plus structlog for structured loggers.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path

import structlog
from pythonjsonlogger import jsonlogger

from viandas.infrastructure.utilities.constants import FileSettings, LoggingSettings


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.colors.get(record.levelname, self.colors['RESET'])
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        record.name = f"\033[94m{record.name}\033[0m"  # Blue
        return super().format(record)


def build_json_formatter() -> jsonlogger.JsonFormatter:
    """JSON formatter carrying module/function/line context"""
    return jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(message)s",
        rename_fields={"levelname": "level", "name": "logger", "asctime": "timestamp"},
    )


@dataclass
class LoggingConfigOptions:
    """Dataclass for logging configuration options"""
    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_console: bool = True
    enable_file: bool = True
    enable_json: bool = True
    colored_console: bool = True
    max_file_size: int = LoggingSettings.MAX_LOG_FILE_SIZE
    backup_count: int = LoggingSettings.MAIN_LOG_BACKUP_COUNT


class LoggingConfig:
    """Logging configuration"""

    def __init__(self, options: LoggingConfigOptions):
        self.options = options

        if self.options.enable_file or self.options.enable_json:
            Path(self.options.log_dir).mkdir(parents=True, exist_ok=True)

        self._configure_structlog()

    def __repr__(self):
        return f"LoggingConfig(options={self.options})"

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer()
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def setup_logging(self):
        """Setup logging handlers on the root logger"""
        level = getattr(logging, self.options.log_level.upper())

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if self.options.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            formatter_class = (
                ColoredFormatter if self.options.colored_console else logging.Formatter
            )
            console_handler.setFormatter(
                formatter_class(
                    fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'
                )
            )
            root_logger.addHandler(console_handler)

        if self.options.enable_file:
            log_dir = Path(self.options.log_dir)
            app_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

            app_handler = logging.handlers.RotatingFileHandler(
                log_dir / FileSettings.MAIN_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            app_handler.setLevel(logging.INFO)
            app_handler.setFormatter(app_formatter)
            root_logger.addHandler(app_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                log_dir / FileSettings.ERROR_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=LoggingSettings.ERROR_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(app_formatter)
            root_logger.addHandler(error_handler)

        if self.options.enable_json:
            json_handler = logging.handlers.RotatingFileHandler(
                Path(self.options.log_dir) / FileSettings.JSON_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            json_handler.setLevel(logging.INFO)
            json_handler.setFormatter(build_json_formatter())
            root_logger.addHandler(json_handler)

        self._configure_external_loggers()

        logger = logging.getLogger(__name__)
        logger.info(
            "✅ Logging configured - Level: %s, Console: %s, File: %s, JSON: %s",
            self.options.log_level,
            self.options.enable_console,
            self.options.enable_file,
            self.options.enable_json
        )

    def _configure_external_loggers(self):
        """Quiet down chatty third-party loggers"""
        logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
        logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)


def setup_logging(options: LoggingConfigOptions):
    """Setup logging using the LoggingConfig class"""
    config = LoggingConfig(options)
    config.setup_logging()
    return config


def options_from_settings(settings) -> LoggingConfigOptions:
    """Derive logging options from application settings"""
    return LoggingConfigOptions(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        colored_console=settings.environment != "production",
    )


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
