"""
Logging setup for warehouse-ddl.

Rendered DDL goes to stdout, so log output is always written to stderr and,
when ``log_file`` is set, to a rotating file. Executors attach the statement
they ran as ``extra={"sql": ...}``; the JSON formatter emits it as its own
field.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DRIVER_LOGGERS = (
    'snowflake.connector',
    'sqlalchemy.engine',
    'redshift_connector',
    'teradatasql',
    'urllib3.connectionpool',
)


class LoggingConfig(BaseModel):
    """Logging settings, read from ``LOGGING__*`` environment variables."""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="Root logging level")
    console_level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Text record format, unused with json_output"
    )
    date_format: str = Field(default="%Y-%m-%d %H:%M:%S")
    json_output: bool = Field(default=False)

    log_file: Optional[str] = Field(default=None, description="Rotating log file, e.g. logs/warehouse_ddl.log")
    max_file_size_mb: int = Field(default=10, ge=1, le=1000)
    backup_count: int = Field(default=5, ge=1, le=50)

    component_levels: Dict[str, str] = Field(default_factory=dict)
    quiet_drivers: bool = Field(default=True)
    driver_loggers: List[str] = Field(default_factory=lambda: list(DRIVER_LOGGERS))


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        sql = getattr(record, 'sql', None)
        if sql is not None:
            entry['sql'] = sql
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _level(name: str) -> int:
    return getattr(logging, name.upper())


def _handlers(config: LoggingConfig) -> List[logging.Handler]:
    if config.json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=config.format, datefmt=config.date_format)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(_level(config.console_level))
    handlers = [console]

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        rotating.setLevel(_level(config.level))
        handlers.append(rotating)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the root logger for a command line run.

    Args:
        config: Logging settings, ``LoggingConfig()`` when omitted.

    Returns:
        Root logger instance
    """
    config = config or LoggingConfig()

    root_logger = logging.getLogger()
    # repeated runs in one process must not stack handlers
    root_logger.handlers.clear()
    root_logger.setLevel(_level(config.level))
    for handler in _handlers(config):
        root_logger.addHandler(handler)

    for logger_name, level in config.component_levels.items():
        logging.getLogger(logger_name).setLevel(_level(level))
    if config.quiet_drivers:
        for logger_name in config.driver_loggers:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
