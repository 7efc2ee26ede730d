# Version: 1.0
# Purpose: Logging configuration with plain-text output for development and JSON output for production

import json
import logging
import logging.config
import os
import socket
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE_NAME = 'platform-services'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class JsonFormatter(logging.Formatter):
    """JSON formatter for log shipping"""

    def __init__(self, environment: str = 'production'):
        super().__init__()
        self.hostname = socket.gethostname()
        self.environment = environment

    def format(self, record):
        """Format log record as JSON with additional context"""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(LOG_DATE_FORMAT),
            'level': record.levelname,
            'service': SERVICE_NAME,
            'name': record.name,
            'message': record.getMessage(),
            'trace_id': getattr(record, 'trace_id', None) or str(uuid.uuid4()),
            'environment': getattr(record, 'environment', self.environment),
            'host': self.hostname,
            'thread': record.threadName
        }

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add custom fields if present
        if hasattr(record, 'data'):
            log_entry['data'] = record.data

        return json.dumps(log_entry, default=str)


def get_file_handler_config(log_dir: str, filename: str, formatter: str) -> Dict[str, Any]:
    """Generate configuration for a rotating file handler"""
    os.makedirs(log_dir, exist_ok=True)
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': os.path.join(log_dir, filename),
        'maxBytes': 10485760,  # 10MB
        'backupCount': 10,
        'encoding': 'utf-8',
        'formatter': formatter,
        'mode': 'a',
    }


def get_log_config(
    environment: str = 'development',
    level: str = 'INFO',
    log_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a dictConfig mapping.

    Args:
        environment: Deployment environment; production switches to JSON output
        level: Root log level name
        log_dir: Optional directory for a rotating app.log

    Returns:
        Dict suitable for logging.config.dictConfig
    """
    formatter = 'json' if environment == 'production' else 'standard'

    handlers: Dict[str, Any] = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': formatter,
            'level': level
        }
    }
    if log_dir:
        handlers['file'] = get_file_handler_config(log_dir, 'app.log', formatter)

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': LOG_FORMAT,
                'datefmt': LOG_DATE_FORMAT
            },
            'json': {
                '()': JsonFormatter,
                'environment': environment
            }
        },
        'handlers': handlers,
        'loggers': {
            '': {  # Root logger
                'handlers': list(handlers),
                'level': level,
            },
            'platform_services': {
                'level': level,
                'propagate': True
            }
        }
    }


def configure_logging(
    environment: str = 'development',
    level: str = 'INFO',
    log_dir: Optional[str] = None,
) -> None:
    """Configure logging with environment-specific settings"""
    logging.config.dictConfig(get_log_config(environment, level, log_dir))
    logging.getLogger(__name__).debug("Logging configured for %s", environment)


__all__ = [
    'JsonFormatter',
    'get_log_config',
    'configure_logging',
]
