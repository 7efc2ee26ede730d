"""
Configuration Package Initialization
Version: 1.0
Purpose: Re-exports the platform configuration model and logging setup.

Configuration is never loaded at import time; the bootstrap loads it when
``initialize`` runs.
"""

from platform_services.config.settings import PlatformConfiguration, load_configuration
from platform_services.config.logging_config import configure_logging

__all__ = [
    'PlatformConfiguration',
    'load_configuration',
    'configure_logging',
]
