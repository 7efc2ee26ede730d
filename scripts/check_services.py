#!/usr/bin/env python3
"""
Platform connectivity check
Version: 1.0
Purpose: Initialize the platform from PLATFORM_* environment variables, probe the
         database and storage services, and print a JSON report.

Exit status: 0 healthy, 1 degraded, 2 configuration error.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from platform_services.bootstrap import ServiceBootstrap
from platform_services.config.logging_config import configure_logging
from platform_services.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EXIT_HEALTHY = 0
EXIT_DEGRADED = 1
EXIT_CONFIGURATION_ERROR = 2


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.
    """
    parser = argparse.ArgumentParser(
        description='Check connectivity to the platform services',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level'
    )
    return parser.parse_args(argv)


async def run_check(bootstrap: ServiceBootstrap) -> Dict[str, Any]:
    client = bootstrap.get_platform_client()
    services = await client.check_health()
    return {
        "project_id": client.config.project_id,
        "status": "ok" if all(services.values()) else "degraded",
        "services": services,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Initialize the platform, run the health probes and report.

    Returns:
        int: Process exit status
    """
    args = parse_arguments(argv)
    configure_logging(level=args.log_level)

    bootstrap = ServiceBootstrap()
    try:
        bootstrap.initialize()
    except ConfigurationError as e:
        print(json.dumps({"status": "error", "detail": e.message, **e.details}, indent=2))
        return EXIT_CONFIGURATION_ERROR

    try:
        report = asyncio.run(run_check(bootstrap))
    finally:
        bootstrap.shutdown()

    print(json.dumps(report, indent=2))
    return EXIT_HEALTHY if report["status"] == "ok" else EXIT_DEGRADED


if __name__ == '__main__':
    sys.exit(main())
