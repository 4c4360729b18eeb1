"""Check the model provider and a running gateway; exit 1 if either is down."""

from __future__ import annotations

import asyncio
import sys

from stylist.config.settings import get_settings
from stylist.integrations import exit_status, format_report, run_all_checks
from stylist.monitoring.logging import configure_logging


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    results = asyncio.run(run_all_checks(settings))
    print(format_report(results))
    return exit_status(results)


if __name__ == "__main__":
    sys.exit(main())
