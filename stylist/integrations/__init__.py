"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_gateway,
    check_provider,
    exit_status,
    format_report,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_gateway",
    "check_provider",
    "exit_status",
    "format_report",
    "run_all_checks",
]
