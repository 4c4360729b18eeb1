"""Connectivity checks for the model provider and a running gateway."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable

import httpx

from stylist.config.settings import Settings, get_settings
from stylist.providers import build_provider


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # pragma: no cover - any failure is reported, not raised
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_provider(settings: Settings | None = None) -> IntegrationCheckResult:
    """Ping the configured model provider and return the result."""

    settings = settings or get_settings()

    async def _ping() -> bool:
        settings.validate()
        provider = build_provider(settings)
        try:
            return await provider.ping()
        finally:
            await provider.close()

    return await _run_check(
        name=f"Provider ({settings.provider})",
        factory=_ping,
        success_message="Model provider is reachable.",
    )


async def check_gateway(settings: Settings | None = None) -> IntegrationCheckResult:
    """Call the gateway health endpoint."""

    settings = settings or get_settings()

    async def _ping() -> bool:
        async with httpx.AsyncClient(base_url=settings.gateway_url, timeout=10.0) as client:
            response = await client.get("/health")
        return response.status_code == 200 and response.json().get("status") == "ok"

    return await _run_check(
        name="Gateway",
        factory=_ping,
        success_message=f"Gateway at {settings.gateway_url} is healthy.",
    )


async def run_all_checks(settings: Settings | None = None) -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    settings = settings or get_settings()
    return list(await asyncio.gather(check_provider(settings), check_gateway(settings)))


def format_report(results: Iterable[IntegrationCheckResult]) -> str:
    """Render one ``[ok]``/``[fail]`` line per check plus a summary line."""

    results = list(results)
    lines = [f"[{'ok' if r.success else 'fail'}] {r.name}: {r.message}" for r in results]
    failed = sum(1 for r in results if not r.success)
    lines.append(f"{len(results) - failed}/{len(results)} checks passed.")
    return "\n".join(lines)


def exit_status(results: Iterable[IntegrationCheckResult]) -> int:
    """Return ``1`` when any check failed so shell callers can branch on it."""

    return 0 if all(result.success for result in results) else 1
