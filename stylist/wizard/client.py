"""HTTP client for the gateway endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stylist.api.schemas import OutfitRequest

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """Raised when a gateway call fails or answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GatewayClient:
    """Posts wizard input to the gateway, one attempt per call."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def _post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(endpoint, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise GatewayError(
                f"Gateway returned {exc.response.status_code} for {endpoint}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise GatewayError(f"Gateway request to {endpoint} failed: {exc}") from exc
        except ValueError as exc:
            raise GatewayError(f"Gateway returned invalid JSON for {endpoint}") from exc
        if not isinstance(payload, dict):
            raise GatewayError(f"Gateway returned a non-object body for {endpoint}")
        return payload

    async def generate_outfit(self, request: OutfitRequest) -> dict[str, Any]:
        body = request.model_dump(by_alias=True, exclude_none=True)
        return await self._post("/api/generate-outfit", body)

    async def generate_image(self, description: str) -> str:
        payload = await self._post("/api/generate-image", {"description": description})
        image_url = payload.get("imageUrl")
        if not image_url:
            raise GatewayError("Gateway response did not include imageUrl")
        return image_url
