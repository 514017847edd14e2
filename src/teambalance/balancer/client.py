"""Reasoning service clients used as the balancing step."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from teambalance.balancer.request import BalanceRequest
from teambalance.config.settings import EngineSettings
from teambalance.errors import EngineUnavailableError, MalformedResponseError


logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class TeamBalancer(Protocol):
    """Anything that turns a balance request into the service's raw text reply."""

    async def __call__(self, request: BalanceRequest) -> str:
        ...


class AnthropicBalancer:
    """Calls the Anthropic Messages API over httpx.

    Failures reaching the service raise EngineUnavailableError. There is no
    retry here; callers decide whether to trigger generation again.
    """

    def __init__(
        self,
        settings: EngineSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._transport = transport

    def _payload(self, request: BalanceRequest) -> dict[str, Any]:
        return {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "messages": request.to_messages(),
        }

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.settings.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    async def __call__(self, request: BalanceRequest) -> str:
        if not self.settings.api_key:
            raise EngineUnavailableError("Reasoning service API key is not configured")

        logger.info(
            "Requesting balance for %s players from %s", request.roster_size, self.settings.model
        )
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                resp = await client.post("/v1/messages", json=self._payload(request), headers=self._headers())
                resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise EngineUnavailableError("Reasoning service timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise EngineUnavailableError(
                f"Reasoning service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TransportError as exc:
            raise EngineUnavailableError(f"Reasoning service unreachable: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise MalformedResponseError("Reasoning service returned a non-JSON envelope", resp.text) from exc
        return _extract_text(body)


def _extract_text(body: Any) -> str:
    content = body.get("content") if isinstance(body, dict) else None
    if isinstance(content, list):
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
                return block["text"]
    raise MalformedResponseError("No text response from reasoning service")
