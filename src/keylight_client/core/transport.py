from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import aiohttp

_LOGGER = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


@dataclass
class HttpResponse:
    """Uniform response envelope returned by every transport call."""

    ok: bool
    status: int
    data: Any = None


class Transport(Protocol):
    """HTTP verbs the device client depends on."""

    async def get(self, url: str) -> HttpResponse:
        ...

    async def put(self, url: str, body: Any) -> HttpResponse:
        ...

    async def post(self, url: str, body: Any = None) -> HttpResponse:
        ...


class AiohttpTransport:
    """Transport backed by aiohttp, one short-lived session per request.

    Non-success statuses are reported through ``HttpResponse.ok`` rather than
    raised. Network failures, timeouts and undecodable JSON bodies propagate
    as the underlying aiohttp/asyncio exceptions.
    """

    def __init__(self, timeout_seconds: float = 2.0) -> None:
        self._timeout = timeout_seconds

    async def get(self, url: str) -> HttpResponse:
        return await self._request("GET", url)

    async def put(self, url: str, body: Any) -> HttpResponse:
        return await self._request("PUT", url, body)

    async def post(self, url: str, body: Any = None) -> HttpResponse:
        return await self._request("POST", url, body)

    async def _request(self, method: str, url: str, body: Optional[Any] = None) -> HttpResponse:
        kwargs: dict = {"headers": dict(_JSON_HEADERS)}
        if body is not None:
            # json= also sets Content-Type: application/json
            kwargs["json"] = body

        timeout = aiohttp.ClientTimeout(total=self._timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(method, url, **kwargs) as response:
                ok = 200 <= response.status < 300
                data = None
                if ok and response.status != 204:
                    # Elgato firmware is loose about Content-Type; empty bodies decode to None
                    data = await response.json(content_type=None)
                _LOGGER.debug("%s %s -> %s", method, url, response.status)
                return HttpResponse(ok=ok, status=response.status, data=data)
