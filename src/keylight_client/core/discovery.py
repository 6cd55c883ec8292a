from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Callable, List, Optional, Set

from zeroconf import ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from .settings_schema import DiscoverySettings

_LOGGER = logging.getLogger(__name__)

_EXCLUDED_ADDRESSES = {"127.0.0.1", "0.0.0.0"}


@dataclass
class Advertisement:
    """Addresses carried by one advertised service.

    ``referer`` is the address of the peer that sent the announcement, used
    only when the service lists no addresses of its own.
    """

    addresses: List[str] = field(default_factory=list)
    referer: Optional[str] = None


AdvertisementHandler = Callable[[Advertisement], None]
# Called with (service_type, handler); entering starts browsing, exiting releases it.
BrowserFactory = Callable[[str, AdvertisementHandler], AsyncContextManager[Any]]


def is_acceptable_address(address: str) -> bool:
    """IPv4 only, excluding loopback and the any-address."""
    if ":" in address:
        return False
    return address not in _EXCLUDED_ADDRESSES


def normalize_service_type(service_type: str) -> str:
    """Expand 'elg' or '_elg._tcp' to the zeroconf form '_elg._tcp.local.'."""
    name = service_type.strip().rstrip(".")
    if name.endswith(".local"):
        name = name[: -len(".local")]
    if not name.startswith("_"):
        name = f"_{name}._tcp"
    return f"{name}.local."


class AddressCollector:
    """Accumulates the filtered, de-duplicated addresses seen during a browse."""

    def __init__(self) -> None:
        self._addresses: Set[str] = set()

    def add(self, advertisement: Advertisement) -> None:
        if advertisement.addresses:
            candidates = list(advertisement.addresses)
        elif advertisement.referer:
            candidates = [advertisement.referer]
        else:
            _LOGGER.warning("Advertisement carried no usable address")
            return

        for address in candidates:
            if is_acceptable_address(address):
                self._addresses.add(address)
            else:
                _LOGGER.debug("Ignoring address %s", address)

    def addresses(self) -> List[str]:
        return list(self._addresses)


class ZeroconfBrowser:
    """Browses mDNS for a service type and resolves each added service."""

    def __init__(
        self,
        service_type: str,
        handler: AdvertisementHandler,
        resolve_timeout_ms: int = DiscoverySettings.resolve_timeout_ms,
    ) -> None:
        self.service_type = service_type
        self._handler = handler
        self._resolve_timeout_ms = resolve_timeout_ms
        self.aiozc: Optional[AsyncZeroconf] = None
        self.browser: Optional[AsyncServiceBrowser] = None
        self._pending: Set[asyncio.Task] = set()

    async def __aenter__(self) -> ZeroconfBrowser:
        self.aiozc = AsyncZeroconf()
        try:
            self.browser = AsyncServiceBrowser(
                self.aiozc.zeroconf,
                self.service_type,
                handlers=[self._on_service_state_change],
            )
        except Exception:
            await self.aiozc.async_close()
            raise
        _LOGGER.debug("Browsing for %s", self.service_type)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        try:
            if self.browser:
                await self.browser.async_cancel()
        finally:
            if self.aiozc:
                await self.aiozc.async_close()

    def _on_service_state_change(
        self,
        zeroconf: Zeroconf,
        service_type: str,
        name: str,
        state_change: ServiceStateChange,
    ) -> None:
        if state_change is not ServiceStateChange.Added:
            return
        task = asyncio.ensure_future(self._resolve(zeroconf, service_type, name))
        self._pending.add(task)
        task.add_done_callback(self._on_resolve_done)

    def _on_resolve_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            _LOGGER.debug("Failed to resolve service: %r", task.exception())

    async def _resolve(self, zeroconf: Zeroconf, service_type: str, name: str) -> None:
        info = AsyncServiceInfo(service_type, name)
        await info.async_request(zeroconf, self._resolve_timeout_ms)
        # zeroconf does not expose the responding peer, so there is no referer here
        advertisement = Advertisement(addresses=info.parsed_addresses())
        _LOGGER.debug("Resolved %s: %s", name, advertisement.addresses)
        self._handler(advertisement)


async def discover(
    service_type: str = DiscoverySettings.service_type,
    timeout_ms: int = DiscoverySettings.timeout_ms,
    browser_factory: Optional[BrowserFactory] = None,
) -> List[str]:
    """Browse for ``service_type`` for exactly ``timeout_ms`` and return IPv4 addresses.

    The window always runs to completion so every responder is collected.
    The browser is released when the window closes, however many services
    were found. Order of the returned addresses is not significant.
    """
    collector = AddressCollector()
    factory = browser_factory or ZeroconfBrowser
    async with factory(normalize_service_type(service_type), collector.add):
        await asyncio.sleep(timeout_ms / 1000)
    addresses = collector.addresses()
    _LOGGER.debug("Discovered %d device(s): %s", len(addresses), addresses)
    return addresses
