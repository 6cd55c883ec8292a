"""Print the IPv4 address of every Elgato light found on the local network."""

import asyncio
import functools
import logging
import sys

from .core.discovery import ZeroconfBrowser, discover
from .core.settings_schema import load_settings


def main() -> int:
    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings["advanced.enable_debug_logging"] else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ips = asyncio.run(
        discover(
            service_type=settings["discovery.service_type"],
            timeout_ms=settings["discovery.timeout_ms"],
            browser_factory=functools.partial(
                ZeroconfBrowser,
                resolve_timeout_ms=settings["discovery.resolve_timeout_ms"],
            ),
        )
    )

    if not ips:
        print("No Elgato Key Lights found on the network")
    for ip in ips:
        print(ip)
    return 0


if __name__ == "__main__":
    sys.exit(main())
