from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class HttpSettings:
    port: int = 9123
    timeout_s: float = 2.0


@dataclass
class DiscoverySettings:
    service_type: str = "_elg._tcp.local."
    timeout_ms: int = 5000
    resolve_timeout_ms: int = 3000


@dataclass
class AdvancedSettings:
    enable_debug_logging: bool = False


def defaults_dict() -> Dict[str, Any]:
    h = HttpSettings()
    d = DiscoverySettings()
    a = AdvancedSettings()
    return {
        # HTTP
        "http.port": h.port,
        "http.timeout_s": h.timeout_s,
        # Discovery
        "discovery.service_type": d.service_type,
        "discovery.timeout_ms": d.timeout_ms,
        "discovery.resolve_timeout_ms": d.resolve_timeout_ms,
        # Advanced
        "advanced.enable_debug_logging": a.enable_debug_logging,
    }


_ENV_OVERRIDES = {
    "KEYLIGHT_HTTP_TIMEOUT_S": ("http.timeout_s", float),
    "KEYLIGHT_DISCOVERY_TIMEOUT_MS": ("discovery.timeout_ms", int),
    "KEYLIGHT_DEBUG": ("advanced.enable_debug_logging", lambda v: v.lower() in ("1", "true", "yes")),
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return the defaults overlaid with any KEYLIGHT_* environment variables."""
    if environ is None:
        environ = os.environ
    settings = defaults_dict()
    for var, (key, convert) in _ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw:
            try:
                settings[key] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {var}: {raw!r}") from e
    return settings
