"""Elgato Key Light HTTP client and mDNS discovery."""

__version__ = "1.0.0"

from .core.client import KeyLightClient
from .core.discovery import discover
from .core.errors import (
    ErrorKind,
    KeyLightConnectionError,
    KeyLightError,
    KeyLightRequestRejected,
    KeyLightValidationError,
)
from .core.models import (
    AccessoryInfo,
    AccessoryInfoUpdate,
    LightSettings,
    LightSettingsUpdate,
    LightState,
    LightsStatus,
    LightsUpdate,
    LightUpdate,
)
from .core.transport import AiohttpTransport, HttpResponse, Transport
from .utils.temperature import elgato_to_kelvin, kelvin_to_elgato

__all__ = [
    "KeyLightClient",
    "discover",
    "ErrorKind",
    "KeyLightError",
    "KeyLightConnectionError",
    "KeyLightRequestRejected",
    "KeyLightValidationError",
    "AccessoryInfo",
    "AccessoryInfoUpdate",
    "LightState",
    "LightsStatus",
    "LightUpdate",
    "LightsUpdate",
    "LightSettings",
    "LightSettingsUpdate",
    "AiohttpTransport",
    "HttpResponse",
    "Transport",
    "elgato_to_kelvin",
    "kelvin_to_elgato",
]
