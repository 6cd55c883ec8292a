from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from ..utils.temperature import KELVIN_RANGE, TEMPERATURE_RANGE, elgato_to_kelvin

__all__ = [
    "BRIGHTNESS_RANGE",
    "KELVIN_RANGE",
    "TEMPERATURE_RANGE",
    "AccessoryInfo",
    "AccessoryInfoUpdate",
    "LightState",
    "LightsStatus",
    "LightUpdate",
    "LightsUpdate",
    "LightSettings",
    "LightSettingsUpdate",
]

BRIGHTNESS_RANGE = (0, 100)

_ACCESSORY_INFO_KEYS = {
    "product_name": "productName",
    "hardware_board_type": "hardwareBoardType",
    "firmware_build_number": "firmwareBuildNumber",
    "firmware_version": "firmwareVersion",
    "serial_number": "serialNumber",
    "display_name": "displayName",
    "features": "features",
}

_SETTINGS_KEYS = {
    "power_on_behavior": "powerOnBehavior",
    "power_on_brightness": "powerOnBrightness",
    "power_on_temperature": "powerOnTemperature",
    "switch_on_duration_ms": "switchOnDurationMs",
    "switch_off_duration_ms": "switchOffDurationMs",
    "color_change_duration_ms": "colorChangeDurationMs",
}


def _partial_to_api(update: Any, keys: Dict[str, str]) -> Dict[str, Any]:
    """Serialize the set (non-None) fields of a partial update."""
    return {
        keys[f.name]: getattr(update, f.name)
        for f in fields(update)
        if getattr(update, f.name) is not None
    }


@dataclass(frozen=True)
class AccessoryInfo:
    """Device information from the /elgato/accessory-info endpoint."""

    product_name: str
    hardware_board_type: int
    firmware_build_number: int
    firmware_version: str
    serial_number: str
    display_name: str
    features: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> AccessoryInfo:
        return cls(
            product_name=data["productName"],
            hardware_board_type=data["hardwareBoardType"],
            firmware_build_number=data["firmwareBuildNumber"],
            firmware_version=data["firmwareVersion"],
            serial_number=data["serialNumber"],
            display_name=data.get("displayName", ""),
            features=list(data.get("features", [])),
        )


@dataclass
class AccessoryInfoUpdate:
    product_name: Optional[str] = None
    hardware_board_type: Optional[int] = None
    firmware_build_number: Optional[int] = None
    firmware_version: Optional[str] = None
    serial_number: Optional[str] = None
    display_name: Optional[str] = None
    features: Optional[List[str]] = None

    def to_api(self) -> Dict[str, Any]:
        return _partial_to_api(self, _ACCESSORY_INFO_KEYS)


@dataclass(frozen=True)
class LightState:
    """State of a single light as reported by the device."""

    on: bool
    brightness: int
    temperature: int  # 143-344 (Elgato units, ~7000K-2900K)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> LightState:
        return cls(
            on=bool(data["on"]),
            brightness=data["brightness"],
            temperature=data["temperature"],
        )

    @property
    def temperature_kelvin(self) -> int:
        return elgato_to_kelvin(self.temperature)


@dataclass(frozen=True)
class LightsStatus:
    number_of_lights: int
    lights: List[LightState] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> LightsStatus:
        return cls(
            number_of_lights=data["numberOfLights"],
            lights=[LightState.from_api(light) for light in data["lights"]],
        )


@dataclass
class LightUpdate:
    """Partial light state; unset fields are left unchanged on the device."""

    on: Optional[bool] = None
    brightness: Optional[int] = None
    temperature: Optional[int] = None

    def to_api(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.on is not None:
            payload["on"] = 1 if self.on else 0
        if self.brightness is not None:
            payload["brightness"] = self.brightness
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload


@dataclass
class LightsUpdate:
    """Request payload for PUT /elgato/lights."""

    lights: List[LightUpdate] = field(default_factory=list)

    @property
    def number_of_lights(self) -> int:
        return len(self.lights)

    def to_api(self) -> Dict[str, Any]:
        return {
            "numberOfLights": self.number_of_lights,
            "lights": [light.to_api() for light in self.lights],
        }


@dataclass(frozen=True)
class LightSettings:
    """Power-on defaults and transition timings of a light."""

    power_on_behavior: int  # 0 = restore last state, 1 = use power-on defaults
    power_on_brightness: int
    power_on_temperature: int
    switch_on_duration_ms: int
    switch_off_duration_ms: int
    color_change_duration_ms: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> LightSettings:
        return cls(**{name: data[key] for name, key in _SETTINGS_KEYS.items()})


@dataclass
class LightSettingsUpdate:
    power_on_behavior: Optional[int] = None
    power_on_brightness: Optional[int] = None
    power_on_temperature: Optional[int] = None
    switch_on_duration_ms: Optional[int] = None
    switch_off_duration_ms: Optional[int] = None
    color_change_duration_ms: Optional[int] = None

    def to_api(self) -> Dict[str, Any]:
        return _partial_to_api(self, _SETTINGS_KEYS)
