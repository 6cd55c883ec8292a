from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..utils.temperature import kelvin_to_elgato
from .errors import (
    KeyLightConnectionError,
    KeyLightError,
    KeyLightRequestRejected,
    check_range,
)
from .models import (
    BRIGHTNESS_RANGE,
    TEMPERATURE_RANGE,
    AccessoryInfo,
    AccessoryInfoUpdate,
    LightSettings,
    LightSettingsUpdate,
    LightsStatus,
    LightsUpdate,
    LightUpdate,
)
from .settings_schema import load_settings
from .transport import AiohttpTransport, HttpResponse, Transport

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

IDENTIFY_PATH = "/identify"
ACCESSORY_INFO_PATH = "/accessory-info"
LIGHTS_PATH = "/lights"
SETTINGS_PATH = "/lights/settings"


class KeyLightClient:
    """Client for a single Elgato Key Light.

    Every call is a single request/response round trip with no retries and
    no cached state, so one instance may be shared between concurrent tasks::

        light = KeyLightClient("192.168.1.61")
        await light.turn_on()
        await light.set_brightness(50)
        await light.set_temperature_kelvin(4000)
        status = await light.get_light_state()

    Raises ``KeyLightValidationError`` before any network traffic for out of
    range input, ``KeyLightRequestRejected`` when the device answers with a
    non-success status and ``KeyLightConnectionError`` when the device cannot
    be reached or its reply cannot be read.
    """

    def __init__(
        self,
        address: str,
        transport: Optional[Transport] = None,
        port: Optional[int] = None,
    ) -> None:
        settings = load_settings()
        if port is None:
            port = settings["http.port"]
        self.address = address
        self.base_url = f"http://{address}:{port}/elgato"
        self._transport = transport or AiohttpTransport(settings["http.timeout_s"])

    async def _call(
        self,
        send: Callable[..., Awaitable[HttpResponse]],
        path: str,
        *args: Any,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> Optional[T]:
        url = f"{self.base_url}{path}"
        try:
            response = await send(url, *args)

            if not response.ok:
                _LOGGER.debug("%s rejected with status %s", url, response.status)
                raise KeyLightRequestRejected(path, status=response.status)

            return decode(response.data) if decode else None
        except KeyLightError:
            raise
        except Exception as e:
            _LOGGER.debug("%s failed: %r", url, e)
            raise KeyLightConnectionError(self.base_url, e) from e

    async def identify(self) -> None:
        """Flash the light to identify the device."""
        await self._call(self._transport.post, IDENTIFY_PATH)

    async def get_accessory_info(self) -> AccessoryInfo:
        return await self._call(self._transport.get, ACCESSORY_INFO_PATH, decode=AccessoryInfo.from_api)

    async def update_accessory_info(self, update: AccessoryInfoUpdate) -> AccessoryInfo:
        """Patch accessory info (e.g. display_name) and return the full record."""
        return await self._call(
            self._transport.put, ACCESSORY_INFO_PATH, update.to_api(), decode=AccessoryInfo.from_api
        )

    async def get_light_state(self) -> LightsStatus:
        return await self._call(self._transport.get, LIGHTS_PATH, decode=LightsStatus.from_api)

    async def update_light_state(self, update: LightsUpdate) -> LightsStatus:
        """Send a lights update after checking every entry's ranges."""
        for light in update.lights:
            if light.brightness is not None:
                check_range("brightness", light.brightness, *BRIGHTNESS_RANGE)
            if light.temperature is not None:
                check_range("temperature", light.temperature, *TEMPERATURE_RANGE)

        return await self._call(self._transport.put, LIGHTS_PATH, update.to_api(), decode=LightsStatus.from_api)

    async def get_settings(self) -> LightSettings:
        return await self._call(self._transport.get, SETTINGS_PATH, decode=LightSettings.from_api)

    async def update_settings(self, update: LightSettingsUpdate) -> LightSettings:
        if update.power_on_brightness is not None:
            check_range("powerOnBrightness", update.power_on_brightness, *BRIGHTNESS_RANGE)
        if update.power_on_temperature is not None:
            check_range("powerOnTemperature", update.power_on_temperature, *TEMPERATURE_RANGE)

        return await self._call(
            self._transport.put, SETTINGS_PATH, update.to_api(), decode=LightSettings.from_api
        )

    # --- convenience ---
    async def turn_on(self) -> LightsStatus:
        """Turn the light on, keeping its brightness and temperature."""
        return await self.set_light(LightUpdate(on=True))

    async def turn_off(self) -> LightsStatus:
        return await self.set_light(LightUpdate(on=False))

    async def set_brightness(self, brightness: int) -> LightsStatus:
        check_range("brightness", brightness, *BRIGHTNESS_RANGE)
        return await self.set_light(LightUpdate(brightness=brightness))

    async def set_temperature_kelvin(self, kelvin: int) -> LightsStatus:
        return await self.set_temperature(kelvin_to_elgato(kelvin))

    async def set_temperature(self, temperature: int) -> LightsStatus:
        """Set temperature in Elgato units (143-344)."""
        check_range("temperature", temperature, *TEMPERATURE_RANGE)
        return await self.set_light(LightUpdate(temperature=temperature))

    async def set_light(self, light: LightUpdate) -> LightsStatus:
        return await self.update_light_state(LightsUpdate(lights=[light]))
