from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from keylight_client.core.client import KeyLightClient
from keylight_client.core.transport import HttpResponse

DEVICE_IP = "192.168.1.61"
BASE_URL = f"http://{DEVICE_IP}:9123/elgato"


class RecordingTransport:
    """Transport double that records calls and replays a canned response."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, Any]] = []
        self.response = HttpResponse(ok=True, status=200, data={})
        self.error: Optional[BaseException] = None

    def respond(self, data: Any = None, ok: bool = True, status: int = 200) -> None:
        self.response = HttpResponse(ok=ok, status=status, data=data)

    def fail(self, error: BaseException) -> None:
        self.error = error

    async def _handle(self, method: str, url: str, body: Any = None) -> HttpResponse:
        self.calls.append((method, url, body))
        if self.error is not None:
            raise self.error
        return self.response

    async def get(self, url: str) -> HttpResponse:
        return await self._handle("GET", url)

    async def put(self, url: str, body: Any) -> HttpResponse:
        return await self._handle("PUT", url, body)

    async def post(self, url: str, body: Any = None) -> HttpResponse:
        return await self._handle("POST", url, body)


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def client(transport: RecordingTransport) -> KeyLightClient:
    return KeyLightClient(DEVICE_IP, transport=transport)


@pytest.fixture()
def accessory_info_payload() -> dict:
    return {
        "productName": "Elgato Key Light",
        "hardwareBoardType": 53,
        "firmwareBuildNumber": 192,
        "firmwareVersion": "1.0.3",
        "serialNumber": "XXXXXXXXXXXX",
        "displayName": "My Light",
        "features": ["lights"],
    }


@pytest.fixture()
def lights_payload() -> dict:
    return {
        "numberOfLights": 1,
        "lights": [{"on": 1, "brightness": 50, "temperature": 200}],
    }


@pytest.fixture()
def settings_payload() -> dict:
    return {
        "powerOnBehavior": 1,
        "powerOnBrightness": 20,
        "powerOnTemperature": 213,
        "switchOnDurationMs": 100,
        "switchOffDurationMs": 300,
        "colorChangeDurationMs": 100,
    }
