from __future__ import annotations

import math

from ..core.errors import check_range

KELVIN_RANGE = (2900, 7000)
TEMPERATURE_RANGE = (143, 344)  # Elgato units, ~7000K-2900K


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def kelvin_to_elgato(kelvin: float) -> int:
    """Convert Kelvin (2900K-7000K) to the Elgato temperature value.

    The result for the coolest end of the range (133-142) lies below
    ``TEMPERATURE_RANGE`` and is rejected by the light endpoints.
    """
    check_range("kelvin", kelvin, *KELVIN_RANGE)
    return _round_half_up(1_000_000 / kelvin - 10)


def elgato_to_kelvin(value: float) -> int:
    """Convert Elgato temperature value (143-344) to Kelvin (~6536K-2899K)."""
    check_range("temperature", value, *TEMPERATURE_RANGE)
    return _round_half_up(1_000_000 / (value + 10))
