from __future__ import annotations

import pytest

from keylight_client.core.errors import ErrorKind, KeyLightValidationError
from keylight_client.utils.temperature import elgato_to_kelvin, kelvin_to_elgato


@pytest.mark.parametrize(
    ("kelvin", "expected"),
    [(4000, 240), (2900, 335), (7000, 133)],
)
def test_kelvin_to_elgato_known_values(kelvin: int, expected: int) -> None:
    assert kelvin_to_elgato(kelvin) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(240, 4000), (335, 2899), (143, 6536)],
)
def test_elgato_to_kelvin_known_values(value: int, expected: int) -> None:
    assert elgato_to_kelvin(value) == expected


def test_kelvin_to_elgato_stays_in_output_range() -> None:
    for kelvin in range(2900, 7001, 50):
        value = kelvin_to_elgato(kelvin)
        assert isinstance(value, int)
        assert 133 <= value <= 335


def test_kelvin_to_elgato_rounds_half_up() -> None:
    # 1_000_000 / 3200 - 10 == 302.5
    assert kelvin_to_elgato(3200) == 303


@pytest.mark.parametrize("kelvin", [2800, 2899, 7001, 7100])
def test_kelvin_to_elgato_rejects_out_of_range(kelvin: int) -> None:
    with pytest.raises(KeyLightValidationError) as exc:
        kelvin_to_elgato(kelvin)

    assert exc.value.field == "kelvin"
    assert exc.value.value == kelvin
    assert (exc.value.minimum, exc.value.maximum) == (2900, 7000)
    assert exc.value.kind is ErrorKind.RANGE_VALIDATION


@pytest.mark.parametrize("value", [142, 345])
def test_elgato_to_kelvin_rejects_out_of_range(value: int) -> None:
    with pytest.raises(KeyLightValidationError) as exc:
        elgato_to_kelvin(value)

    assert exc.value.field == "temperature"
    assert (exc.value.minimum, exc.value.maximum) == (143, 344)


def test_4000k_round_trip_is_stable() -> None:
    assert elgato_to_kelvin(kelvin_to_elgato(4000)) == 4000
