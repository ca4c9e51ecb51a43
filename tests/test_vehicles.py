from __future__ import annotations

import pytest

from sceneintel.canonical import is_likely_vehicle_location


@pytest.mark.parametrize(
    "value",
    [
        "JOHN'S TRUCK",
        "TAXI",
        "John’s car",
        "POLICE CAR",
        "MARY'S RED CONVERTIBLE",
        "CAR PARKING LOT",
    ],
)
def test_vehicles_flagged(value: str) -> None:
    assert is_likely_vehicle_location(value)


@pytest.mark.parametrize(
    "value",
    [
        "BUS STATION",
        "HOSPITAL",
        "CITY PARK",
        "",
        "THE OLD FORD FAMILY FARMHOUSE NEAR TOWN",
        "CARPET STORE",
    ],
)
def test_places_not_flagged(value: str) -> None:
    assert not is_likely_vehicle_location(value)
