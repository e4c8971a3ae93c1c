from __future__ import annotations

import math

import pytest

from pycarburantes._constants import EARTH_RADIUS_KM
from pycarburantes.exceptions import NoUserLocationError
from pycarburantes.geo import DistanceRanker, distance_km
from pycarburantes.models.station import StationRecord

USER = (40.0, -3.0)
KM_PER_DEGREE_LAT = EARTH_RADIUS_KM * math.pi / 180


def _comma(value: float) -> str:
    return f"{value:.6f}".replace(".", ",")


def _station_north_of_user(km: float, name: str) -> StationRecord:
    return StationRecord(
        brand=name,
        latitude=_comma(USER[0] + km / KM_PER_DEGREE_LAT),
        longitude=_comma(USER[1]),
    )


def test_distance_same_point_is_zero() -> None:
    assert distance_km(40.4168, -3.7038, 40.4168, -3.7038) == 0.0


def test_distance_is_symmetric_and_non_negative() -> None:
    a = (43.3623, -8.4115)
    b = (36.7213, -4.4214)

    assert distance_km(*a, *b) == distance_km(*b, *a)
    assert distance_km(*a, *b) > 0


def test_distance_london_paris_reference() -> None:
    assert distance_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)


def test_distance_triangle_inequality() -> None:
    madrid = (40.4168, -3.7038)
    zaragoza = (41.6488, -0.8891)
    barcelona = (41.3874, 2.1686)

    direct = distance_km(*madrid, *barcelona)
    via = distance_km(*madrid, *zaragoza) + distance_km(*zaragoza, *barcelona)

    assert direct <= via + 1e-9


def test_distance_antipodal_points() -> None:
    assert distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_KM)


def test_annotate_sorts_and_puts_unparseable_last_in_order() -> None:
    far = _station_north_of_user(15, "far")
    near = _station_north_of_user(2, "near")
    broken_1 = StationRecord(brand="broken-1", latitude="not a number", longitude="-3,0")
    broken_2 = StationRecord(brand="broken-2", latitude="", longitude="")

    ranked = DistanceRanker().annotate([broken_1, far, broken_2, near], *USER)

    assert [r.brand for r in ranked] == ["near", "far", "broken-1", "broken-2"]
    assert ranked[0].distance_to_user == pytest.approx(2.0, abs=0.01)
    assert ranked[2].distance_to_user is None
    assert ranked[3].distance_to_user is None


def test_annotate_does_not_mutate_input_records() -> None:
    record = _station_north_of_user(2, "near")

    DistanceRanker().annotate([record], *USER)

    assert record.distance_to_user is None


def test_filter_by_radius_scenario() -> None:
    ranker = DistanceRanker()
    records = [
        _station_north_of_user(15, "c"),
        _station_north_of_user(2, "a"),
        _station_north_of_user(8, "b"),
    ]

    ranked = ranker.annotate(records, *USER)
    within = ranker.filter_by_radius(ranked, 10)

    assert [r.brand for r in within] == ["a", "b"]
    assert within[0].distance_to_user == pytest.approx(2.0, abs=0.01)
    assert within[1].distance_to_user == pytest.approx(8.0, abs=0.01)


def test_filter_by_radius_partitions_located_records() -> None:
    ranker = DistanceRanker()
    records = [_station_north_of_user(km, str(km)) for km in (0.5, 3, 9.9, 10.2, 40)]
    records.append(StationRecord(brand="nowhere", latitude="x", longitude="y"))

    ranked = ranker.annotate(records, *USER)
    within = ranker.filter_by_radius(ranked, 10)
    excluded = [r for r in ranked if r not in within]

    assert all(r.distance_to_user is not None and r.distance_to_user <= 10 for r in within)
    assert all(r.distance_to_user is None or r.distance_to_user > 10 for r in excluded)
    assert "nowhere" not in {r.brand for r in within}


def test_filter_by_radius_before_annotation_raises() -> None:
    ranker = DistanceRanker()

    with pytest.raises(NoUserLocationError):
        ranker.filter_by_radius([_station_north_of_user(1, "a")], 10)


def test_filter_by_radius_empty_result_is_not_an_error() -> None:
    ranker = DistanceRanker()
    ranked = ranker.annotate([_station_north_of_user(50, "a")], *USER)

    assert ranker.filter_by_radius(ranked, 10) == []


def test_reset_makes_radius_unavailable_again() -> None:
    ranker = DistanceRanker()
    ranker.annotate([], *USER)
    assert ranker.is_annotated

    ranker.reset()

    assert ranker.origin is None
    with pytest.raises(NoUserLocationError):
        ranker.filter_by_radius([], 1)


def test_negative_radius_rejected() -> None:
    ranker = DistanceRanker()
    ranker.annotate([], *USER)

    with pytest.raises(ValueError):
        ranker.filter_by_radius([], -1)
