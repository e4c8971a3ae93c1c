from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from pycarburantes.ingestion.stations import parse_station_list
from pycarburantes.models.filters import FacetCatalog, FilterField, FilterState
from pycarburantes.models.geolocation import GeoPosition
from pycarburantes.models.station import StationRecord

SPANISH_STATION = {
    "IDEESS": "4375",
    "Rótulo": " REPSOL ",
    "Provincia": "MADRID",
    "Municipio": "Madrid",
    "Localidad": "MADRID ",
    "Latitud": "40,416775",
    "Longitud (WGS84)": "-3,703790",
    "Precio Gasoleo A": "1,459",
    "Precio Hidrogeno": "",
    "C.P.": "28013",
    "Dirección": "CALLE MAYOR, 1",
    "Horario": "L-D: 24H",
}


def test_station_from_spanish_wire_record() -> None:
    record = StationRecord.model_validate(SPANISH_STATION)

    assert record.brand == "REPSOL"
    assert record.province == "MADRID"
    assert record.locality == "MADRID"
    assert record.station_id == "4375"
    assert record.postal_code == "28013"
    assert record.prices == {"Gasoleo A": 1.459, "Hidrogeno": None}
    assert record.coordinates == pytest.approx((40.416775, -3.70379))
    assert record.distance_to_user is None
    assert record.raw == SPANISH_STATION


def test_station_from_english_wire_record() -> None:
    record = StationRecord.model_validate(
        {
            "brand label": "X",
            "province": "A",
            "municipality": "M",
            "locality": "L",
            "latitude": "1,5",
            "longitude": "2,5",
            "Price Diesel": "1,25",
        }
    )

    assert record.brand == "X"
    assert record.prices == {"Diesel": 1.25}
    assert record.coordinates == (1.5, 2.5)


def test_station_price_prefixes_from_context() -> None:
    record = StationRecord.model_validate(
        {"Fuel:LPG": "0,99", "Precio Gasoleo A": "1,4"},
        context={"price_prefixes": ("Fuel:",)},
    )

    assert record.prices == {"LPG": 0.99}


def test_advertised_fuel_without_price_is_offered() -> None:
    record = StationRecord.model_validate(SPANISH_STATION)

    assert record.offers("Hidrogeno") is True
    assert record.price("Hidrogeno") is None
    assert record.offers("Gasolina 98 E5") is False


def test_unparseable_coordinates_yield_none() -> None:
    assert StationRecord(latitude="abc", longitude="1,0").coordinates is None
    assert StationRecord(latitude="91,0", longitude="1,0").coordinates is None
    assert StationRecord().coordinates is None


def test_with_distance_returns_copy() -> None:
    record = StationRecord(brand="X")
    ranked = record.with_distance(3.5)

    assert ranked.distance_to_user == 3.5
    assert record.distance_to_user is None
    assert ranked.brand == "X"


def test_distance_from_input_is_ignored() -> None:
    record = StationRecord.model_validate({**SPANISH_STATION, "distance_to_user": 1.0, "distanceToUser": 2.0})

    assert record.distance_to_user is None
    assert StationRecord(brand="X", distance_to_user=5.0).distance_to_user is None


def test_station_is_frozen() -> None:
    record = StationRecord(brand="X")

    with pytest.raises(ValidationError):
        record.brand = "Y"  # type: ignore[misc]


def test_parse_station_list_skips_malformed_records(caplog: pytest.LogCaptureFixture) -> None:
    items = [SPANISH_STATION, "garbage", {"Rótulo": "BROKEN", "prices": "n/a"}, {"Rótulo": "OK"}]

    with caplog.at_level(logging.WARNING, logger="pycarburantes.ingestion.stations"):
        records = parse_station_list(items)

    assert [r.brand for r in records] == ["REPSOL", "OK"]
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2


def test_filter_state_blank_means_unset() -> None:
    state = FilterState(brand="  ", province=" MADRID ")

    assert state.brand is None
    assert state.province == "MADRID"
    assert state.active == {FilterField.PROVINCE: "MADRID"}
    assert state.with_value(FilterField.PROVINCE, "").active == {}


def test_facet_catalog_field_access() -> None:
    catalog = FacetCatalog().with_facet(FilterField.MUNICIPALITY, ("A", "B"))

    assert catalog.for_field(FilterField.MUNICIPALITY) == ("A", "B")
    assert catalog.municipalities == ("A", "B")
    assert catalog.for_field(FilterField.BRAND) == ()


def test_geo_position_validates_ranges() -> None:
    position = GeoPosition.model_validate({"latitude": 40.4, "longitude": -3.7, "altitudeAccuracy": 5})

    assert position.altitude_accuracy == 5

    with pytest.raises(ValidationError):
        GeoPosition(latitude=95.0, longitude=0.0)
