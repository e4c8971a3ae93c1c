"""Fuel-station record model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from pycarburantes._constants import PRICE_PREFIXES
from pycarburantes.ingestion.normalize import (
    clean_label,
    collect_prices,
    parse_decimal,
    parse_latitude,
    parse_longitude,
    safe_str,
)


class StationRecord(BaseModel):
    """A single fuel station.

    Categorical fields are trimmed on construction and compared by exact
    match. Coordinates are kept in their wire form (comma decimal
    separator) and parsed on demand, so a malformed coordinate only
    excludes the station from distance operations.

    Parameters
    ----------
    brand : str
        Brand label shown on the station sign (``""`` when absent).
    province : str
        Province name.
    municipality : str
        Municipality name.
    locality : str
        Locality name.
    latitude : str
        Latitude in decimal degrees, comma decimal separator.
    longitude : str
        Longitude in decimal degrees, comma decimal separator.
    prices : dict
        Fuel-type label to price. A label present with a ``None`` price
        still means the station advertises that fuel.
    distance_to_user : float or None
        Great-circle distance to the user in km. Only set by an
        annotation pass (``with_distance``); ignored on input.
    raw : dict
        Original wire record.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    brand: str = Field(default="", validation_alias=AliasChoices("brand", "brand label", "Rótulo"))
    province: str = Field(default="", validation_alias=AliasChoices("province", "Provincia"))
    municipality: str = Field(default="", validation_alias=AliasChoices("municipality", "Municipio"))
    locality: str = Field(default="", validation_alias=AliasChoices("locality", "Localidad"))
    latitude: str = Field(default="", validation_alias=AliasChoices("latitude", "Latitud"))
    longitude: str = Field(default="", validation_alias=AliasChoices("longitude", "Longitud (WGS84)"))
    prices: dict[str, float | None] = Field(default_factory=dict)
    distance_to_user: float | None = None
    station_id: str | None = Field(default=None, validation_alias=AliasChoices("station_id", "IDEESS"))
    address: str | None = Field(default=None, validation_alias=AliasChoices("address", "Dirección"))
    postal_code: str | None = Field(default=None, validation_alias=AliasChoices("postal_code", "C.P."))
    opening_hours: str | None = Field(default=None, validation_alias=AliasChoices("opening_hours", "Horario"))
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_prices(cls, values: Any, info: ValidationInfo) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        # Distances only come from an annotation pass, never from input.
        merged.pop("distance_to_user", None)
        if "prices" not in merged:
            context = info.context if isinstance(info.context, Mapping) else {}
            prefixes = tuple(context.get("price_prefixes") or PRICE_PREFIXES)
            merged["prices"] = collect_prices(values, prefixes)
        merged.setdefault("raw", values)
        return merged

    @field_validator("brand", "province", "municipality", "locality", "latitude", "longitude", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> str:
        return clean_label(value)

    @field_validator("station_id", "address", "postal_code", "opening_hours", mode="before")
    @classmethod
    def _coerce_optional(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("prices", mode="before")
    @classmethod
    def _coerce_prices(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {str(label).strip(): parse_decimal(price) for label, price in value.items() if str(label).strip()}

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """Parsed ``(latitude, longitude)``, or ``None`` if either is unusable."""
        lat = parse_latitude(self.latitude)
        lng = parse_longitude(self.longitude)
        if lat is None or lng is None:
            return None
        return lat, lng

    def offers(self, fuel_type: str) -> bool:
        """Whether the station lists *fuel_type*, priced or not."""
        return fuel_type in self.prices

    def price(self, fuel_type: str) -> float | None:
        return self.prices.get(fuel_type)

    def with_distance(self, distance_km: float | None) -> StationRecord:
        return self.model_copy(update={"distance_to_user": distance_km})
