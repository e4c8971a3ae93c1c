"""Filter selection and facet catalog models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pycarburantes.ingestion.normalize import safe_str


class FilterField(StrEnum):
    """Categorical fields a caller can constrain.

    Values double as the attribute names on :class:`FilterState` and, for
    the location fields, on :class:`~pycarburantes.models.station.StationRecord`.
    """

    BRAND = "brand"
    FUEL_TYPE = "fuel_type"
    PROVINCE = "province"
    MUNICIPALITY = "municipality"
    LOCALITY = "locality"


class FacetScope(StrEnum):
    """How facet catalogs are scoped after a filter change.

    ``CONJUNCTIVE``
        Each catalog is derived from the records matching every active
        constraint except its own field. Catalogs depend only on the final
        filter state.
    ``PROGRESSIVE``
        Changing a field recomputes only its descendants, scoped to that
        field and its ancestors. Intermediate selections keep narrowing the
        results but not the catalogs, so the options shown depend on the
        order of the changes.
    """

    CONJUNCTIVE = "conjunctive"
    PROGRESSIVE = "progressive"


class FilterState(BaseModel):
    """Five optional equality constraints; ``None`` means unconstrained."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    brand: str | None = None
    fuel_type: str | None = None
    province: str | None = None
    municipality: str | None = None
    locality: str | None = None

    @field_validator("brand", "fuel_type", "province", "municipality", "locality", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> str | None:
        return safe_str(value)

    def get(self, field: FilterField) -> str | None:
        value: str | None = getattr(self, FilterField(field).value)
        return value

    def with_value(self, field: FilterField, value: Any) -> FilterState:
        return self.model_copy(update={FilterField(field).value: safe_str(value)})

    @property
    def active(self) -> dict[FilterField, str]:
        """Constraints that are currently set."""
        return {field: value for field in FilterField if (value := self.get(field)) is not None}


_CATALOG_ATTRS: dict[FilterField, str] = {
    FilterField.BRAND: "brands",
    FilterField.FUEL_TYPE: "fuel_types",
    FilterField.PROVINCE: "provinces",
    FilterField.MUNICIPALITY: "municipalities",
    FilterField.LOCALITY: "localities",
}


class FacetCatalog(BaseModel):
    """Sorted, distinct, non-empty option lists for each filter field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    brands: tuple[str, ...] = ()
    fuel_types: tuple[str, ...] = ()
    provinces: tuple[str, ...] = ()
    municipalities: tuple[str, ...] = ()
    localities: tuple[str, ...] = ()

    def for_field(self, field: FilterField) -> tuple[str, ...]:
        values: tuple[str, ...] = getattr(self, _CATALOG_ATTRS[FilterField(field)])
        return values

    def with_facet(self, field: FilterField, values: tuple[str, ...]) -> FacetCatalog:
        return self.model_copy(update={_CATALOG_ATTRS[FilterField(field)]: tuple(values)})
