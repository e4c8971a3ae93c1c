"""Data models for station records, filters and positions."""

from pycarburantes.models.filters import FacetCatalog, FacetScope, FilterField, FilterState
from pycarburantes.models.geolocation import GeoPosition
from pycarburantes.models.station import StationRecord

__all__ = [
    "FacetCatalog",
    "FacetScope",
    "FilterField",
    "FilterState",
    "GeoPosition",
    "StationRecord",
]
