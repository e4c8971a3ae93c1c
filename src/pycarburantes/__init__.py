"""pycarburantes - Fuel-station catalog filtering and distance ranking."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycarburantes")
except PackageNotFoundError:
    __version__ = "0+local"
from pycarburantes.client import CarburantesClient
from pycarburantes.config import CarburantesConfig
from pycarburantes.exceptions import (
    CarburantesApiError,
    CarburantesConfigError,
    CarburantesError,
    CarburantesTransportError,
    GeolocationError,
    GeolocationFailure,
    NoUserLocationError,
)
from pycarburantes.facets import build_catalog, extract_fuel_types, unique_values
from pycarburantes.geo import DistanceRanker, distance_km
from pycarburantes.geolocation import GeolocationProvider, StaticGeolocation
from pycarburantes.models import (
    FacetCatalog,
    FacetScope,
    FilterField,
    FilterState,
    GeoPosition,
    StationRecord,
)
from pycarburantes.state.engine import FilterEngine
from pycarburantes.state.store import RecordStore

__all__ = [
    "__version__",
    "CarburantesApiError",
    "CarburantesClient",
    "CarburantesConfig",
    "CarburantesConfigError",
    "CarburantesError",
    "CarburantesTransportError",
    "DistanceRanker",
    "FacetCatalog",
    "FacetScope",
    "FilterEngine",
    "FilterField",
    "FilterState",
    "GeoPosition",
    "GeolocationError",
    "GeolocationFailure",
    "GeolocationProvider",
    "NoUserLocationError",
    "RecordStore",
    "StaticGeolocation",
    "StationRecord",
    "build_catalog",
    "distance_km",
    "extract_fuel_types",
    "unique_values",
]
