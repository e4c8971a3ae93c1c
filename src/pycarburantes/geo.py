"""Great-circle distance ranking."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from pycarburantes._constants import EARTH_RADIUS_KM
from pycarburantes.exceptions import NoUserLocationError
from pycarburantes.models.station import StationRecord

_logger = logging.getLogger(__name__)


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in km between two WGS84 points in decimal degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push `a` a hair above 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def sort_by_distance(records: Iterable[StationRecord]) -> list[StationRecord]:
    """Ascending by distance; records without one go last in their original order."""
    return sorted(
        records,
        key=lambda record: (record.distance_to_user is None, record.distance_to_user or 0.0),
    )


class DistanceRanker:
    """Annotates records with their distance to the user and applies radius cutoffs.

    The ranker remembers the origin of the last annotation pass;
    :meth:`filter_by_radius` refuses to run until there is one.
    """

    def __init__(self) -> None:
        self._origin: tuple[float, float] | None = None

    @property
    def origin(self) -> tuple[float, float] | None:
        return self._origin

    @property
    def is_annotated(self) -> bool:
        return self._origin is not None

    def reset(self) -> None:
        """Forget the user position; radius filtering becomes unavailable."""
        self._origin = None

    def annotate(self, records: Iterable[StationRecord], user_lat: float, user_lng: float) -> list[StationRecord]:
        """Return copies of *records* carrying ``distance_to_user``, nearest first.

        Distances are recomputed from scratch; a record whose coordinates
        do not parse gets ``None`` and sorts last.
        """
        annotated: list[StationRecord] = []
        unlocated = 0
        for record in records:
            coords = record.coordinates
            if coords is None:
                unlocated += 1
                annotated.append(record.with_distance(None))
                continue
            annotated.append(record.with_distance(distance_km(user_lat, user_lng, coords[0], coords[1])))

        if unlocated:
            _logger.debug("%d of %d stations have no usable coordinates", unlocated, len(annotated))

        self._origin = (user_lat, user_lng)
        return sort_by_distance(annotated)

    def filter_by_radius(self, records: Sequence[StationRecord], km: float) -> list[StationRecord]:
        """Records within *km* of the user, nearest first.

        Raises
        ------
        NoUserLocationError
            If no annotation pass has run yet.
        ValueError
            If *km* is negative.
        """
        if self._origin is None:
            raise NoUserLocationError("No user location yet; annotate records before filtering by radius")
        if km < 0:
            raise ValueError(f"radius must not be negative, got {km}")
        within = [
            record for record in records if record.distance_to_user is not None and record.distance_to_user <= km
        ]
        return sort_by_distance(within)
