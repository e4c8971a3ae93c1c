"""Facet-filtering engine.

This is the only component that mutates the filter selection. Every
mutating call leaves three consistent snapshots behind: the
:class:`FilterState`, the :class:`FacetCatalog` and the filtered results.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import Any

from pycarburantes.facets import extract_fuel_types, unique_values
from pycarburantes.geo import DistanceRanker, sort_by_distance
from pycarburantes.models.filters import FacetCatalog, FacetScope, FilterField, FilterState
from pycarburantes.models.station import StationRecord
from pycarburantes.state.cascade import ancestors_of, descendants_of
from pycarburantes.state.store import RecordStore

_logger = logging.getLogger(__name__)

# Fields whose catalogs are derived from the record values themselves.
_LOCATION_FIELDS: tuple[FilterField, ...] = (
    FilterField.BRAND,
    FilterField.PROVINCE,
    FilterField.MUNICIPALITY,
    FilterField.LOCALITY,
)


def matches(record: StationRecord, state: FilterState, *, exclude: Collection[FilterField] = ()) -> bool:
    """Whether *record* satisfies every active constraint not in *exclude*.

    The fuel-type constraint only checks that the station lists the fuel;
    its price may be missing.
    """
    for field, value in state.active.items():
        if field in exclude:
            continue
        if field is FilterField.FUEL_TYPE:
            if not record.offers(value):
                return False
        elif getattr(record, field.value) != value:
            return False
    return True


class FilterEngine:
    """Holds the filter selection and keeps results and catalogs in sync.

    Usage::

        engine = FilterEngine()
        engine.load(records)
        engine.set_province("MADRID")
        engine.facets.municipalities
        engine.annotate(40.4168, -3.7038)
        engine.within_radius(10)
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        *,
        facet_scope: FacetScope = FacetScope.CONJUNCTIVE,
        ranker: DistanceRanker | None = None,
    ) -> None:
        self._store = store if store is not None else RecordStore()
        self._ranker = ranker if ranker is not None else DistanceRanker()
        self._scope = FacetScope(facet_scope)
        self._state = FilterState()
        self._ranked: tuple[StationRecord, ...] | None = None
        self._facets = self._conjunctive_catalog()
        self._results = self._filter()

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def facet_scope(self) -> FacetScope:
        return self._scope

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def facets(self) -> FacetCatalog:
        return self._facets

    @property
    def results(self) -> tuple[StationRecord, ...]:
        return self._results

    @property
    def is_annotated(self) -> bool:
        return self._ranked is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, records: Iterable[StationRecord]) -> tuple[StationRecord, ...]:
        """Replace the snapshot; selections and distances start over."""
        self._store.load(records)
        self._ranked = None
        self._ranker.reset()
        self._state = FilterState()
        self._facets = self._conjunctive_catalog()
        self._results = self._filter()
        _logger.debug("Loaded %d stations", len(self._store))
        return self._results

    # ------------------------------------------------------------------
    # Filter mutation
    # ------------------------------------------------------------------

    def set_filter_field(self, field: FilterField | str, value: Any) -> tuple[StationRecord, ...]:
        """Set (or clear, with ``None``/blank) one constraint and cascade.

        Descendants are checked nearest first against the values their
        ancestors still allow; a selection that is no longer offered is
        cleared before the next descendant is looked at.
        """
        field = FilterField(field)
        self._state = self._state.with_value(field, value)
        _logger.debug("Filter %s set to %r", field.value, self._state.get(field))

        for dependent in descendants_of(field):
            current = self._state.get(dependent)
            if current is None:
                continue
            if current not in self._scoped_values(dependent, in_scope=ancestors_of(dependent)):
                _logger.debug("Clearing %s=%r: not offered after %s changed", dependent.value, current, field.value)
                self._state = self._state.with_value(dependent, None)

        if self._scope is FacetScope.CONJUNCTIVE:
            self._facets = self._conjunctive_catalog()
        else:
            # Only the changed field and its ancestors narrow the descendants.
            in_scope = (field, *ancestors_of(field))
            facets = self._facets
            for dependent in descendants_of(field):
                facets = facets.with_facet(dependent, self._scoped_values(dependent, in_scope=in_scope))
            self._facets = facets
        self._results = self._filter()
        return self._results

    def set_brand(self, value: Any) -> tuple[StationRecord, ...]:
        return self.set_filter_field(FilterField.BRAND, value)

    def set_province(self, value: Any) -> tuple[StationRecord, ...]:
        return self.set_filter_field(FilterField.PROVINCE, value)

    def set_municipality(self, value: Any) -> tuple[StationRecord, ...]:
        return self.set_filter_field(FilterField.MUNICIPALITY, value)

    def set_locality(self, value: Any) -> tuple[StationRecord, ...]:
        return self.set_filter_field(FilterField.LOCALITY, value)

    def set_fuel_type(self, value: Any) -> tuple[StationRecord, ...]:
        return self.set_filter_field(FilterField.FUEL_TYPE, value)

    def clear_filters(self) -> tuple[StationRecord, ...]:
        self._state = FilterState()
        self._facets = self._conjunctive_catalog()
        self._results = self._filter()
        return self._results

    def apply_filters(self) -> tuple[StationRecord, ...]:
        """Records satisfying every active constraint.

        Nearest first once the records have been annotated with a
        distance, store order otherwise.
        """
        return self._filter()

    # ------------------------------------------------------------------
    # Distance
    # ------------------------------------------------------------------

    def annotate(self, user_lat: float, user_lng: float) -> tuple[StationRecord, ...]:
        """Rank the loaded records by distance to the given position."""
        self._ranked = tuple(self._ranker.annotate(self._store.all(), user_lat, user_lng))
        self._results = self._filter()
        return self._results

    def clear_location(self) -> tuple[StationRecord, ...]:
        """Drop distances; results go back to store order."""
        self._ranked = None
        self._ranker.reset()
        self._results = self._filter()
        return self._results

    def within_radius(self, km: float) -> tuple[StationRecord, ...]:
        """Current results no further than *km* from the user.

        Raises :class:`~pycarburantes.exceptions.NoUserLocationError` when
        no position has been applied yet.
        """
        return tuple(self._ranker.filter_by_radius(self._results, km))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _source(self) -> tuple[StationRecord, ...]:
        return self._ranked if self._ranked is not None else self._store.all()

    def _filter(self) -> tuple[StationRecord, ...]:
        filtered = [record for record in self._source() if matches(record, self._state)]
        if self._ranked is not None:
            return tuple(sort_by_distance(filtered))
        return tuple(filtered)

    def _fuel_types(self) -> tuple[str, ...]:
        records = self._store.all()
        return extract_fuel_types(records[0] if records else None)

    def _scoped_values(self, field: FilterField, *, in_scope: Collection[FilterField]) -> tuple[str, ...]:
        """Values of *field* among records matching only the *in_scope* constraints."""
        exclude = {candidate for candidate in FilterField if candidate not in in_scope}
        scoped = [record for record in self._source() if matches(record, self._state, exclude=exclude)]
        return unique_values(scoped, field)

    def _conjunctive_catalog(self) -> FacetCatalog:
        catalog = FacetCatalog(fuel_types=self._fuel_types())
        for field in _LOCATION_FIELDS:
            scoped = [record for record in self._source() if matches(record, self._state, exclude={field})]
            catalog = catalog.with_facet(field, unique_values(scoped, field))
        return catalog
