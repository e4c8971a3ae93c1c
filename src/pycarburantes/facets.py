"""Facet derivation.

Pure functions that turn any subset of station records into the sorted,
distinct option lists used to populate the filter controls.

Ordering is Python's default ``str`` ordering, i.e. Unicode code-point
order: upper case sorts before lower case and accented letters sort after
the ASCII alphabet (``"REPSOL" < "Zoco" < "avia" < "Ávila"``). No locale
collation is applied.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pycarburantes._constants import PRICE_PREFIXES
from pycarburantes.ingestion.normalize import safe_str, strip_prefix
from pycarburantes.models.filters import FacetCatalog, FilterField
from pycarburantes.models.station import StationRecord


def unique_values(records: Iterable[StationRecord], field: FilterField | str) -> tuple[str, ...]:
    """Sorted distinct trimmed values of *field*; empty and missing are excluded."""
    name = field.value if isinstance(field, FilterField) else str(field)
    values = {text for record in records if (text := safe_str(getattr(record, name, None))) is not None}
    return tuple(sorted(values))


def extract_fuel_types(
    sample: StationRecord | Mapping[str, Any] | None,
    *,
    prefixes: tuple[str, ...] = PRICE_PREFIXES,
) -> tuple[str, ...]:
    """Fuel-type labels advertised by one sample record.

    For a wire mapping the keys starting with one of *prefixes* are picked
    and the prefix is stripped. A parsed record already carries the labels
    in ``prices``. No sample yields an empty tuple.
    """
    if sample is None:
        return ()
    if isinstance(sample, StationRecord):
        labels = {label for label in sample.prices if label}
    else:
        labels = {label for key in sample if isinstance(key, str) and (label := strip_prefix(key, prefixes))}
    return tuple(sorted(labels))


def build_catalog(records: Iterable[StationRecord], *, sample: StationRecord | None = None) -> FacetCatalog:
    """Unscoped catalog for *records*; fuel types come from *sample* or the first record."""
    records = tuple(records)
    if sample is None and records:
        sample = records[0]
    return FacetCatalog(
        brands=unique_values(records, FilterField.BRAND),
        fuel_types=extract_fuel_types(sample),
        provinces=unique_values(records, FilterField.PROVINCE),
        municipalities=unique_values(records, FilterField.MUNICIPALITY),
        localities=unique_values(records, FilterField.LOCALITY),
    )
