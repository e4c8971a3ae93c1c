"""Immutable snapshot of the station records of one load cycle."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pycarburantes.models.station import StationRecord


class RecordStore:
    """Holds the current station snapshot.

    A load replaces the snapshot entirely; nothing else mutates it.
    """

    def __init__(self) -> None:
        self._records: tuple[StationRecord, ...] = ()
        self._loaded = False

    def load(self, records: Iterable[StationRecord]) -> None:
        self._records = tuple(records)
        self._loaded = True

    def all(self) -> tuple[StationRecord, ...]:
        return self._records

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StationRecord]:
        return iter(self._records)
