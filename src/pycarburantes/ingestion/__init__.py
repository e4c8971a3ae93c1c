"""Ingestion layer.

This package turns wire payloads from the record source into normalized
:class:`~pycarburantes.models.station.StationRecord` objects.
"""

__all__: list[str] = []
