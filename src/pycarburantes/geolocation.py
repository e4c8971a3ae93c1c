"""Geolocation sources."""

from __future__ import annotations

from typing import Protocol

from pycarburantes.models.geolocation import GeoPosition


class GeolocationProvider(Protocol):
    """One-shot source of the user's current position.

    Implementations return a position or raise
    :class:`~pycarburantes.exceptions.GeolocationError` with the failure
    reason. Each call resolves exactly once.
    """

    async def get_current_position(self) -> GeoPosition:
        ...


class StaticGeolocation:
    """Provider that always reports the same position."""

    def __init__(self, latitude: float, longitude: float, *, accuracy: float | None = None) -> None:
        self._position = GeoPosition(latitude=latitude, longitude=longitude, accuracy=accuracy)

    async def get_current_position(self) -> GeoPosition:
        return self._position
