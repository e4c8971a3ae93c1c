"""Custom exception hierarchy for pycarburantes."""

from __future__ import annotations

from enum import StrEnum


class CarburantesError(Exception):
    """Base exception for all pycarburantes errors."""


class CarburantesConfigError(CarburantesError):
    """Invalid or missing configuration."""


class CarburantesTransportError(CarburantesError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class CarburantesApiError(CarburantesError):
    """The record source answered, but not with a station list."""

    def __init__(self, message: str, *, result: str = "") -> None:
        self.result = result
        super().__init__(message)


class GeolocationFailure(StrEnum):
    DENIED = "denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"


class GeolocationError(CarburantesError):
    """The user's position could not be obtained."""

    def __init__(self, message: str, *, reason: GeolocationFailure = GeolocationFailure.UNAVAILABLE) -> None:
        self.reason = reason
        super().__init__(message)


class NoUserLocationError(CarburantesError):
    """A distance operation was requested before any annotation pass.

    Distinct from an empty result: callers can tell "no user location yet"
    apart from "no stations within radius".
    """
