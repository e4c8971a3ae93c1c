"""User position model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeoPosition(BaseModel):
    """WGS84 position reported by a geolocation source.

    Parameters
    ----------
    latitude : float
        Latitude in decimal degrees.
    longitude : float
        Longitude in decimal degrees.
    accuracy : float or None
        Horizontal accuracy radius in metres.
    altitude : float or None
        Altitude in metres.
    altitude_accuracy : float or None
        Vertical accuracy in metres.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    accuracy: float | None = Field(default=None, ge=0.0)
    altitude: float | None = None
    altitude_accuracy: float | None = Field(default=None, ge=0.0, alias="altitudeAccuracy")
