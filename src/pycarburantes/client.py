"""High-level async client for browsing fuel stations."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pycarburantes._transport import HttpTransport, Transport
from pycarburantes.config import CarburantesConfig
from pycarburantes.exceptions import CarburantesError, GeolocationError, GeolocationFailure
from pycarburantes.geolocation import GeolocationProvider
from pycarburantes.ingestion.stations import fetch_stations
from pycarburantes.models.geolocation import GeoPosition
from pycarburantes.models.station import StationRecord
from pycarburantes.state.engine import FilterEngine

_logger = logging.getLogger(__name__)


class CarburantesClient:
    """Async client that loads the station catalog and ranks it by distance.

    Usage::

        async with CarburantesClient(config, geolocation=provider) as client:
            await client.load()
            client.engine.set_province("MADRID")
            await client.locate()
            nearby = client.nearby(5)

    Every :meth:`load` takes a new load token. A fetch or a position
    request that resolves after a newer load has started is discarded.
    """

    def __init__(
        self,
        config: CarburantesConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        geolocation: GeolocationProvider | None = None,
        engine: FilterEngine | None = None,
    ) -> None:
        self._config = config if config is not None else CarburantesConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None
        self._geolocation = geolocation
        self._engine = engine if engine is not None else FilterEngine(facet_scope=self._config.facet_scope)
        self._load_token = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CarburantesClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> CarburantesConfig:
        return self._config

    @property
    def engine(self) -> FilterEngine:
        return self._engine

    @property
    def load_token(self) -> int:
        return self._load_token

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise CarburantesError("Client not initialized. Use 'async with CarburantesClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Record source
    # ------------------------------------------------------------------

    async def fetch_stations(self) -> list[StationRecord]:
        """Fetch and parse the station list without touching the engine."""
        return await fetch_stations(self._config, self._require_transport())

    async def load(self) -> bool:
        """Fetch the catalog and replace the engine snapshot.

        Returns ``True`` when the result was applied and ``False`` when a
        newer load started in the meantime. A failure of the current load
        propagates and leaves the engine untouched.
        """
        transport = self._require_transport()
        self._load_token += 1
        token = self._load_token

        try:
            records = await fetch_stations(self._config, transport)
        except CarburantesError as exc:
            if token != self._load_token:
                _logger.warning("Discarding failure of superseded load #%d: %s", token, exc)
                return False
            raise

        if token != self._load_token:
            _logger.debug("Discarding stale load #%d (current #%d)", token, self._load_token)
            return False

        self._engine.load(records)
        _logger.debug("Load #%d applied with %d stations", token, len(records))
        return True

    # ------------------------------------------------------------------
    # Geolocation
    # ------------------------------------------------------------------

    async def locate(self, provider: GeolocationProvider | None = None) -> GeoPosition | None:
        """Request the user's position and rank the loaded stations by it.

        Returns ``None`` when a new load started while the request was
        outstanding; the late position is ignored.

        Raises
        ------
        GeolocationError
            The position could not be obtained. Distances are dropped and
            results fall back to the unranked list.
        """
        provider = provider if provider is not None else self._geolocation
        if provider is None:
            raise GeolocationError("No geolocation provider configured", reason=GeolocationFailure.UNAVAILABLE)

        token = self._load_token
        try:
            position = await provider.get_current_position()
        except GeolocationError as exc:
            if token == self._load_token:
                self._engine.clear_location()
            _logger.debug("Geolocation failed (%s): %s", exc.reason, exc)
            raise

        if token != self._load_token:
            _logger.debug("Ignoring position requested before load #%d", self._load_token)
            return None

        self._engine.annotate(position.latitude, position.longitude)
        return position

    def nearby(self, km: float | None = None) -> tuple[StationRecord, ...]:
        """Current results within *km* (or the configured default radius)."""
        radius = km if km is not None else self._config.default_radius_km
        if radius is None:
            raise ValueError("No radius given and config.default_radius_km is not set")
        return self._engine.within_radius(radius)
