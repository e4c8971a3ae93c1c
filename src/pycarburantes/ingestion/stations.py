"""Station list ingestion + parsing."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from pycarburantes._api.stations import fetch_station_payload
from pycarburantes._constants import PRICE_PREFIXES
from pycarburantes._transport import Transport
from pycarburantes.config import CarburantesConfig
from pycarburantes.models.station import StationRecord

_logger = logging.getLogger(__name__)


def parse_station_list(
    items: Iterable[Any],
    *,
    price_prefixes: tuple[str, ...] = PRICE_PREFIXES,
) -> list[StationRecord]:
    """Parse wire records, skipping the ones that are not usable.

    A malformed record degrades to a warning instead of failing the
    whole load.
    """
    context = {"price_prefixes": price_prefixes}
    records: list[StationRecord] = []
    skipped = 0
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            skipped += 1
            _logger.warning("Skipping station #%d: expected an object, got %s", index, type(item).__name__)
            continue
        try:
            records.append(StationRecord.model_validate(item, context=context))
        except ValidationError as exc:
            skipped += 1
            _logger.warning("Skipping station #%d: %s", index, exc.errors()[0].get("msg", exc))
    if skipped:
        _logger.debug("Parsed %d stations, skipped %d", len(records), skipped)
    return records


async def fetch_stations(config: CarburantesConfig, transport: Transport) -> list[StationRecord]:
    """Fetch and parse the station list."""
    items = await fetch_station_payload(config, transport)
    return parse_station_list(items, price_prefixes=config.price_prefixes)
