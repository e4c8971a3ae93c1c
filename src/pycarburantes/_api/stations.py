"""Station list endpoint of the public fuel-price service."""

from __future__ import annotations

import logging
from typing import Any

from pycarburantes._constants import RESULT_KEY, RESULT_OK, STATION_LIST_KEY
from pycarburantes._transport import Transport
from pycarburantes.config import CarburantesConfig
from pycarburantes.exceptions import CarburantesApiError

_logger = logging.getLogger(__name__)


def extract_station_list(body: Any) -> list[Any]:
    """Unwrap the station array from a service response.

    Accepts the service envelope (``{"ResultadoConsulta": "OK",
    "ListaEESSPrecio": [...]}``) or a bare JSON array.
    """
    if isinstance(body, list):
        return body
    if not isinstance(body, dict):
        raise CarburantesApiError(f"Unexpected response type {type(body).__name__}")

    result = body.get(RESULT_KEY)
    if result is not None and str(result).strip().upper() != RESULT_OK:
        raise CarburantesApiError(f"Record source reported {result!r}", result=str(result))

    items = body.get(STATION_LIST_KEY)
    if not isinstance(items, list):
        raise CarburantesApiError(f"Missing {STATION_LIST_KEY!r} in response")
    return items


async def fetch_station_payload(config: CarburantesConfig, transport: Transport) -> list[Any]:
    """Fetch the raw station array."""
    body = await transport.get_json(config.base_url)
    items = extract_station_list(body)
    _logger.debug("Record source returned %d stations", len(items))
    return items
