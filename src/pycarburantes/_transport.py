"""HTTP transport for the record source."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pycarburantes.config import CarburantesConfig
from pycarburantes.exceptions import CarburantesTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpTransport:
    """HTTP transport that GETs a URL and decodes the JSON body."""

    def __init__(self, config: CarburantesConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, url: str) -> Any:
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                # The service sends a UTF-8 body with a BOM on some mirrors.
                text = (await resp.text(encoding="utf-8-sig")).strip()
                if resp.status != 200:
                    raise CarburantesTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except CarburantesTransportError:
            raise
        except TimeoutError as exc:
            raise CarburantesTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise CarburantesTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CarburantesTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
