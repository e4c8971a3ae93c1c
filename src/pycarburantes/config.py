"""Client configuration for pycarburantes."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycarburantes._constants import BASE_URL, PRICE_PREFIXES, USER_AGENT
from pycarburantes.exceptions import CarburantesConfigError
from pycarburantes.models.filters import FacetScope


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise CarburantesConfigError(f"{name} must be a number, got {value!r}") from exc


def _env_prefixes(value: str) -> tuple[str, ...]:
    # Prefixes carry a significant trailing space; only split on commas.
    prefixes = tuple(part for part in value.split(",") if part.strip())
    if not prefixes:
        raise CarburantesConfigError("CARBURANTES_PRICE_PREFIXES must name at least one prefix")
    return prefixes


def _env_facet_scope(value: str) -> FacetScope:
    try:
        return FacetScope(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(scope.value for scope in FacetScope)
        raise CarburantesConfigError(f"CARBURANTES_FACET_SCOPE must be one of {choices}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CarburantesConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Record source URL. Defaults to the public Spanish fuel-price service.
    request_timeout : float
        Total timeout in seconds for one record fetch.
    price_prefixes : tuple of str
        Wire key prefixes that mark a fuel-price field (``"Price "``,
        ``"Precio "``). The remainder of the key is the fuel-type label.
    facet_scope : FacetScope
        How facet catalogs are scoped after a filter change.
    default_radius_km : float or None
        Radius used by callers that do not pass one explicitly.
    user_agent : str
        User-Agent header sent with every request.
    """

    base_url: str = BASE_URL
    request_timeout: float = 30.0
    price_prefixes: tuple[str, ...] = PRICE_PREFIXES
    facet_scope: FacetScope = FacetScope.CONJUNCTIVE
    default_radius_km: float | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise CarburantesConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.default_radius_km is not None and self.default_radius_km < 0:
            raise CarburantesConfigError(f"default_radius_km must not be negative, got {self.default_radius_km}")
        if not self.price_prefixes:
            raise CarburantesConfigError("price_prefixes must not be empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> CarburantesConfig:
        """Create configuration from environment variables.

        Reads the optional ``CARBURANTES_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CarburantesConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("CARBURANTES_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url.strip()

        timeout_env = env.get("CARBURANTES_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("CARBURANTES_REQUEST_TIMEOUT", timeout_env)

        prefixes_env = env.get("CARBURANTES_PRICE_PREFIXES")
        if prefixes_env is not None and "price_prefixes" not in overrides:
            config_kwargs["price_prefixes"] = _env_prefixes(prefixes_env)

        scope_env = env.get("CARBURANTES_FACET_SCOPE")
        if scope_env is not None and "facet_scope" not in overrides:
            config_kwargs["facet_scope"] = _env_facet_scope(scope_env)

        radius_env = env.get("CARBURANTES_RADIUS_KM")
        if radius_env is not None and "default_radius_km" not in overrides:
            config_kwargs["default_radius_km"] = _env_float("CARBURANTES_RADIUS_KM", radius_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
