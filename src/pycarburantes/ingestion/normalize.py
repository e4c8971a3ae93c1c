"""Normalization helpers.

Centralizes defensive parsing of wire values.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def clean_label(value: Any) -> str:
    """Trimmed string form of a categorical value; missing becomes ``""``."""
    return safe_str(value) or ""


def parse_decimal(value: Any) -> float | None:
    """Parse a number that may use a comma decimal separator.

    ``"40,416775"`` → ``40.416775``. Empty, non-numeric and non-finite
    values yield ``None``. Real numbers pass through.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip()
        if not text or text == "--":
            return None
        # With both separators present the last one is the decimal separator.
        if "," in text and "." in text:
            if text.rfind(",") > text.rfind("."):
                text = text.replace(".", "").replace(",", ".")
            else:
                text = text.replace(",", "")
        elif "," in text:
            text = text.replace(",", ".")
        try:
            result = float(text)
        except ValueError:
            return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def parse_latitude(value: Any) -> float | None:
    parsed = parse_decimal(value)
    if parsed is None or not -90.0 <= parsed <= 90.0:
        return None
    return parsed


def parse_longitude(value: Any) -> float | None:
    parsed = parse_decimal(value)
    if parsed is None or not -180.0 <= parsed <= 180.0:
        return None
    return parsed


def strip_prefix(key: str, prefixes: Iterable[str]) -> str | None:
    """Return *key* without the first matching prefix, or ``None``."""
    for prefix in prefixes:
        if key.startswith(prefix):
            label = key[len(prefix) :].strip()
            return label or None
    return None


def collect_prices(values: Mapping[str, Any], prefixes: Iterable[str]) -> dict[str, float | None]:
    """Pick the ``"<prefix><fuel>"`` keys out of a wire record.

    A key that is present with an empty price is kept with a ``None`` value;
    presence alone means the station advertises the fuel.
    """
    prefixes = tuple(prefixes)
    prices: dict[str, float | None] = {}
    for key, value in values.items():
        if not isinstance(key, str):
            continue
        label = strip_prefix(key, prefixes)
        if label is None:
            continue
        prices[label] = parse_decimal(value)
    return prices
