"""Current weather conditions from the Open-Meteo forecast API."""

from __future__ import annotations

import http.client
import json
import logging
import urllib.request
from decimal import Decimal
from typing import Any

from ..errors import HttpError
from ..widget import TempUnit, WeatherData, Widget

_log = logging.getLogger(__name__)

_API_URL = "https://api.open-meteo.com/v1/forecast"
_CURRENT_FIELDS = "temperature_2m,weather_code,wind_speed_10m,relative_humidity_2m"
_TIMEOUT_SECONDS = 10


def _format_coordinate(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _real(current: dict[str, Any], key: str) -> float:
    value = current[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid type for `{key}`: {value!r}")
    return float(value)


def _integer(current: dict[str, Any], key: str, maximum: int) -> int:
    value = current[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type for `{key}`: {value!r}")
    if not 0 <= value <= maximum:
        raise ValueError(f"`{key}` out of range: {value}")
    return value


def parse_response(body: bytes | str, unit: TempUnit) -> WeatherData:
    """Build weather data from a forecast response body; raises HttpError if malformed."""
    try:
        document = json.loads(body)
        current = document["current"]
        if not isinstance(current, dict):
            raise ValueError("`current` is not an object")
        return WeatherData(
            temperature=_real(current, "temperature_2m"),
            weather_code=_integer(current, "weather_code", 2**16 - 1),
            wind_speed=_real(current, "wind_speed_10m"),
            humidity=_integer(current, "relative_humidity_2m", 2**8 - 1),
            unit=unit,
        )
    except (ValueError, KeyError, TypeError) as exc:
        raise HttpError(f"json parse error: {exc}") from exc


class WeatherWidget(Widget):
    """Fetches current conditions for a location; falls back to the last result."""

    def __init__(self, name: str, latitude: float, longitude: float, unit: TempUnit) -> None:
        self.name = name
        self.latitude = latitude
        self.longitude = longitude
        self.unit = unit
        self._last: WeatherData | None = None

    def build_url(self) -> str:
        """Return the forecast request URL for this location and unit."""
        return (
            f"{_API_URL}"
            f"?latitude={_format_coordinate(self.latitude)}"
            f"&longitude={_format_coordinate(self.longitude)}"
            f"&current={_CURRENT_FIELDS}"
            f"&temperature_unit={self.unit.value}"
        )

    def _fetch(self) -> bytes:
        try:
            with urllib.request.urlopen(self.build_url(), timeout=_TIMEOUT_SECONDS) as response:
                return response.read()
        except (OSError, http.client.HTTPException) as exc:
            raise HttpError(f"http request failed: {exc}") from exc

    def update(self) -> WeatherData:
        """Fetch current weather; on failure return cached data or raise HttpError."""
        try:
            data = parse_response(self._fetch(), self.unit)
        except HttpError as exc:
            if self._last is None:
                raise
            _log.warning("weather %s: %s; returning stale data", self.name, exc)
            return self._last
        self._last = data
        return data