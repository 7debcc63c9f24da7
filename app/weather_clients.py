"""
Weather clients.

API logic is kept apart from the lookup controller and the FastAPI routes:
- easier to test in isolation (inject an httpx transport)
- upstream JSON is validated here, so callers only see our own models
- every failure leaves this module as a WeatherError subclass
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

import httpx
from pydantic import ValidationError

from .schemas import ForecastSeries, GeoLocation, NominatimPlace, OpenMeteoForecast

logger = logging.getLogger(__name__)

HOURLY_FIELDS = "temperature_2m,precipitation_probability,rain"


class WeatherError(RuntimeError):
    """Raised for user-facing weather lookup failures."""

    default_message = "Unknown error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(WeatherError):
    """Geocoding returned no match for the query."""

    default_message = "City not found"


class UpstreamError(WeatherError):
    """The forecast service answered with a non-success status."""

    default_message = "Failed to fetch weather data"


class UnknownError(WeatherError):
    """Malformed response, transport failure, or anything else unrecognized."""


async def _get_json(
    url: str,
    params: Dict[str, Any],
    *,
    timeout_s: float,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    status_error: Type[WeatherError],
) -> Any:
    """
    One GET request, decoded as JSON.

    Non-2xx statuses raise `status_error`; network errors and undecodable
    bodies raise UnknownError.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_s, headers=headers, transport=transport) as client:
            r = await client.get(url, params=params)
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %r", url, e)
        raise UnknownError() from e

    if not r.is_success:
        logger.warning("%s answered %s: %s", url, r.status_code, r.text[:200])
        raise status_error(status_code=r.status_code)

    try:
        return r.json()
    except ValueError as e:
        logger.warning("%s returned a non-JSON body", url)
        raise UnknownError() from e


class NominatimClient:
    """
    Nominatim (OpenStreetMap) geocoding.

    Endpoint used:
        /search?format=json&q=...

    Only the first match is ever used.
    """

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org/search",
        user_agent: str = "weather-cast/0.1",
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base = base_url
        self.user_agent = user_agent
        self.timeout_s = timeout_s
        self.transport = transport

    async def geocode(self, query: str) -> GeoLocation:
        """Resolve a place name into coordinates plus a display name."""
        data = await _get_json(
            self.base,
            {"format": "json", "q": query},
            timeout_s=self.timeout_s,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
            # Only a failed forecast request is an UpstreamError.
            status_error=UnknownError,
        )

        if not isinstance(data, list):
            logger.warning("Unexpected geocoding payload for %r: %s", query, type(data).__name__)
            raise UnknownError()
        if not data:
            raise NotFoundError()

        # Later matches are never used, so only the first one has to be well-formed.
        try:
            best = NominatimPlace.model_validate(data[0])
        except ValidationError as e:
            logger.warning("Unexpected geocoding payload for %r: %s", query, e)
            raise UnknownError() from e

        return GeoLocation(latitude=best.lat, longitude=best.lon, display_name=best.display_name)


class OpenMeteoClient:
    """
    Open-Meteo hourly forecast.

    No API key required. Values come back in Celsius / percent / mm,
    which is exactly what we display.
    """

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com/v1/forecast",
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base = base_url
        self.timeout_s = timeout_s
        self.transport = transport

    async def hourly_forecast(self, lat: float, lon: float) -> ForecastSeries:
        """Fetch hourly temperature, precipitation probability and rain."""
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": HOURLY_FIELDS,
        }
        data = await _get_json(
            self.base,
            params,
            timeout_s=self.timeout_s,
            transport=self.transport,
            status_error=UpstreamError,
        )

        try:
            forecast = OpenMeteoForecast.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected forecast payload for %s,%s: %s", lat, lon, e)
            raise UnknownError() from e

        return ForecastSeries.from_hourly(forecast.hourly)
