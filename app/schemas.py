"""
Pydantic schemas.

Two groups live here:
- upstream shapes (Nominatim / Open-Meteo JSON), validated at the boundary
  so the rest of the app never pokes at raw dicts
- our own immutable data model, including the LookupState tagged union
  the UI renders from
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# -------------------------
# Upstream response shapes
# -------------------------

class NominatimPlace(BaseModel):
    """
    One element of a Nominatim search response.

    Nominatim returns lat/lon as strings ("17.38"); pydantic parses them
    into floats and the bounds reject anything that is not a coordinate.
    """
    model_config = ConfigDict(extra="ignore")

    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    display_name: str


class OpenMeteoHourly(BaseModel):
    """The `hourly` block of an Open-Meteo forecast response."""
    model_config = ConfigDict(extra="ignore")

    time: List[str]
    # Open-Meteo emits null for hours it has no model data for.
    temperature_2m: List[Optional[float]]
    precipitation_probability: List[Optional[float]]
    rain: List[Optional[float]]

    @model_validator(mode="after")
    def _arrays_aligned(self) -> "OpenMeteoHourly":
        lengths = {
            len(self.time),
            len(self.temperature_2m),
            len(self.precipitation_probability),
            len(self.rain),
        }
        if len(lengths) != 1:
            raise ValueError("hourly arrays are not index-aligned")
        return self


class OpenMeteoForecast(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hourly: OpenMeteoHourly


# -------------------------
# Data model
# -------------------------

class GeoLocation(BaseModel):
    """Resolved location: first geocoding match only."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    display_name: str


class HourlySample(BaseModel):
    """One forecast hour (values in Celsius / percent / millimetres)."""
    model_config = ConfigDict(frozen=True)

    timestamp: str
    temperature_c: Optional[float] = None
    precipitation_probability_pct: Optional[float] = None
    rain_mm: Optional[float] = None


class ForecastSeries(BaseModel):
    """
    Ordered hourly samples.

    Built from the upstream parallel arrays; sample i holds element i of
    every array, so alignment is preserved by construction.
    """
    model_config = ConfigDict(frozen=True)

    samples: Tuple[HourlySample, ...] = ()

    @classmethod
    def from_hourly(cls, hourly: OpenMeteoHourly) -> "ForecastSeries":
        return cls(
            samples=tuple(
                HourlySample(
                    timestamp=ts,
                    temperature_c=temp,
                    precipitation_probability_pct=prob,
                    rain_mm=rain,
                )
                for ts, temp, prob, rain in zip(
                    hourly.time,
                    hourly.temperature_2m,
                    hourly.precipitation_probability,
                    hourly.rain,
                )
            )
        )

    @property
    def current(self) -> Optional[HourlySample]:
        """First sample, shown as "current conditions"."""
        return self.samples[0] if self.samples else None


class ForecastResult(BaseModel):
    """What the UI receives on success."""
    model_config = ConfigDict(frozen=True)

    location: GeoLocation
    series: ForecastSeries


# -------------------------
# Lookup state (tagged union on `status`)
# -------------------------

class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    query: str


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    result: ForecastResult


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    reason: str


LookupState = Annotated[
    Union[Idle, Loading, Success, Failure],
    Field(discriminator="status"),
]
