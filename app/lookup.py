"""
ForecastLookup: the controller behind the search box.

It owns the only piece of mutable state (the current LookupState), runs
geocode -> forecast in sequence, and hands immutable state values to whoever
renders them. Nothing else mutates the state.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from .schemas import (
    Failure,
    ForecastResult,
    Idle,
    Loading,
    LookupState,
    Success,
)
from .weather_clients import NominatimClient, OpenMeteoClient, UnknownError, WeatherError

logger = logging.getLogger(__name__)

Listener = Callable[[LookupState], None]


class ForecastLookup:
    """
    Runs one lookup per `run(query)` call.

    Overlapping runs are allowed (no cancellation), but each run gets a
    generation number and only the newest generation may commit state.
    A slower, older run settles quietly: it returns its own outcome and
    leaves the controller's state alone.
    """

    def __init__(self, geocoder: NominatimClient, forecaster: OpenMeteoClient):
        self.geocoder = geocoder
        self.forecaster = forecaster
        self._state: LookupState = Idle()
        self._generation = 0
        self._listeners: List[Listener] = []

    @property
    def state(self) -> LookupState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every committed state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, generation: int, state: LookupState) -> bool:
        if generation != self._generation:
            logger.debug("Discarding %s from stale lookup #%d", state.status, generation)
            return False
        self._state = state
        for listener in list(self._listeners):
            # listener errors never escape run()
            try:
                listener(state)
            except Exception:
                logger.exception("Listener failed on %s state", state.status)
        return True

    async def run(self, query: str) -> LookupState:
        """
        Geocode `query`, fetch its hourly forecast, and settle into
        Success or Failure.

        `query` is expected to be trimmed and non-empty; the UI checks that
        before calling. Returns the outcome of this particular run.
        """
        self._generation += 1
        generation = self._generation
        logger.info("Lookup #%d started for %r", generation, query)
        self._commit(generation, Loading(query=query))

        outcome: LookupState = Loading(query=query)
        try:
            location = await self.geocoder.geocode(query)
            series = await self.forecaster.hourly_forecast(location.latitude, location.longitude)
            outcome = Success(result=ForecastResult(location=location, series=series))
        except WeatherError as e:
            outcome = Failure(reason=e.message)
        except Exception:
            logger.exception("Lookup #%d failed unexpectedly", generation)
            outcome = Failure(reason=UnknownError.default_message)
        finally:
            if isinstance(outcome, Loading):
                # Cancelled mid-flight: never leave our own Loading behind.
                self._commit(generation, Idle())
            else:
                self._commit(generation, outcome)
                logger.info("Lookup #%d settled: %s", generation, outcome.status)

        return outcome
