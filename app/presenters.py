"""
View helpers.

Turn a LookupState into plain dicts for the templates. Kept small and free
of FastAPI so it can be tested directly:
- current conditions = sample 0
- "next hours" = the first N samples, in order
- timestamps shown as hour:minute
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from .schemas import Failure, ForecastResult, ForecastSeries, Loading, LookupState, Success

NEXT_HOURS = 5


def format_hour(timestamp: str) -> str:
    """ISO-8601 timestamp -> "HH:MM" (falls back to the raw string)."""
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M")
    except ValueError:
        return timestamp


def format_value(value: Optional[float]) -> str:
    # 30.0 -> "30", 0.25 -> "0.25"; missing model data -> "n/a"
    if value is None:
        return "n/a"
    return f"{value:g}"


def current_conditions(result: ForecastResult) -> Dict[str, Any]:
    current = result.series.current
    return {
        "display_name": result.location.display_name,
        "temperature_c": format_value(current.temperature_c if current else None),
        "precipitation_probability_pct": format_value(
            current.precipitation_probability_pct if current else None
        ),
        "rain_mm": format_value(current.rain_mm if current else None),
    }


def next_hours(series: ForecastSeries, count: int = NEXT_HOURS) -> List[Dict[str, str]]:
    """First `count` samples (or fewer, if the series is shorter)."""
    return [
        {
            "time": format_hour(s.timestamp),
            "temperature_c": format_value(s.temperature_c),
            "precipitation_probability_pct": format_value(s.precipitation_probability_pct),
            "rain_mm": format_value(s.rain_mm),
        }
        for s in series.samples[:count]
    ]


def build_view(state: LookupState) -> Dict[str, Any]:
    """
    Map a LookupState to exactly one thing to show:
    "loading", "error", "card", or "idle" (nothing yet).
    """
    if isinstance(state, Loading):
        return {"mode": "loading", "query": state.query}
    if isinstance(state, Failure):
        return {"mode": "error", "error": state.reason}
    if isinstance(state, Success):
        return {
            "mode": "card",
            "current": current_conditions(state.result),
            "hours": next_hours(state.result.series),
        }
    return {"mode": "idle"}
