from app.presenters import build_view, format_hour, format_value, next_hours
from app.schemas import (
    Failure,
    ForecastResult,
    ForecastSeries,
    GeoLocation,
    Idle,
    Loading,
    OpenMeteoHourly,
    Success,
)

from .fakes import hourly_payload


def _series(temps):
    return ForecastSeries.from_hourly(OpenMeteoHourly(**hourly_payload(temps)["hourly"]))


def _result(temps):
    return ForecastResult(
        location=GeoLocation(latitude=17.38, longitude=78.48, display_name="Hyderabad, India"),
        series=_series(temps),
    )


def test_format_hour():
    assert format_hour("2025-01-01T07:00") == "07:00"
    assert format_hour("2025-01-01T18:30:00+05:30") == "18:30"
    assert format_hour("not a time") == "not a time"


def test_format_value():
    assert format_value(30.0) == "30"
    assert format_value(0.25) == "0.25"
    assert format_value(None) == "n/a"


def test_next_hours_caps_at_five_in_order():
    rows = next_hours(_series([30, 29, 28, 27, 26, 25, 24]))

    assert [r["temperature_c"] for r in rows] == ["30", "29", "28", "27", "26"]
    assert [r["time"] for r in rows] == ["00:00", "01:00", "02:00", "03:00", "04:00"]
    assert rows[3]["precipitation_probability_pct"] == "30"


def test_next_hours_with_short_series():
    assert len(next_hours(_series([30, 29]))) == 2
    assert next_hours(_series([])) == []


def test_card_shows_index_zero_as_current():
    view = build_view(Success(result=_result([30, 29, 28, 27, 26, 25])))

    assert view["mode"] == "card"
    assert view["current"] == {
        "display_name": "Hyderabad, India",
        "temperature_c": "30",
        "precipitation_probability_pct": "0",
        "rain_mm": "0",
    }
    assert len(view["hours"]) == 5


def test_view_modes_are_exclusive():
    assert build_view(Idle()) == {"mode": "idle"}
    assert build_view(Loading(query="Pune")) == {"mode": "loading", "query": "Pune"}
    assert build_view(Failure(reason="City not found")) == {"mode": "error", "error": "City not found"}
