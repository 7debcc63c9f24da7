from app.settings import Settings


def test_url_overrides_are_read_unprefixed(monkeypatch):
    monkeypatch.setenv("GEOCODE_URL", "https://geo.example/search")
    monkeypatch.setenv("WEATHER_URL", "https://wx.example/v1/forecast")

    s = Settings(_env_file=None)

    assert s.geocode_url == "https://geo.example/search"
    assert s.weather_url == "https://wx.example/v1/forecast"


def test_host_wide_variables_do_not_leak_in(monkeypatch):
    monkeypatch.setenv("USER_AGENT", "curl/8.0")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("WEATHER_CAST_USER_AGENT", raising=False)
    monkeypatch.delenv("WEATHER_CAST_LOG_LEVEL", raising=False)

    s = Settings(_env_file=None)

    assert s.user_agent == "weather-cast/0.1"
    assert s.log_level == "INFO"


def test_app_options_use_prefix(monkeypatch):
    monkeypatch.setenv("WEATHER_CAST_DEFAULT_CITY", "Pune")
    monkeypatch.setenv("WEATHER_CAST_REQUEST_TIMEOUT_S", "2.5")

    s = Settings(_env_file=None)

    assert s.default_city == "Pune"
    assert s.request_timeout_s == 2.5


def test_defaults_point_at_public_services(monkeypatch):
    monkeypatch.delenv("GEOCODE_URL", raising=False)
    monkeypatch.delenv("WEATHER_URL", raising=False)

    s = Settings(_env_file=None)

    assert s.geocode_url == "https://nominatim.openstreetmap.org/search"
    assert s.weather_url == "https://api.open-meteo.com/v1/forecast"
