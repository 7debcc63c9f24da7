from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized configuration.

    Both upstream services are public and keyless, so every value has a
    working default. Loaded from environment variables and a .env file:
    - GEOCODE_URL / WEATHER_URL override the collaborator endpoints
    - everything else is namespaced (WEATHER_CAST_LOG_LEVEL, ...) so a
      host-wide USER_AGENT or LOG_LEVEL cannot leak in
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WEATHER_CAST_",
        extra="ignore",
        populate_by_name=True,
    )

    # Upstream collaborators (unprefixed)
    geocode_url: str = Field(
        "https://nominatim.openstreetmap.org/search",
        validation_alias="GEOCODE_URL",
    )
    weather_url: str = Field(
        "https://api.open-meteo.com/v1/forecast",
        validation_alias="WEATHER_URL",
    )

    # Nominatim rejects requests without an identifying User-Agent.
    user_agent: str = "weather-cast/0.1"
    request_timeout_s: float = 10.0

    # UI
    app_name: str = "Weather Cast"
    default_city: str = "Hyderabad"

    log_level: str = "INFO"


settings = Settings()
