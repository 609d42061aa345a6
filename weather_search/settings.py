from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized configuration.

    Loaded from:
    - environment variables
    - .env file (if present)
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Weather Search"

    # MetaWeather-compatible location/weather API
    weather_api_base: str = "https://www.metaweather.com"
    request_timeout_s: float = 10.0

    # Quiet period after the last keystroke before a search is sent
    search_debounce_ms: int = 300

    # Serve canned demo data instead of calling the API
    use_mock_client: bool = False
    mock_latency_ms: int = 0

    log_level: str = "INFO"


settings = Settings()
