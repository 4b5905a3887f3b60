import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.openweathermap.org"
DEFAULT_CITY = "Delhi"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    openweather_api_key: Optional[str] = None
    openweather_base_url: str = DEFAULT_BASE_URL
    default_city: str = DEFAULT_CITY
    http_timeout: float = Field(default=10.0, gt=0)
    extrapolate: bool = False
    log_level: str = "INFO"


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Read settings from the environment, after loading a .env file if present.
    Values already in the environment win over the .env file.
    """
    load_dotenv(dotenv_path)

    raw_timeout = os.getenv("SMOKE_ALARM_HTTP_TIMEOUT", "10")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"SMOKE_ALARM_HTTP_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None

    try:
        return Settings(
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY") or None,
            openweather_base_url=os.getenv("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL),
            default_city=os.getenv("SMOKE_ALARM_DEFAULT_CITY", DEFAULT_CITY),
            http_timeout=timeout,
            extrapolate=os.getenv("SMOKE_ALARM_EXTRAPOLATE", "false").strip().lower() in _TRUTHY,
            log_level=os.getenv("SMOKE_ALARM_LOG_LEVEL", "INFO").upper(),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
