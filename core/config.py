# =============================================================================
# core/config.py  —  Process-wide configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the OpenWeatherMap settings from the environment ONCE, at startup,
#   into a frozen Settings object.  The object is then passed explicitly to
#   the handler and the upstream client; nothing in core/ reads os.environ
#   on its own.
#
# ENVIRONMENT VARIABLES:
#   OPENWEATHER_API_KEY   Provider credential.  Missing is NOT a startup
#                         error: every tool call reports it instead.
#   OPENWEATHER_API_BASE  Optional base URL override (tests, proxies).
#   WEATHER_LOG_LEVEL     Optional stderr log level (default INFO).
#
#   main.py calls load_dotenv() first, so a local .env file works too.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

OPENWEATHER_API_BASE = "https://api.openweathermap.org/data/2.5"


@dataclass(frozen=True)
class Settings:
    """Immutable OpenWeatherMap configuration shared by all tool calls."""

    api_key: Optional[str] = None
    base_url: str = OPENWEATHER_API_BASE
    units: str = "metric"
    lang: str = "it"
    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Return a stripped variable, or None when it is unset or blank."""
    value = environ.get(name, "").strip()
    return value or None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass
                 a plain dict.

    Returns:
        A frozen Settings instance.
    """
    if environ is None:
        environ = os.environ

    base_url = _read(environ, "OPENWEATHER_API_BASE") or OPENWEATHER_API_BASE

    return Settings(
        api_key=_read(environ, "OPENWEATHER_API_KEY"),
        base_url=base_url.rstrip("/"),
        log_level=(_read(environ, "WEATHER_LOG_LEVEL") or "INFO").upper(),
    )
