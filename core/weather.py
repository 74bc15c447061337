# =============================================================================
# core/weather.py  —  OpenWeatherMap Upstream Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a validated Coordinate into a WeatherSnapshot by calling the
#   OpenWeatherMap "current weather" endpoint:
#
#     GET {base}/weather?lat=41.9028&lon=12.4964&appid=...&units=metric&lang=it
#
# FAILURE POLICY:
#   fetch_current_weather() NEVER raises.  Every problem (connection error,
#   non-2xx status, body that is not JSON, body missing fields) is logged
#   and returned as a FetchFailure.  The handler decides what the caller
#   sees; this module only reports what went wrong.
#
# THE SEPARATION OF "FETCH" AND "PARSE":
#   - fetch_current_weather() owns the HTTP exchange
#   - parse_snapshot() maps the provider's JSON onto our dataclasses
#   parse_snapshot() is pure, so the untrusted-shape checks are testable
#   without any HTTP mocking.
# =============================================================================

import logging
import math
from typing import Any, Optional

import httpx

from core.config import Settings
from core.models import (
    Conditions,
    Coordinate,
    FailureReason,
    FetchFailure,
    FetchResult,
    Temperature,
    WeatherSnapshot,
    Wind,
)

_logger = logging.getLogger(__name__)


class SnapshotDecodeError(ValueError):
    """The provider's JSON does not have the current-weather shape."""


# =============================================================================
# URL construction
# =============================================================================
def build_weather_url(coordinate: Coordinate, settings: Settings) -> str:
    """Build the current-weather URL.  Coordinates are fixed to 4 decimals."""
    return (
        f"{settings.base_url}/weather"
        f"?lat={coordinate.latitude:.4f}&lon={coordinate.longitude:.4f}"
        f"&appid={settings.api_key}&units={settings.units}&lang={settings.lang}"
    )


# =============================================================================
# Payload decoding
# =============================================================================
def _section(payload: Any, key: str) -> dict:
    value = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(value, dict):
        raise SnapshotDecodeError(f"missing object '{key}'")
    return value


def _number(section: dict, key: str) -> float:
    value = section.get(key)
    # bool is an int subclass; the provider never sends one for a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotDecodeError(f"missing numeric field '{key}'")
    try:
        number = float(value)
    except OverflowError:
        raise SnapshotDecodeError(f"numeric field '{key}' out of range") from None
    # json accepts NaN, Infinity and overflowing literals such as 1e400
    if not math.isfinite(number):
        raise SnapshotDecodeError(f"numeric field '{key}' is not finite")
    return number


def parse_snapshot(payload: Any) -> WeatherSnapshot:
    """Map an OpenWeatherMap current-weather body onto a WeatherSnapshot.

    Only the first entry of ``weather`` is kept: the provider may report
    several simultaneous conditions, the first one is the primary.

    Raises:
        SnapshotDecodeError: if ``main``, ``wind``, ``weather[0]`` or one of
            the numeric fields the formatter needs is missing.
    """
    main = _section(payload, "main")
    wind = _section(payload, "wind")

    weather = payload.get("weather")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        raise SnapshotDecodeError("missing 'weather[0]'")
    primary = weather[0]
    description = primary.get("description")
    if not isinstance(description, str):
        raise SnapshotDecodeError("missing 'weather[0].description'")

    name = payload.get("name")

    return WeatherSnapshot(
        location_name=name if isinstance(name, str) and name else None,
        temperature=Temperature(
            current=_number(main, "temp"),
            feels_like=_number(main, "feels_like"),
            minimum=_number(main, "temp_min"),
            maximum=_number(main, "temp_max"),
        ),
        pressure_hpa=round(_number(main, "pressure")),
        humidity_pct=round(_number(main, "humidity")),
        conditions=Conditions(
            summary=str(primary.get("main") or ""),
            description=description,
        ),
        wind=Wind(
            speed_mps=_number(wind, "speed"),
            direction_deg=round(_number(wind, "deg")),
        ),
    )


def _provider_message(response: httpx.Response) -> str:
    """Pull OpenWeatherMap's ``message`` out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Unknown error"


# =============================================================================
# PUBLIC API: fetch_current_weather
# =============================================================================
async def fetch_current_weather(
    coordinate: Coordinate,
    settings: Settings,
    *,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[logging.Logger] = None,
) -> FetchResult:
    """Fetch the current weather for ``coordinate``.

    One GET, no retry, no backoff and no timeout beyond httpx's default.

    Args:
        coordinate: Already range-checked by the tool schema.
        settings: Credential, base URL, units and language.
        client: Shared AsyncClient.  When omitted a client is opened and
                closed around this single request.
        logger: Where diagnostics go.  Defaults to this module's logger.

    Returns:
        A WeatherSnapshot, or a FetchFailure describing what went wrong.
    """
    log = logger or _logger
    url = build_weather_url(coordinate, settings)

    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log.warning("Error making OpenWeatherMap request: %r", exc)
        return FetchFailure(FailureReason.NETWORK, str(exc) or type(exc).__name__)

    if not response.is_success:
        message = f"HTTP error! status: {response.status_code}. Message: {_provider_message(response)}"
        log.warning("Error making OpenWeatherMap request: %s", message)
        return FetchFailure(FailureReason.HTTP_STATUS, message, response.status_code)

    try:
        snapshot = parse_snapshot(response.json())
    except ValueError as exc:
        # json.JSONDecodeError and SnapshotDecodeError are both ValueErrors
        log.warning("Malformed OpenWeatherMap response: %s", exc)
        return FetchFailure(FailureReason.MALFORMED_PAYLOAD, str(exc))

    log.info("Weather data for (%.4f, %.4f): %s", coordinate.latitude, coordinate.longitude, snapshot)
    return snapshot
