# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows through one get-forecast call.  They carry no behavior: decoding
# lives in core/weather.py, rendering in core/formatting.py.
#
# LIFETIME:
#   Every object here is created inside a single tool invocation and dropped
#   when the reply is returned.  Nothing is cached across calls, so all the
#   models are frozen.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


# Inclusive coordinate bounds, enforced by the tool schema in tools/mcp_server.py
LATITUDE_MIN = -90.0
LATITUDE_MAX = 90.0
LONGITUDE_MIN = -180.0
LONGITUDE_MAX = 180.0


# -----------------------------------------------------------------------------
# Coordinate — where to look up the weather
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair that has already passed range validation."""

    latitude: float                    # -90 .. 90
    longitude: float                   # -180 .. 180


# -----------------------------------------------------------------------------
# WeatherSnapshot — one normalized OpenWeatherMap "current weather" response
# -----------------------------------------------------------------------------
# The provider sends a lot more (coord, visibility, clouds, sys, ...).  We
# keep only what the formatter prints.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Temperature:
    current: float                     # °C
    feels_like: float                  # °C
    minimum: float                     # °C
    maximum: float                     # °C


@dataclass(frozen=True)
class Conditions:
    summary: str                       # e.g. "Clear" (weather[0].main)
    description: str                   # e.g. "cielo sereno" (weather[0].description)


@dataclass(frozen=True)
class Wind:
    speed_mps: float                   # metres per second
    direction_deg: int                 # meteorological degrees


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for one location, metric units."""

    location_name: Optional[str]       # None when the provider has no name
    temperature: Temperature
    pressure_hpa: int
    humidity_pct: int
    conditions: Conditions             # primary condition only (weather[0])
    wind: Wind


# -----------------------------------------------------------------------------
# FetchFailure — why the upstream call produced no snapshot
# -----------------------------------------------------------------------------
class FailureReason(str, Enum):
    NETWORK = "network"                # connection refused, DNS, timeout, ...
    HTTP_STATUS = "http_status"        # provider answered with a non-2xx status
    MALFORMED_PAYLOAD = "malformed_payload"  # not JSON, or missing fields


@dataclass(frozen=True)
class FetchFailure:
    """Typed failure returned by fetch_current_weather instead of raising."""

    reason: FailureReason
    message: str                       # diagnostic detail, for logs only
    status_code: Optional[int] = None  # set for HTTP_STATUS failures


# What the upstream client hands back: a snapshot or a typed failure.
FetchResult = Union[WeatherSnapshot, FetchFailure]


# -----------------------------------------------------------------------------
# ToolReply — the envelope returned to the MCP host
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextBlock:
    text: str
    type: str = "text"


@dataclass(frozen=True)
class ToolReply:
    """Reply to one tool call.  Always exactly one text block, errors included."""

    content: list[TextBlock] = field(default_factory=list)
