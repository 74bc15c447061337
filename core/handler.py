# =============================================================================
# core/handler.py  —  The get-forecast tool handler
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Runs one get-forecast call from validated arguments to a ToolReply:
#
#     credential configured? ──no──▶ MISSING_CREDENTIAL_MESSAGE
#            │ yes
#            ▼
#     fetch_current_weather ──failure──▶ RETRIEVAL_FAILED_MESSAGE
#            │ snapshot
#            ▼
#     format_weather ──▶ formatted text
#
#   Exactly one of the three replies comes out of every call, and nothing
#   raises past this function: the MCP host never sees a protocol error
#   caused by the weather provider.
#
# CREDENTIAL FIRST:
#   With no OPENWEATHER_API_KEY configured the provider is never contacted.
# =============================================================================

import logging
from typing import Optional

import httpx

from core.config import Settings
from core.formatting import format_weather
from core.models import Coordinate, FetchFailure, TextBlock, ToolReply
from core.weather import fetch_current_weather

_logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = (
    "La chiave API di OpenWeatherMap non è configurata correttamente sul server."
)
RETRIEVAL_FAILED_MESSAGE = "Impossibile recuperare i dati meteo. Verifica le coordinate."


def text_reply(text: str) -> ToolReply:
    """Wrap ``text`` in the single-block reply envelope."""
    return ToolReply(content=[TextBlock(text=text)])


async def handle_get_forecast(
    coordinate: Coordinate,
    settings: Settings,
    *,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[logging.Logger] = None,
) -> ToolReply:
    """Answer one get-forecast call.

    Args:
        coordinate: Latitude/longitude already validated by the tool schema.
        settings: Process-wide configuration built at startup.
        client: Optional shared httpx client, forwarded to the upstream call.
        logger: Optional logger, forwarded to the upstream call.

    Returns:
        A ToolReply holding the misconfiguration text, the retrieval-failure
        text, or the formatted weather.
    """
    log = logger or _logger

    if not settings.has_credential:
        log.error("OPENWEATHER_API_KEY is not set; refusing to call OpenWeatherMap")
        return text_reply(MISSING_CREDENTIAL_MESSAGE)

    result = await fetch_current_weather(coordinate, settings, client=client, logger=log)

    if isinstance(result, FetchFailure):
        log.warning("get-forecast failed (%s) for %s", result.reason.value, coordinate)
        return text_reply(RETRIEVAL_FAILED_MESSAGE)

    return text_reply(format_weather(result))
