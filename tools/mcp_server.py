# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server that exposes the "get-forecast" tool.  The
#   tool is a thin wrapper around core/handler.py: it declares the argument
#   schema, converts the arguments into a Coordinate, and converts the
#   handler's ToolReply into MCP text content.
#
# HOW IT WORKS (the flow):
#   1. The host calls "get-forecast" with {"latitude": ..., "longitude": ...}
#   2. FastMCP validates both numbers against the Field bounds below;
#      out-of-range values are rejected here, before any core code runs
#   3. handle_get_forecast() checks the credential, calls OpenWeatherMap
#      and formats the answer
#   4. The ToolReply becomes a ToolResult with exactly one TextContent
#
# RUNNING THIS SERVER:
#   main.py loads the settings and calls create_server(settings).run().
#   Tests build their own server with a fake Settings and an httpx client
#   backed by httpx.MockTransport.
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from typing import Annotated, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

# The tools layer depends on core/ and nothing else.
from core.config import Settings
from core.handler import handle_get_forecast
from core.models import (
    LATITUDE_MAX,
    LATITUDE_MIN,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
    Coordinate,
    ToolReply,
)

SERVER_NAME = "weather"
SERVER_VERSION = "1.0.0"
FORECAST_TOOL = "get-forecast"
FORECAST_DESCRIPTION = (
    "Ottieni la previsione meteo attuale per una posizione in Italia o Europa (e nel mondo)"
)

logger = logging.getLogger(__name__)

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to the host over STDOUT.
# Anything printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for the reply
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr in the "[MCP]" format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # httpx logs every request URL at INFO, and ours carry the appid
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_response(tool_name: str, reply: ToolReply) -> ToolReply:
    """Log the reply as compact JSON in GREEN, then return it."""
    payload = json.dumps(asdict(reply), separators=(",", ":"), ensure_ascii=False)
    logger.info(f"{_GREEN}  ← {tool_name} response: {payload}{_RESET}")
    return reply


def to_tool_result(reply: ToolReply) -> ToolResult:
    """Convert the core reply envelope into MCP text content."""
    return ToolResult(
        content=[TextContent(type="text", text=block.text) for block in reply.content]
    )


# =============================================================================
# Server factory
# =============================================================================
def create_server(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastMCP:
    """Create the "weather" FastMCP server with the get-forecast tool.

    Args:
        settings: Configuration loaded once at startup; captured by the tool.
        http_client: Optional shared httpx client for upstream calls.  When
                     None each call opens its own short-lived client.

    Returns:
        A FastMCP instance ready for ``run()`` or for an in-memory Client.
    """
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    @mcp.tool(name=FORECAST_TOOL, description=FORECAST_DESCRIPTION)
    async def get_forecast(
        latitude: Annotated[
            float,
            Field(ge=LATITUDE_MIN, le=LATITUDE_MAX, description="Latitudine della posizione"),
        ],
        longitude: Annotated[
            float,
            Field(ge=LONGITUDE_MIN, le=LONGITUDE_MAX, description="Longitudine della posizione"),
        ],
    ) -> ToolResult:
        _log_request(FORECAST_TOOL, latitude=latitude, longitude=longitude)

        reply = await handle_get_forecast(
            Coordinate(latitude=latitude, longitude=longitude),
            settings,
            client=http_client,
        )
        return to_tool_result(_log_response(FORECAST_TOOL, reply))

    return mcp
