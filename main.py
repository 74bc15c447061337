# =============================================================================
# main.py  —  Entry Point for the Weather MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed "weather-mcp" script)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (OPENWEATHER_API_KEY, ...)
#   2. Builds the immutable Settings once (core/config.py)
#   3. Creates the FastMCP server with the get-forecast tool
#      (tools/mcp_server.py)
#   4. Serves MCP over stdio until the host closes the pipe
#
# EXIT STATUS:
#   Non-zero ONLY when the server itself cannot start.  A missing API key
#   is reported to the caller on every tool call, not here; upstream
#   failures never stop the process.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file BEFORE reading the settings.
load_dotenv()

from core.config import load_settings
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger("weather")


def main() -> None:
    """Start the weather MCP server on stdio."""
    settings = load_settings()
    configure_logging(settings.log_level)

    if not settings.has_credential:
        logger.warning("OPENWEATHER_API_KEY is not set; get-forecast will report a configuration error")

    server = create_server(settings)

    try:
        logger.info("Weather MCP Server running on stdio (using OpenWeatherMap)")
        server.run(transport="stdio")
    except Exception as exc:
        logger.error(f"Fatal error in main(): {exc}")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
