# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP wrapper for the get-forecast tool.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP host and core/:
#     1. Declares the tool name, description and argument schema
#     2. Lets FastMCP range-check latitude/longitude
#     3. Calls core.handler.handle_get_forecast
#     4. Converts the ToolReply dataclass into MCP TextContent
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to OpenWeatherMap (that's core/weather.py)
#   - They do NOT build the reply text (that's core/handler.py and
#     core/formatting.py)
# =============================================================================
