# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic behind the get-forecast tool:
# configuration, the OpenWeatherMap client, the text formatter and the
# handler that ties them together.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  The handler
#   returns plain dataclasses; tools/ translates them into MCP content.
# =============================================================================
