#!/usr/bin/env python3
"""
MCP Server for Pikud Haoref (Israeli Emergency Alert System)

Exposes the red alert tools over the Model Context Protocol. Every tool goes
through the shared dispatcher and returns its JSON record as text.
"""
import json
import logging
import os
import sys
from typing import Any, Dict

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from .. import __version__
from .config import HOST, MCP_PORT, OREF_ALERTS_URL, configure_logging
from .state import get_composer
from .tools import call_tool

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

# Log startup information
logger.info("=== Red Alert MCP Server Starting ===")
logger.info(f"Python version: {sys.version}")
logger.info(f"Working directory: {os.getcwd()}")
logger.info(f"API Endpoint: {OREF_ALERTS_URL}")


def render(result: Dict[str, Any]) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


async def run_tool(name: str, arguments: Dict[str, Any]) -> str:
    return render(await call_tool(await get_composer(), name, arguments))


# Initialize MCP server
mcp = FastMCP(
    name="Red Alert System",
    instructions="""
    A Model Context Protocol (MCP) server for Israeli emergency alerts from the official
    Pikud Haoref (Home Front Command) API at oref.org.il.

    This server provides:
    - Current active alerts, enriched with location data (area, shelter time, coordinates)
    - Recent alert history
    - Location lookups by Hebrew or English name
    - Alert counts and severity levels
    - Alerts for a specific area (e.g. 'עוטף עזה', 'מרכז', 'צפון')
    - Alert category descriptions and recommended actions

    Requests to oref.org.il are rate limited to one per second, so concurrent tool
    calls are answered in turn. Every tool returns a JSON document with a "status"
    field; failures are reported with status "error" and a message.
    """
)


@mcp.tool()
async def get_current_alerts(include_enhanced_data: bool = True) -> str:
    """Get current active red alerts from Israeli Pikud ha-oref (Home Front Command)"""
    return await run_tool("get_current_alerts", {"include_enhanced_data": include_enhanced_data})


@mcp.tool()
async def get_alert_history(limit: int = 10) -> str:
    """
    Get historical red alert data from Israeli Pikud ha-oref.

    Args:
        limit: Maximum number of historical alerts to return (1-100, default: 10)
    """
    return await run_tool("get_alert_history", {"limit": limit})


@mcp.tool()
async def get_location_info(location_name: str) -> str:
    """
    Get detailed information about a specific location/city.

    Args:
        location_name: Name of the location in Hebrew or English (e.g., "שדרות" or "Sderot")
    """
    return await run_tool("get_location_info", {"location_name": location_name})


@mcp.tool()
async def count_active_alerts() -> str:
    """Count the number of currently active red alerts"""
    return await run_tool("count_active_alerts", {})


@mcp.tool()
async def get_alert_status(include_history: bool = False, include_category_info: bool = True) -> str:
    """
    Get comprehensive alert status including current alerts and statistics.

    Args:
        include_history: Whether to include recent historical data
        include_category_info: Include detailed category information
    """
    return await run_tool(
        "get_alert_status",
        {"include_history": include_history, "include_category_info": include_category_info},
    )


@mcp.tool()
async def get_area_alerts(area_name: str) -> str:
    """
    Get alerts for a specific geographic area.

    Args:
        area_name: Name of the area in Hebrew (e.g., "עוטף עזה", "מרכז", "צפון")
    """
    return await run_tool("get_area_alerts", {"area_name": area_name})


@mcp.tool()
async def get_alert_category_info(category: str = "all") -> str:
    """
    Get detailed information about alert categories.

    Args:
        category: Alert category number (1-6) or "all" for all categories
    """
    return await run_tool("get_alert_category_info", {"category": category})


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "service": "mcp-tools", "version": __version__})


def main():
    logger.info("🚀 Starting Red Alert MCP Server (HTTP Transport)")
    logger.info(f"🌐 Listening on port: {MCP_PORT}")
    mcp.run(transport="streamable-http", host=HOST, port=MCP_PORT)


if __name__ == "__main__":
    main()
