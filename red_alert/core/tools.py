"""
Tool registry and dispatch.

Every tool is described by a pydantic argument model. ``call_tool`` validates
the arguments, runs the matching ResponseComposer operation and converts any
failure into an error record, so a bad call never takes the server down.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import RedAlertError, ToolArgumentError, UnknownToolError

logger = logging.getLogger(__name__)


# Pydantic models for tool arguments
class GetCurrentAlertsArgs(BaseModel):
    include_enhanced_data: bool = Field(True, description="Include enhanced location data with coordinates and shelter times")


class GetAlertHistoryArgs(BaseModel):
    limit: int = Field(10, ge=1, le=100, description="Maximum number of historical alerts to return")


class GetLocationInfoArgs(BaseModel):
    location_name: str = Field(..., min_length=1, description="Name of the location to get information about (Hebrew or English)")


class CountActiveAlertsArgs(BaseModel):
    pass


class GetAlertStatusArgs(BaseModel):
    include_history: bool = Field(False, description="Whether to include recent historical data")
    include_category_info: bool = Field(True, description="Include detailed category information")


class GetAreaAlertsArgs(BaseModel):
    area_name: str = Field(..., min_length=1, description="Name of the area (e.g., 'עוטף עזה', 'מרכז', 'צפון')")


class GetAlertCategoryInfoArgs(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    category: str = Field("all", description="Alert category number (1-6) or 'all' for all categories")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: Type[BaseModel]


TOOLS: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec("get_current_alerts", "Get current active red alerts from Israeli Pikud ha-oref (Home Front Command)", GetCurrentAlertsArgs),
        ToolSpec("get_alert_history", "Get historical red alert data from Israeli Pikud ha-oref", GetAlertHistoryArgs),
        ToolSpec("get_location_info", "Get detailed information about a specific location/city", GetLocationInfoArgs),
        ToolSpec("count_active_alerts", "Count the number of currently active red alerts", CountActiveAlertsArgs),
        ToolSpec("get_alert_status", "Get comprehensive alert status including current alerts and statistics", GetAlertStatusArgs),
        ToolSpec("get_area_alerts", "Get alerts for a specific geographic area", GetAreaAlertsArgs),
        ToolSpec("get_alert_category_info", "Get detailed information about alert categories", GetAlertCategoryInfoArgs),
    )
}


def list_tools() -> List[Dict[str, Any]]:
    """Name, description and JSON schema of every tool."""
    return [
        {"name": spec.name, "description": spec.description, "inputSchema": spec.args_model.model_json_schema()}
        for spec in TOOLS.values()
    ]


def validate_arguments(spec: ToolSpec, arguments: Optional[Dict[str, Any]]) -> BaseModel:
    try:
        return spec.args_model.model_validate(arguments or {})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or None
        if error.get("type") in ("missing", "string_too_short"):
            raise ToolArgumentError(f"{field} is required", field=field) from e
        raise ToolArgumentError(f"Invalid value for {field}: {error.get('msg')}", field=field) from e


def error_response(tool: str, message: str) -> Dict[str, Any]:
    return {
        "status": "error",
        "error": message,
        "tool": tool,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def call_tool(composer, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Run the named tool against ``composer`` and return its response record."""
    logger.info(f"🔧 Tool call: {name} {arguments or {}}")
    try:
        spec = TOOLS.get(name)
        if spec is None:
            raise UnknownToolError(name)
        args = validate_arguments(spec, arguments)
        operation = getattr(composer, spec.name)
        return await operation(**args.model_dump())
    except RedAlertError as e:
        logger.error(f"❌ Tool {name} failed: {e.message}")
        return error_response(name, e.message)
    except Exception as e:
        logger.error(f"❌ Unexpected error in tool {name}: {e}", exc_info=True)
        return error_response(name, str(e) or e.__class__.__name__)
