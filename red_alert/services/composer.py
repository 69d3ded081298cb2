"""
Response composition for the alert tools.

Each public coroutine here backs one tool and returns a JSON-serializable
record with a ``status`` discriminator and an ISO-8601 ``timestamp``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.categories import CategoryInfo, all_categories, get_category_info
from ..core.errors import FetchError
from ..core.gazetteer import Gazetteer, load_default_gazetteer
from ..core.models import AreaAlertEntry, EnrichedAlert
from .fetcher import AlertFetcher
from .resolver import LocationResolver
from .transport import RateLimitedTransport

logger = logging.getLogger(__name__)

STATUS_HISTORY_LIMIT = 5


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def count_active(alert: Optional[EnrichedAlert]) -> int:
    """Number of affected locations in the alert, duplicates included."""
    if alert is None:
        return 0
    return len(alert.affected_locations)


def severity_of(count: int, zero_label: str = "none") -> str:
    if count == 0:
        return zero_label
    if count <= 5:
        return "medium"
    if count <= 10:
        return "high"
    return "critical"


class ResponseComposer:
    def __init__(self, fetcher: AlertFetcher, resolver: LocationResolver):
        self.fetcher = fetcher
        self.resolver = resolver

    @classmethod
    def create(cls, gazetteer: Optional[Gazetteer] = None) -> "ResponseComposer":
        """Build the full pipeline with default settings."""
        resolver = LocationResolver(gazetteer or load_default_gazetteer())
        transport = RateLimitedTransport()
        return cls(AlertFetcher(transport, resolver), resolver)

    async def close(self):
        await self.fetcher.transport.close()

    def category_info(self, code: str) -> CategoryInfo:
        return get_category_info(code)

    async def area_alerts(self, area_name: str) -> List[AreaAlertEntry]:
        """Affected locations of the current alert that resolve to ``area_name``."""
        alert = await self.fetcher.get_current()
        if alert is None:
            return []

        entries = []
        for location in alert.enhanced_locations:
            if location.resolved and location.resolved.area_name == area_name:
                entries.append(AreaAlertEntry(location.name, location.resolved, alert.alert))
        return entries

    # --- Tool operations ---

    async def get_current_alerts(self, include_enhanced_data: bool = True) -> Dict[str, Any]:
        alert = await self.fetcher.get_current()
        if alert is None:
            return {
                "status": "no_alerts",
                "message": "No active red alerts at this time",
                "alert_count": 0,
                "timestamp": utc_timestamp(),
            }

        result: Dict[str, Any] = {
            "status": "alerts_active",
            "alerts": alert.to_dict(include_enhanced_data=include_enhanced_data),
            "alert_count": count_active(alert),
            "timestamp": utc_timestamp(),
        }
        if alert.category:
            result["category_info"] = self.category_info(alert.category).to_dict()
        return result

    async def get_alert_history(self, limit: int = 10) -> Dict[str, Any]:
        history = await self.fetcher.get_history(limit)
        if not history:
            return {
                "status": "no_history",
                "message": "No historical alert data available",
                "count": 0,
                "requested_limit": limit,
                "timestamp": utc_timestamp(),
            }

        return {
            "status": "success",
            "history": [alert.to_dict() for alert in history],
            "count": len(history),
            "requested_limit": limit,
            "timestamp": utc_timestamp(),
        }

    async def get_location_info(self, location_name: str) -> Dict[str, Any]:
        entry = self.resolver.resolve(location_name)
        if entry is None:
            return {
                "status": "not_found",
                "message": f"No location data found for '{location_name}'",
                "available_locations": self.resolver.gazetteer.keys(),
                "suggestions": self.resolver.suggest(location_name),
                "timestamp": utc_timestamp(),
            }

        return {
            "status": "found",
            "location": entry.to_dict(),
            "shelter_time_seconds": entry.shelter_seconds,
            "area": entry.area_name,
            "coordinates": entry.coordinates.to_dict() if entry.coordinates else None,
            "timestamp": utc_timestamp(),
        }

    async def count_active_alerts(self) -> Dict[str, Any]:
        count = count_active(await self.fetcher.get_current())
        return {
            "status": "success",
            "active_alert_count": count,
            "has_alerts": count > 0,
            "severity": severity_of(count, zero_label="none"),
            "timestamp": utc_timestamp(),
        }

    async def get_alert_status(self, include_history: bool = False, include_category_info: bool = True) -> Dict[str, Any]:
        alert = await self.fetcher.get_current()
        count = count_active(alert)

        result: Dict[str, Any] = {"status": "success"}
        if alert is not None:
            result["current_alerts"] = alert.to_dict()
        result.update({
            "active_alert_count": count,
            "has_active_alerts": count > 0,
            "severity_level": severity_of(count, zero_label="clear"),
            "timestamp": utc_timestamp(),
        })

        if include_category_info and alert is not None and alert.category:
            result["category_info"] = self.category_info(alert.category).to_dict()

        if include_history:
            try:
                history = await self.fetcher.get_history(STATUS_HISTORY_LIMIT)
                result["recent_history"] = [record.to_dict() for record in history]
            except FetchError as e:
                logger.warning(f"Could not fetch recent history for status: {e.message}")
                result["history_error"] = e.message

        return result

    async def get_area_alerts(self, area_name: str) -> Dict[str, Any]:
        entries = await self.area_alerts(area_name)
        return {
            "status": "success",
            "area": area_name,
            "alerts": [entry.to_dict() for entry in entries],
            "alert_count": len(entries),
            "has_alerts": len(entries) > 0,
            "timestamp": utc_timestamp(),
        }

    async def get_alert_category_info(self, category: str = "all") -> Dict[str, Any]:
        if category == "all":
            return {
                "status": "success",
                "categories": {code: info.to_dict() for code, info in all_categories().items()},
                "timestamp": utc_timestamp(),
            }

        return {
            "status": "success",
            "category": category,
            "category_info": self.category_info(category).to_dict(),
            "timestamp": utc_timestamp(),
        }
