"""
Alert data model.

RawAlert mirrors the upstream JSON record; EnrichedAlert adds the fetch time
and a resolved gazetteer entry per affected location. Both serialize back to
the upstream field names (id, cat, title, data, desc).
"""
import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .gazetteer import GazetteerEntry


@dataclass(frozen=True)
class RawAlert:
    id: str
    category: str
    title: str
    affected_locations: Tuple[str, ...]
    description: str
    alert_date: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RawAlert":
        """Build a RawAlert from an upstream object.

        Live alerts carry ``cat`` and a list in ``data``. History rows carry
        ``category``, a single city string in ``data``, ``alertDate`` and
        usually no ``id``.
        """
        data = payload.get("data") or []
        if isinstance(data, str):
            data = [data]
        locations = tuple(str(city) for city in data)

        category = payload.get("cat", payload.get("category", ""))
        category = "" if category is None else str(category)
        alert_date = payload.get("alertDate")

        alert_id = payload.get("id")
        if alert_id is None or alert_id == "":
            # Stable ID from the row content
            key = f"{alert_date or ''}|{category}|{','.join(locations)}"
            alert_id = hashlib.md5(key.encode()).hexdigest()[:16]

        return cls(
            id=str(alert_id),
            category=category,
            title=str(payload.get("title") or ""),
            affected_locations=locations,
            description=str(payload.get("desc") or ""),
            alert_date=alert_date,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "cat": self.category,
            "title": self.title,
            "data": list(self.affected_locations),
            "desc": self.description,
        }
        if self.alert_date:
            data["alertDate"] = self.alert_date
        return data


@dataclass(frozen=True)
class EnhancedLocation:
    name: str
    resolved: Optional[GazetteerEntry] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.resolved:
            data["location_data"] = self.resolved.to_dict()
        return data


@dataclass(frozen=True)
class EnrichedAlert:
    alert: RawAlert
    fetched_at_epoch_ms: int
    fetched_at_iso: str
    enhanced_locations: Tuple[EnhancedLocation, ...]

    @property
    def affected_locations(self) -> Tuple[str, ...]:
        return self.alert.affected_locations

    @property
    def category(self) -> str:
        return self.alert.category

    def to_dict(self, include_enhanced_data: bool = True) -> Dict[str, Any]:
        data = self.alert.to_dict()
        data["timestamp"] = self.fetched_at_epoch_ms
        data["parsed_at"] = self.fetched_at_iso
        if include_enhanced_data:
            data["enhanced_locations"] = [loc.to_dict() for loc in self.enhanced_locations]
        return data


@dataclass(frozen=True)
class AreaAlertEntry:
    location_name: str
    resolved_entry: Optional[GazetteerEntry]
    source_alert: RawAlert

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location_name,
            "location_data": self.resolved_entry.to_dict() if self.resolved_entry else None,
            "alert_info": self.source_alert.to_dict(),
        }
