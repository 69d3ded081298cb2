"""
Static location gazetteer.

Maps canonical location keys to display names, administrative area, shelter
time (migun time) and coordinates. A Gazetteer is built once and never mutated;
components receive it by reference.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class GazetteerEntry:
    """A single known location.

    ``label`` is the primary display name (Hebrew, as the upstream feed spells
    it) and ``label_en`` the secondary one. Both are used for lookups.
    """
    key: str
    label: str
    label_en: str
    code: str
    area_code: int
    area_name: str
    shelter_seconds: int
    coordinates: Optional[Coordinates] = None

    @property
    def names(self) -> Tuple[str, str]:
        return (self.label, self.label_en)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the field names of the upstream location records."""
        data: Dict[str, Any] = {
            "label": self.label,
            "value": self.code,
            "areaid": self.area_code,
            "areaname": self.area_name,
            "label_he": self.label,
            "label_en": self.label_en,
            "migun_time": self.shelter_seconds,
        }
        if self.coordinates:
            data["coordinates"] = self.coordinates.to_dict()
        return data


class Gazetteer:
    """Read-only, insertion-ordered collection of gazetteer entries."""

    def __init__(self, entries: Iterable[GazetteerEntry]):
        by_key: Dict[str, GazetteerEntry] = {}
        for entry in entries:
            if entry.key in by_key:
                raise ValueError(f"Duplicate gazetteer key: {entry.key}")
            by_key[entry.key] = entry
        self._entries: Mapping[str, GazetteerEntry] = MappingProxyType(by_key)

    def __iter__(self) -> Iterator[GazetteerEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[GazetteerEntry]:
        return self._entries.get(key)

    def keys(self) -> list:
        return list(self._entries.keys())

    @property
    def entries(self) -> Mapping[str, GazetteerEntry]:
        return self._entries


DEFAULT_LOCATIONS: Tuple[GazetteerEntry, ...] = (
    GazetteerEntry("tel_aviv", "תל אביב", "Tel Aviv", "TEL_AVIV_001", 15, "מרכז", 90, Coordinates(32.0853, 34.7818)),
    GazetteerEntry("jerusalem", "ירושלים", "Jerusalem", "JERUSALEM_001", 14, "ירושלים", 90, Coordinates(31.7683, 35.2137)),
    GazetteerEntry("sderot", "שדרות", "Sderot", "SDEROT_001", 26, "עוטף עזה", 15, Coordinates(31.5244, 34.5951)),
    GazetteerEntry("ashkelon", "אשקלון", "Ashkelon", "ASHKELON_001", 26, "עוטף עזה", 30, Coordinates(31.6688, 34.5744)),
    GazetteerEntry("haifa", "חיפה", "Haifa", "HAIFA_001", 3, "צפון", 180, Coordinates(32.794, 34.9896)),
    GazetteerEntry("beer_sheva", "באר שבע", "Beer Sheva", "BEER_SHEVA_001", 2, "דרום", 60, Coordinates(31.2518, 34.7915)),
    GazetteerEntry("netivot", "נתיבות", "Netivot", "NETIVOT_001", 26, "עוטף עזה", 30, Coordinates(31.4197, 34.5955)),
)


def load_default_gazetteer() -> Gazetteer:
    return Gazetteer(DEFAULT_LOCATIONS)
