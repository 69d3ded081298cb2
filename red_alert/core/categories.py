from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class CategoryInfo:
    name: str
    name_localized: str
    description: str
    recommended_action: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "name_he": self.name_localized,
            "description": self.description,
            "action": self.recommended_action,
        }


# Alert category mappings with English and Hebrew names
ALERT_CATEGORIES: Dict[str, CategoryInfo] = {
    "1": CategoryInfo("Rocket/Missile Fire", "ירי רקטות וטילים", "Incoming rocket or missile threat", "Seek immediate shelter"),
    "2": CategoryInfo("Aircraft Intrusion", "חדירת כלי טיס", "Unauthorized aircraft in airspace", "Stay alert and await instructions"),
    "3": CategoryInfo("Hostile Aircraft Intrusion", "חדירת כלי טיס עוין", "Hostile aircraft threat", "Seek immediate shelter"),
    "4": CategoryInfo("Hazardous Materials", "אירוע חומרים מסוכנים", "Chemical/biological threat", "Seal room and await instructions"),
    "5": CategoryInfo("Tsunami", "צונאמי", "Tsunami warning", "Move to high ground immediately"),
    "6": CategoryInfo("Earthquake", "רעידת אדמה", "Earthquake alert", "Drop, cover, and hold on"),
}

UNKNOWN_CATEGORY = CategoryInfo(
    "Unknown Alert Type",
    "סוג התרעה לא ידוע",
    "Unknown alert category",
    "Follow local authority instructions",
)


def get_category_info(category: str) -> CategoryInfo:
    """Maps an alert category code to its info record, falling back to UNKNOWN_CATEGORY."""
    return ALERT_CATEGORIES.get(str(category), UNKNOWN_CATEGORY)


def all_categories() -> Dict[str, CategoryInfo]:
    """All known categories keyed "1".."6", in numeric order."""
    return {code: ALERT_CATEGORIES[code] for code in sorted(ALERT_CATEGORIES, key=int)}
