import logging
from typing import List, Optional

from fuzzywuzzy import fuzz, process

from ..core.gazetteer import Gazetteer, GazetteerEntry

logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 60


class LocationResolver:
    """Matches free-text location names from the feed against a Gazetteer."""

    def __init__(self, gazetteer: Gazetteer):
        self.gazetteer = gazetteer

    def resolve(self, location_name: str) -> Optional[GazetteerEntry]:
        """
        Resolve a location name to a gazetteer entry.

        First pass: exact match on either display name. Second pass, only when
        the first finds nothing: either string contains the other. Both passes
        walk the gazetteer in insertion order, so an exact match always wins
        over a partial match found earlier.
        """
        # An empty name would be a substring of every entry
        if not location_name:
            return None

        for entry in self.gazetteer:
            if location_name in entry.names:
                return entry

        for entry in self.gazetteer:
            for name in entry.names:
                if name in location_name or location_name in name:
                    logger.debug(f"Partial location match: '{location_name}' -> {entry.key}")
                    return entry

        return None

    def suggest(self, location_name: str, limit: int = 3) -> List[str]:
        """Gazetteer keys whose names look similar to ``location_name``, best first."""
        if not location_name:
            return []
        choices = {entry.key: f"{entry.label} {entry.label_en}" for entry in self.gazetteer}
        matches = process.extractBests(
            location_name,
            choices,
            scorer=fuzz.partial_ratio,
            score_cutoff=SUGGESTION_THRESHOLD,
            limit=limit,
        )
        return [key for _, _, key in matches]
