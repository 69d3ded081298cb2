import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from ..core.config import OREF_ALERTS_URL, OREF_HISTORY_URL
from ..core.models import EnhancedLocation, EnrichedAlert, RawAlert
from .resolver import LocationResolver
from .transport import RateLimitedTransport

logger = logging.getLogger(__name__)


class NoData:
    """Marker for an upstream body that carries no alert data."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "NO_DATA"


NO_DATA = NoData()


def decode_payload(content: bytes, allow_concatenated: bool = False) -> Any:
    """
    Decode an upstream response body.

    The API answers with an empty (sometimes BOM-only) body when there is
    nothing to report; that, and anything that is not JSON, maps to NO_DATA.
    With ``allow_concatenated`` a stream of back-to-back objects is accepted
    and returned as a list.
    """
    try:
        text = content.decode("utf-8-sig").strip()
    except UnicodeDecodeError:
        logger.debug(f"Undecodable response body treated as no data: {content[:50]!r}")
        return NO_DATA
    if not text:
        return NO_DATA

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        if allow_concatenated and text.startswith("{"):
            try:
                return json.loads(f"[{text.replace('}{', '},{')}]")
            except json.JSONDecodeError:
                pass
        logger.debug(f"Non-JSON response body treated as no data: '{text[:200]}'")
        return NO_DATA


class AlertFetcher:
    """Fetches current alerts and alert history through the rate-limited transport."""

    def __init__(
        self,
        transport: RateLimitedTransport,
        resolver: LocationResolver,
        *,
        alerts_url: str = OREF_ALERTS_URL,
        history_url: str = OREF_HISTORY_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.transport = transport
        self.resolver = resolver
        self.alerts_url = alerts_url
        self.history_url = history_url
        self._clock = clock

    async def get_current(self) -> Optional[EnrichedAlert]:
        """The active alert, or None when the feed reports nothing."""
        response = await self.transport.get(self.alerts_url)
        payload = decode_payload(response.content)
        if payload is NO_DATA:
            return None
        if not isinstance(payload, dict):
            logger.warning(f"Unexpected alert payload type: {type(payload).__name__}")
            return None

        alert = RawAlert.from_payload(payload)
        logger.info(f"Active alert {alert.id} (category {alert.category}, {len(alert.affected_locations)} locations)")
        return self.enrich(alert)

    def enrich(self, alert: RawAlert) -> EnrichedAlert:
        """Attach the fetch time and a gazetteer lookup for every affected location."""
        now = self._clock()
        return EnrichedAlert(
            alert=alert,
            fetched_at_epoch_ms=int(now * 1000),
            fetched_at_iso=datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
            enhanced_locations=tuple(
                EnhancedLocation(name=name, resolved=self.resolver.resolve(name))
                for name in alert.affected_locations
            ),
        )

    async def get_history(self, limit: int = 10) -> List[RawAlert]:
        """Up to ``limit`` history records, in upstream order."""
        if limit < 1:
            raise ValueError("limit must be at least 1")

        response = await self.transport.get(self.history_url)
        payload = decode_payload(response.content, allow_concatenated=True)
        if payload is NO_DATA:
            return []

        records = payload if isinstance(payload, list) else [payload]
        history = [RawAlert.from_payload(record) for record in records[:limit] if isinstance(record, dict)]
        logger.info(f"Alert history: {len(records)} records upstream, returning {len(history)}")
        return history
