import asyncio
import json

import httpx
import pytest

from red_alert.core.gazetteer import load_default_gazetteer
from red_alert.services.composer import ResponseComposer
from red_alert.services.fetcher import AlertFetcher
from red_alert.services.resolver import LocationResolver

ALERTS_URL = "https://test.oref/alerts.json"
HISTORY_URL = "https://test.oref/history.json"
FIXED_EPOCH = 1700000000.0


def alert_body(data, cat="1", alert_id="133042653750000000", title="ירי רקטות וטילים", desc="היכנסו למרחב המוגן"):
    """An upstream live-alert JSON body."""
    return json.dumps({"id": alert_id, "cat": cat, "title": title, "data": data, "desc": desc}, ensure_ascii=False)


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.now += seconds
        await asyncio.sleep(0)


class RecordingClient:
    """Stands in for httpx.AsyncClient, recording the clock time of every request."""

    def __init__(self, clock, bodies=None):
        self.clock = clock
        self.bodies = bodies or {}
        self.calls = []
        self.cookies = httpx.Cookies()

    async def request(self, method, url):
        self.calls.append((self.clock(), url))
        body = self.bodies.get(url, "")
        if isinstance(body, Exception):
            raise body
        return httpx.Response(200, text=body, request=httpx.Request(method, url))

    async def aclose(self):
        pass


class StubTransport:
    """Returns canned bodies per URL without any pacing."""

    def __init__(self, bodies):
        self.bodies = bodies
        self.requested = []
        self.closed = False

    async def get(self, url):
        self.requested.append(url)
        body = self.bodies.get(url, "")
        if isinstance(body, Exception):
            raise body
        return httpx.Response(200, text=body, request=httpx.Request("GET", url))

    async def close(self):
        self.closed = True


@pytest.fixture
def gazetteer():
    return load_default_gazetteer()


@pytest.fixture
def resolver(gazetteer):
    return LocationResolver(gazetteer)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_composer(resolver):
    """
    Builds a ResponseComposer over a StubTransport.

    Usage: composer = make_composer(current=alert_body([...]), history="[]")
    """
    def _make(current="", history=""):
        transport = StubTransport({ALERTS_URL: current, HISTORY_URL: history})
        fetcher = AlertFetcher(
            transport, resolver, alerts_url=ALERTS_URL, history_url=HISTORY_URL, clock=lambda: FIXED_EPOCH
        )
        return ResponseComposer(fetcher, resolver)

    return _make
