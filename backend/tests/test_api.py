import httpx
import pytest
from fastapi.testclient import TestClient

from raceday.core import deps
from raceday.core.deps import get_config, get_source
from raceday.main import app
from raceday.schedule.sources.base import BaseSource
from raceday.schedule.sources.nascar.source import NascarSource

FEED = {
    "series_1": [
        {
            "race_name": "Daytona 500",
            "track_name": "Daytona International Speedway",
            "start_time_utc": "2099-02-15T19:30:00Z",
            "television_broadcaster": "FOX",
            "radio_broadcaster": "MRN",
            "satellite_radio_broadcaster": "SiriusXM",
        },
        {"race_name": "Clash", "start_time_utc": "2001-02-01T00:00:00Z"},
    ],
    "series_3": [
        {"race_name": "Fresh From Florida 250", "date": "2099-02-13", "time": "7:30 PM ET", "television_broadcaster": "FS1, Peacock"},
    ],
}


class FakeSource(BaseSource):
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error

    def fetch(self, cancel=None):
        if self.error:
            raise self.error
        return self.payload


@pytest.fixture
def client(cfg):
    app.dependency_overrides[get_config] = lambda: cfg
    yield lambda source: _with_source(source)
    app.dependency_overrides.clear()


def _with_source(source):
    app.dependency_overrides[get_source] = lambda: source
    return TestClient(app)


def test_health(client):
    r = client(FakeSource([])).get("/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_next_races(client):
    r = client(FakeSource(FEED)).get("/v1/next-races", params={"tz": "America/Chicago"})
    assert r.status_code == 200
    body = r.json()
    assert body["tz"] == "America/Chicago"
    assert [x["code"] for x in body["races"]] == ["N1", "N3"]

    cup, truck = body["races"]
    assert cup["race_name"] == "Daytona 500"
    assert cup["series_name"] == "NASCAR Cup Series"
    assert cup["venue"] == "Daytona International Speedway"
    assert cup["start"] == "2099-02-15T13:30:00-06:00"
    assert (cup["tv"], cup["radio"], cup["satellite"]) == (["FOX"], ["MRN"], ["SIRIUSXM"])
    assert set(cup["outlet_logos"]) == {"FOX", "MRN", "SIRIUSXM"}

    assert truck["venue"] == "TBA"
    assert truck["start"] == "2099-02-13T18:30:00-06:00"
    assert truck["tv"] == ["FS1", "PEACOCK"]
    assert set(truck["outlet_logos"]) == {"FS1"}


def test_default_zone_from_config(client):
    r = client(FakeSource(FEED)).get("/v1/next-races")
    assert r.json()["races"][0]["start"] == "2099-02-15T19:30:00+00:00"


def test_empty_feed(client):
    r = client(FakeSource([])).get("/v1/next-races")
    assert r.status_code == 200
    assert r.json()["races"] == []


def test_unknown_zone(client):
    r = client(FakeSource(FEED)).get("/v1/next-races", params={"tz": "Nowhere/Land"})
    assert r.status_code == 400


def test_fetch_failure(client):
    r = client(FakeSource(error=httpx.ConnectError("refused"))).get("/v1/next-races")
    assert r.status_code == 502


def test_malformed_feed(client):
    r = client(FakeSource({"unexpected": True})).get("/v1/next-races")
    assert r.status_code == 502


def test_non_json_feed_body(client, cfg):
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    source = NascarSource(cfg, transport=httpx.MockTransport(handler))
    r = client(source).get("/v1/next-races")
    assert r.status_code == 502


def test_feed_source_is_built_once(monkeypatch, cfg):
    monkeypatch.setattr(deps, "get_config", lambda: cfg)
    get_source.cache_clear()
    try:
        assert get_source() is get_source()
    finally:
        get_source.cache_clear()
