"""
Tests for the offering and booking adapters.
"""

import asyncio
import json

import pendulum
import pytest
import requests

from sessionfinder.adapters import booking_client as booking_module
from sessionfinder.adapters import offering_client as offering_module
from sessionfinder.adapters.booking_client import BookingClient
from sessionfinder.adapters.mock_offering_client import MockOfferingClient
from sessionfinder.adapters.offering_client import OfferingClient
from sessionfinder.domain.exceptions import BookingSubmissionError, OfferingDataError
from sessionfinder.domain.models import BookingRequest


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _booking_request() -> BookingRequest:
    return BookingRequest(
        offering_id="farm",
        occurrence_id="farm-2026-10-17-0",
        start=pendulum.parse("2026-10-17 08:00", tz="Africa/Johannesburg").to_iso8601_string(),
        label="Early pick",
        capacity=8,
        title="Cut Flower Picking Session",
        kind="cut-flower",
        location="Bethany Blooms Farm",
        unit_price=350.0,
        attendee_count=1,
        estimated_total=350.0,
    )


class TestOfferingClient:
    """Tests for the HTTP offering client."""

    def test_get_offering(self, monkeypatch):
        calls = []

        def fake_get(url, headers, timeout):
            calls.append((url, timeout))
            return FakeResponse(payload={"title": "Frames"})

        monkeypatch.setattr(offering_module.requests, "get", fake_get)
        client = OfferingClient("https://api.example.com/", timeout_seconds=5)

        record = asyncio.run(client.get_offering("frames"))

        assert record == {"title": "Frames", "id": "frames"}
        assert calls == [("https://api.example.com/offerings/frames", 5)]

    def test_get_missing_offering_returns_none(self, monkeypatch):
        monkeypatch.setattr(offering_module.requests, "get", lambda *a, **k: FakeResponse(status_code=404))

        assert asyncio.run(OfferingClient("https://api.example.com").get_offering("nope")) is None

    def test_request_failures_are_wrapped(self, monkeypatch):
        def failing_get(*args, **kwargs):
            raise requests.exceptions.ConnectionError("offline")

        monkeypatch.setattr(offering_module.requests, "get", failing_get)

        with pytest.raises(OfferingDataError, match="offline"):
            asyncio.run(OfferingClient("https://api.example.com").get_offering("frames"))

    def test_invalid_json_is_wrapped(self, monkeypatch):
        monkeypatch.setattr(
            offering_module.requests, "get", lambda *a, **k: FakeResponse(payload=ValueError("bad json"))
        )

        with pytest.raises(OfferingDataError, match="not valid JSON"):
            asyncio.run(OfferingClient("https://api.example.com").list_offerings())

    def test_list_offerings_accepts_envelope(self, monkeypatch):
        payload = {"items": [{"id": "a"}, "junk", {"id": "b"}]}
        monkeypatch.setattr(offering_module.requests, "get", lambda *a, **k: FakeResponse(payload=payload))

        records = asyncio.run(OfferingClient("https://api.example.com").list_offerings())

        assert records == [{"id": "a"}, {"id": "b"}]


class TestBookingClient:
    """Tests for the HTTP booking client."""

    def test_submit_posts_payload(self, monkeypatch):
        posted = {}

        def fake_post(url, headers, json, timeout):
            posted.update(url=url, json=json)
            return FakeResponse(status_code=201)

        monkeypatch.setattr(booking_module.requests, "post", fake_post)

        asyncio.run(BookingClient("https://api.example.com/bookings").submit(_booking_request()))

        assert posted["url"] == "https://api.example.com/bookings"
        assert posted["json"]["sessionId"] == "farm-2026-10-17-0"
        assert posted["json"]["attendeeCount"] == 1

    def test_rejected_submission(self, monkeypatch):
        monkeypatch.setattr(booking_module.requests, "post", lambda *a, **k: FakeResponse(status_code=500))

        with pytest.raises(BookingSubmissionError):
            asyncio.run(BookingClient("https://api.example.com/bookings").submit(_booking_request()))


class TestMockOfferingClient:
    """Tests for the JSON-backed mock client."""

    def test_bundled_data(self):
        client = MockOfferingClient()

        record = asyncio.run(client.get_offering("cut-flower-picking"))

        assert record["repeatWeekly"] is True
        assert len(asyncio.run(client.list_offerings())) == 4

    def test_custom_file(self, tmp_path):
        data_file = tmp_path / "offerings.json"
        data_file.write_text(json.dumps([{"id": "only"}, "junk"]), encoding="utf-8")

        client = MockOfferingClient(data_file=data_file)

        assert asyncio.run(client.list_offerings()) == [{"id": "only"}]

    def test_missing_file_serves_nothing(self, tmp_path):
        client = MockOfferingClient(data_file=tmp_path / "missing.json")

        assert asyncio.run(client.list_offerings()) == []

    def test_invalid_file(self, tmp_path):
        data_file = tmp_path / "offerings.json"
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(OfferingDataError):
            MockOfferingClient(data_file=data_file)
