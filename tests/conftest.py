"""Shared fixtures for the itinerary planner tests."""

from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from itinerary_planner.config import Settings
from itinerary_planner.llm import CompletionError
from itinerary_planner.models import TripRequest


class ScriptedClient:
    """Completion client double that replays scripted replies in order.

    A reply may be a string, an exception instance (raised), or a float (the
    call sleeps that many seconds before returning an empty string).
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def complete(self, prompt, *, model, temperature, json_mode=False):
        self.calls.append(
            {"prompt": prompt, "model": model, "temperature": temperature, "json_mode": json_mode}
        )
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, float):
            await asyncio.sleep(reply)
            return ""
        return reply

    async def probe(self):
        return True


def itinerary_payload(**overrides):
    data = {
        "destination": "Tokyo",
        "startDate": "2025-05-01",
        "endDate": "2025-05-05",
        "days": [
            {
                "date": f"2025-05-0{i}",
                "summary": "Temples and ramen",
                "morning": [{"title": "Senso-ji", "desc": "Early visit before the crowds"}],
                "afternoon": [{"title": "Ueno Park", "desc": "Museums and a stroll"}],
                "evening": [{"title": "Shinjuku", "desc": "Izakaya dinner"}],
                "weatherAlternatives": ["teamLab", "Tokyo National Museum", "Depachika tasting"],
            }
            for i in range(1, 6)
        ],
        "generalTips": ["Get a Suica card", "Carry cash", "Trains stop around midnight"],
    }
    data.update(overrides)
    return data


def itinerary_text(**overrides):
    return json.dumps(itinerary_payload(**overrides))


@pytest.fixture
def settings():
    return Settings(groq_api_key="test-key", request_timeout_ms=2_000)


@pytest.fixture
def trip():
    return TripRequest(
        destination="Tokyo",
        start_date=date(2025, 5, 1),
        end_date=date(2025, 5, 5),
        model="llama-3.1-8b-instant",
    )


def rejected(status=500, detail="boom"):
    return CompletionError(f"completion returned {status}", status=status, detail=detail)
