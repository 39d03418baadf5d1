"""Core orchestration logic for generating itineraries.

A request goes through at most three completion calls, all bounded by one
shared :class:`~itinerary_planner.deadline.Deadline`:

1. ``INITIAL``: JSON-mode call producing the itinerary document.
2. ``REPAIR``: only when the initial text fails to parse or has the wrong
   shape; the malformed text is sent back once to be fixed.
3. ``RENDER``: turns the validated document into Markdown.

Hard failures (upstream rejection or timeout) can only come out of the JSON
phase. A document that cannot be recovered after the repair degrades to the raw
text, and a failed render degrades to a placeholder.
"""

from __future__ import annotations

import enum
import json
import logging
import time
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .deadline import Clock, Deadline, DeadlineExceeded
from .errors import (
    ItineraryTimeout,
    RenderingFailed,
    UnparsableResponse,
    UpstreamRejected,
)
from .llm import CompletionClient, CompletionError, CompletionTimeout, get_client
from .models import ItineraryDocument, ItineraryResult, TripRequest
from .prompts import build_json_prompt, build_markdown_prompt, build_repair_prompt
from .utils import make_date_list, truncate_text
from .validation import build_trip_request


logger = logging.getLogger(__name__)

PARSE_FAILED_NOTE = "JSON parse failed"
MARKDOWN_PLACEHOLDER = "## Itinerary\n\n(Generated from JSON. Markdown generation failed, but JSON is available.)"


class Phase(enum.Enum):
    INITIAL = "initial"
    REPAIR = "repair"
    RENDER = "render"

    @property
    def temperature(self) -> float:
        return PHASE_TEMPERATURE[self]

    @property
    def json_mode(self) -> bool:
        return self is not Phase.RENDER


PHASE_TEMPERATURE = {
    Phase.INITIAL: 0.3,
    Phase.REPAIR: 0.1,
    Phase.RENDER: 0.5,
}


def parse_itinerary(text: str, request: Optional[TripRequest] = None, *, strict_days: bool = False) -> Dict[str, Any]:
    """Parse model output and check it has the itinerary document shape.

    Raises ``UnparsableResponse`` on a syntax error or on any type mismatch.
    With ``strict_days`` the days must also line up with the requested dates.
    """

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise UnparsableResponse(f"invalid JSON: {exc}", text) from exc

    if not isinstance(data, dict):
        raise UnparsableResponse("top-level value is not an object", text)
    for key in ("destination", "startDate", "endDate"):
        if not isinstance(data.get(key), str):
            raise UnparsableResponse(f"'{key}' is not a string", text)
    for key in ("days", "generalTips"):
        if not isinstance(data.get(key), list):
            raise UnparsableResponse(f"'{key}' is not an array", text)

    if strict_days and request is not None:
        _check_days(data["days"], request, text)
    return data


def _check_days(days: list, request: TripRequest, text: str) -> None:
    expected = make_date_list(request.start_date.isoformat(), request.end_date.isoformat())
    if len(days) != len(expected):
        raise UnparsableResponse(f"expected {len(expected)} day(s), got {len(days)}", text)
    allowed = set(expected)
    seen = set()
    for day in days:
        date_str = day.get("date") if isinstance(day, dict) else None
        if date_str not in allowed:
            raise UnparsableResponse(f"day date {date_str!r} outside the trip", text)
        if date_str in seen:
            raise UnparsableResponse(f"day date {date_str!r} repeated", text)
        seen.add(date_str)


class ItineraryPlanner:
    """Runs the JSON, repair and render calls for one request at a time."""

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        *,
        settings: Optional[Settings] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or get_client()
        self.clock = clock

    async def generate(self, request: TripRequest) -> ItineraryResult:
        deadline = Deadline(self.settings.request_timeout, clock=self.clock)
        logger.info(
            "Generating itinerary for %s (%s to %s, %d day(s)) with %s",
            request.destination,
            request.start_date,
            request.end_date,
            request.length_days,
            request.model,
        )

        raw_text = await self._call(Phase.INITIAL, build_json_prompt(request), request, deadline)
        try:
            data = parse_itinerary(raw_text, request, strict_days=self.settings.strict_days)
        except UnparsableResponse as exc:
            logger.info("Initial response unparsable (%s); issuing repair", exc.reason)
            data = await self._repair(raw_text, request, deadline)

        if data is None:
            logger.warning("Repair did not produce a valid itinerary; returning raw text")
            return ItineraryResult(
                itinerary_json=None,
                itinerary_markdown=raw_text.strip(),
                note=PARSE_FAILED_NOTE,
            )

        try:
            markdown = await self._render(data, request, deadline)
        except RenderingFailed as exc:
            logger.warning("Markdown rendering failed, using placeholder: %s", exc)
            markdown = MARKDOWN_PLACEHOLDER

        return ItineraryResult(
            itinerary_json=ItineraryDocument.from_dict(data),
            itinerary_markdown=markdown,
        )

    async def _call(self, phase: Phase, prompt: str, request: TripRequest, deadline: Deadline) -> str:
        """Issue one JSON-phase call; rejections and timeouts are fatal here."""

        try:
            return await deadline.run(
                self.client.complete(
                    prompt,
                    model=request.model,
                    temperature=phase.temperature,
                    json_mode=phase.json_mode,
                )
            )
        except (DeadlineExceeded, CompletionTimeout) as exc:
            logger.warning("%s call timed out: %s", phase.value, exc)
            raise ItineraryTimeout() from exc
        except CompletionError as exc:
            logger.warning("%s call rejected: %s", phase.value, exc)
            raise UpstreamRejected(exc.status, exc.detail) from exc

    async def _repair(self, raw_text: str, request: TripRequest, deadline: Deadline) -> Optional[Dict[str, Any]]:
        malformed = truncate_text(raw_text, self.settings.repair_max_chars)
        if len(malformed) < len(raw_text):
            logger.info("Repair input truncated from %d to %d chars", len(raw_text), len(malformed))
        try:
            fixed_text = await self._call(Phase.REPAIR, build_repair_prompt(malformed), request, deadline)
        except UpstreamRejected as exc:
            logger.warning("Repair call failed: %s", exc)
            return None
        try:
            return parse_itinerary(fixed_text, request, strict_days=self.settings.strict_days)
        except UnparsableResponse as exc:
            logger.warning("Repaired response still unparsable: %s", exc.reason)
            return None

    async def _render(self, data: Dict[str, Any], request: TripRequest, deadline: Deadline) -> str:
        try:
            markdown = await deadline.run(
                self.client.complete(
                    build_markdown_prompt(data),
                    model=request.model,
                    temperature=Phase.RENDER.temperature,
                    json_mode=Phase.RENDER.json_mode,
                )
            )
        except Exception as exc:  # noqa: BLE001
            raise RenderingFailed(str(exc) or type(exc).__name__) from exc
        markdown = markdown.strip()
        if not markdown:
            raise RenderingFailed("empty markdown response")
        return markdown


async def generate_itinerary(
    destination: str,
    start_date: str,
    end_date: str,
    model: Optional[str] = None,
    *,
    planner: Optional[ItineraryPlanner] = None,
) -> ItineraryResult:
    """Validate the trip and run the planner; raises ``ItineraryError`` subclasses."""

    request = build_trip_request(destination, start_date, end_date, model or get_settings().default_model)
    planner = planner or ItineraryPlanner()
    return await planner.generate(request)


async def probe(client: Optional[CompletionClient] = None) -> bool:
    return await (client or get_client()).probe()
