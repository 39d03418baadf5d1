"""Prompt templates for the itinerary completion calls."""

from __future__ import annotations

import json
from typing import Any, Dict

from .models import TripRequest

ITINERARY_SCHEMA = (
    '{"destination":"string","startDate":"YYYY-MM-DD","endDate":"YYYY-MM-DD",'
    '"days":[{"date":"YYYY-MM-DD","summary":"string",'
    '"morning":[{"title":"string","desc":"string"}],'
    '"afternoon":[{"title":"string","desc":"string"}],'
    '"evening":[{"title":"string","desc":"string"}],'
    '"weatherAlternatives":["string","string","string"]}],'
    '"generalTips":["string","string","string"]}'
)

JSON_PROMPT = """You are a practical travel planner. Be specific and realistic. Avoid exact prices/hours.

Return ONLY a valid JSON object matching this schema (no backticks, no markdown, no extra text):
{schema}

Destination: {destination}
Start date (YYYY-MM-DD): {start_date}
End date (YYYY-MM-DD): {end_date}"""

REPAIR_PROMPT = """Return only valid JSON per schema. Fix:

{raw_text}"""

MARKDOWN_PROMPT = """Using the following JSON itinerary, output a Markdown itinerary ONLY (no JSON, no code blocks). Mirror the same content with clear day sections and bullet points.

JSON:
{itinerary_json}"""


def build_json_prompt(request: TripRequest) -> str:
    return JSON_PROMPT.format(
        schema=ITINERARY_SCHEMA,
        destination=request.destination,
        start_date=request.start_date.isoformat(),
        end_date=request.end_date.isoformat(),
    ).strip()


def build_repair_prompt(raw_text: str) -> str:
    return REPAIR_PROMPT.format(raw_text=raw_text)


def build_markdown_prompt(document: Dict[str, Any]) -> str:
    return MARKDOWN_PROMPT.format(itinerary_json=json.dumps(document, ensure_ascii=False))
