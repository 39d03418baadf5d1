"""Core data models for the itinerary planner."""

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Dict, Any


@dataclass
class TripRequest:
    destination: str
    start_date: date
    end_date: date
    model: str

    @property
    def length_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass
class SlotItem:
    title: str
    desc: str

    @classmethod
    def from_dict(cls, data: Any) -> "SlotItem":
        if not isinstance(data, dict):
            return cls(title=str(data), desc="")
        return cls(title=str(data.get("title", "")), desc=str(data.get("desc", "")))

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "desc": self.desc}


@dataclass
class DayPlan:
    date: str
    summary: str
    morning: List[SlotItem] = field(default_factory=list)
    afternoon: List[SlotItem] = field(default_factory=list)
    evening: List[SlotItem] = field(default_factory=list)
    weather_alternatives: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayPlan":
        def slots(key: str) -> List[SlotItem]:
            items = data.get(key) or []
            return [SlotItem.from_dict(item) for item in items] if isinstance(items, list) else []

        alternatives = data.get("weatherAlternatives") or []
        return cls(
            date=str(data.get("date", "")),
            summary=str(data.get("summary", "")),
            morning=slots("morning"),
            afternoon=slots("afternoon"),
            evening=slots("evening"),
            weather_alternatives=[str(a) for a in alternatives] if isinstance(alternatives, list) else [],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "summary": self.summary,
            "morning": [s.to_dict() for s in self.morning],
            "afternoon": [s.to_dict() for s in self.afternoon],
            "evening": [s.to_dict() for s in self.evening],
            "weatherAlternatives": list(self.weather_alternatives),
        }


@dataclass
class ItineraryDocument:
    destination: str
    start_date: str
    end_date: str
    days: List[DayPlan] = field(default_factory=list)
    general_tips: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItineraryDocument":
        """Build a document from an already shape-checked payload.

        The original payload is kept on ``raw`` so callers get back exactly what
        the model produced, including any extra keys.
        """

        return cls(
            destination=data["destination"],
            start_date=data["startDate"],
            end_date=data["endDate"],
            days=[DayPlan.from_dict(d) for d in data["days"] if isinstance(d, dict)],
            general_tips=[str(t) for t in data["generalTips"]],
            raw=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.raw is not None:
            return copy.deepcopy(self.raw)
        return {
            "destination": self.destination,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "days": [d.to_dict() for d in self.days],
            "generalTips": list(self.general_tips),
        }


@dataclass
class ItineraryResult:
    itinerary_json: Optional[ItineraryDocument]
    itinerary_markdown: str
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convenience helper for serializing results in APIs."""

        payload: Dict[str, Any] = {
            "itineraryJson": self.itinerary_json.to_dict() if self.itinerary_json else None,
            "itineraryMarkdown": self.itinerary_markdown,
        }
        if self.note:
            payload["note"] = self.note
        return payload
