"""Day-by-day itinerary generation on top of a chat-completion service."""

from .errors import InvalidTripRequest, ItineraryError, ItineraryTimeout, UpstreamRejected
from .models import DayPlan, ItineraryDocument, ItineraryResult, SlotItem, TripRequest
from .planner import ItineraryPlanner, generate_itinerary, probe
from .validation import build_trip_request, validate_trip

__all__ = [
    "DayPlan",
    "InvalidTripRequest",
    "ItineraryDocument",
    "ItineraryError",
    "ItineraryPlanner",
    "ItineraryResult",
    "ItineraryTimeout",
    "SlotItem",
    "TripRequest",
    "UpstreamRejected",
    "build_trip_request",
    "generate_itinerary",
    "probe",
    "validate_trip",
]
