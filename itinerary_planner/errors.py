"""Exceptions raised by the itinerary pipeline."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ItineraryError(RuntimeError):
    """Base class for failures surfaced to the caller."""

    classification = "error"
    status_code = 500

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.detail:
            body["detail"] = self.detail
        return body


class InvalidTripRequest(ItineraryError, ValueError):
    """Trip parameters failed validation; no network call was made."""

    classification = "bad_request"
    status_code = 400


class UpstreamRejected(ItineraryError):
    """The JSON generation call returned a non-success status."""

    classification = "upstream_error"
    status_code = 502

    def __init__(self, status: Optional[int], detail: Optional[str] = None) -> None:
        message = f"Groq {status}" if status is not None else "Groq request failed"
        super().__init__(message, detail=detail)
        self.status = status


class ItineraryTimeout(ItineraryError):
    """The shared deadline elapsed while the JSON phase was in flight."""

    classification = "timeout"
    status_code = 504

    def __init__(self, message: str = "timeout") -> None:
        super().__init__(message)


class UnparsableResponse(Exception):
    """Model output was not JSON or did not match the document shape."""

    def __init__(self, reason: str, raw_text: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw_text = raw_text


class RenderingFailed(Exception):
    """The Markdown rendering call failed after a document was obtained."""
