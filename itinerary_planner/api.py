"""FastAPI application exposing the itinerary planner."""

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .errors import InvalidTripRequest, ItineraryError
from .llm import CompletionClient, get_client
from .planner import ItineraryPlanner, generate_itinerary


app = FastAPI(title="Itinerary Planner", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://localhost:3000",
        "https://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PlanRequestPayload(BaseModel):
    destination: str = ""
    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    model: Optional[str] = None


def get_planner() -> ItineraryPlanner:
    return ItineraryPlanner()


def get_completion_client() -> CompletionClient:
    return get_client()


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)


@app.exception_handler(ItineraryError)
async def itinerary_error_handler(_request: Request, exc: ItineraryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidTripRequest("Invalid request body.", detail=_describe_validation_errors(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/plan")
async def create_plan(
    payload: PlanRequestPayload,
    planner: ItineraryPlanner = Depends(get_planner),
) -> Dict[str, Any]:
    result = await generate_itinerary(
        payload.destination,
        payload.start_date,
        payload.end_date,
        payload.model,
        planner=planner,
    )
    return result.to_dict()


@app.get("/plan")
async def check_connection(client: CompletionClient = Depends(get_completion_client)) -> Dict[str, bool]:
    return {"ok": await client.probe()}
