"""
FastAPI Server for Location Tools

Provides API endpoints for:
- Listing the tool catalogue
- Forward and reverse geocoding
- Timezone estimates
- Major cities of a country
- Great-circle distance
"""

import threading
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .service import LocationService
from .tools import TOOLS, call_tool


_service: Optional[LocationService] = None
_service_lock = threading.Lock()


def get_service() -> LocationService:
    """Shared LocationService, created on first use."""
    global _service
    with _service_lock:
        if _service is None:
            _service = LocationService()
        return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _service
    yield
    with _service_lock:
        if _service is not None:
            _service.close()
            _service = None


# FastAPI app
app = FastAPI(title="Location Tools API", lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request Models
class GeocodeRequest(BaseModel):
    address: str


class CoordinateRequest(BaseModel):
    latitude: float
    longitude: float


class MajorCitiesRequest(BaseModel):
    country: str


class DistanceRequest(BaseModel):
    lat1: float
    lon1: float
    lat2: float
    lon2: float


class ToolCall(BaseModel):
    arguments: Dict[str, Any] = {}


def _tool_response(tool: str, result: str) -> Dict[str, Any]:
    return {"success": True, "tool": tool, "result": result}


# API Endpoints
@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/tools")
def list_tools():
    """Describe every available tool."""
    return {"tools": TOOLS}


@app.post("/api/tools/{name}")
def invoke_tool(name: str, call: ToolCall, service: LocationService = Depends(get_service)):
    """Invoke a tool by name with a JSON arguments object."""
    try:
        result = call_tool(service, name, call.arguments)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    except TypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _tool_response(name, result)


@app.post("/api/geocode")
def geocode(request: GeocodeRequest, service: LocationService = Depends(get_service)):
    """Convert an address to coordinates."""
    return _tool_response("geocode_address", service.geocode_address(request.address))


@app.post("/api/reverse-geocode")
def reverse_geocode(request: CoordinateRequest, service: LocationService = Depends(get_service)):
    """Convert coordinates to an address."""
    return _tool_response(
        "reverse_geocode",
        service.reverse_geocode(request.latitude, request.longitude),
    )


@app.post("/api/timezone")
def timezone(request: CoordinateRequest, service: LocationService = Depends(get_service)):
    """Estimate the UTC offset for coordinates."""
    return _tool_response(
        "get_timezone",
        service.get_timezone(request.latitude, request.longitude),
    )


@app.post("/api/major-cities")
def major_cities(request: MajorCitiesRequest, service: LocationService = Depends(get_service)):
    """List major cities of a country."""
    return _tool_response("get_major_cities", service.get_major_cities(request.country))


@app.post("/api/distance")
def distance(request: DistanceRequest, service: LocationService = Depends(get_service)):
    """Great-circle distance between two points."""
    return _tool_response(
        "calculate_distance",
        service.calculate_distance(request.lat1, request.lon1, request.lat2, request.lon2),
    )
