"""
Places API routes.
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Query
from pydantic import BaseModel, Field

from api.envelope import format_response
from db import SessionLocal
from domain.models import (
    DEFAULT_RADIUS_KM,
    DEFAULT_YEAR_FROM,
    DEFAULT_YEAR_TO,
    MAX_PLACE_LIMIT,
    GeoPoint,
    PlaceDraft,
    PlaceProvider,
    PlaceQuery,
)
from services.place_command import PlaceCommandService
from services.place_query import PlaceQueryService

router = APIRouter()
query_service = PlaceQueryService()
command_service = PlaceCommandService()

# Used when a client omits the centre; matches the viewer's initial view
DEFAULT_CENTER_LAT = 22.35201
DEFAULT_CENTER_LNG = 114.160147


class LocationIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class PlaceCreate(BaseModel):
    name: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    location: LocationIn
    address: Optional[str] = None
    provider: PlaceProvider
    provider_id: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None


def draft_from_request(body: PlaceCreate) -> PlaceDraft:
    """Convert the request body to a domain draft."""
    return PlaceDraft(
        # Longitude first, as stored
        location=GeoPoint(lng=body.location.lng, lat=body.location.lat),
        provider=body.provider,
        provider_id=body.provider_id,
        name=body.name,
        description=body.description,
        address=body.address,
        year_from=body.year_from,
        year_to=body.year_to,
    )


@router.get("")
async def list_places(
    lat: float = Query(DEFAULT_CENTER_LAT, ge=-90, le=90),
    lng: float = Query(DEFAULT_CENTER_LNG, ge=-180, le=180),
    r: float = Query(DEFAULT_RADIUS_KM, gt=0, description="Radius in kilometers"),
    limit: int = Query(MAX_PLACE_LIMIT),
    year_from: int = Query(DEFAULT_YEAR_FROM),
    year_to: int = Query(DEFAULT_YEAR_TO),
):
    """List places near a centre point, filtered by validity years."""
    query = PlaceQuery(
        lat=lat,
        lng=lng,
        radius_km=r,
        year_from=year_from,
        year_to=year_to,
        limit=limit,
    )
    with SessionLocal() as session:
        result = query_service.list_places(session, query)
    # TODO: cursor pagination past MAX_PLACE_LIMIT
    return format_response({"places": [p.to_dict() for p in result["places"]]})


@router.post("")
async def create_place(body: PlaceCreate):
    """Create a new place. Persistence errors reach the error handlers."""
    with SessionLocal() as session:
        place = command_service.create_place(session, draft_from_request(body))
    return format_response({"place": place.to_dict()})


@router.get("/{place_id}")
async def get_place(place_id: str):
    with SessionLocal() as session:
        place = query_service.get_place(session, place_id)
    return format_response({"place": place.to_dict() if place else None})


@router.put("/{place_id}")
async def update_place(place_id: str, payload: Optional[Dict[str, Any]] = Body(None)):
    with SessionLocal() as session:
        place = command_service.update_place(session, place_id, payload or {})
    return format_response({"place": place.to_dict()})


@router.get("/{place_id}/linkage")
async def list_place_linkages(place_id: str):
    """Historical linkages of a place with linked place names inlined."""
    with SessionLocal() as session:
        linkages = query_service.list_linkages(session, place_id)
    return format_response({"linkages": [link.to_dict() for link in linkages]})
