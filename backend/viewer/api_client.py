"""
HTTP client the map viewer uses to fetch nearby places from the Place API.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests

from domain.models import GeoPoint
from settings import settings

logger = logging.getLogger(__name__)
_session = requests.Session()


@dataclass
class MapPlace:
    """The subset of a place the map needs: where it is and what to call it."""
    id: str
    location: GeoPoint
    name: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: dict) -> "MapPlace":
        name = item.get("name") or {}
        if not isinstance(name, dict):
            raise TypeError(f"name must be a mapping, got {type(name).__name__}")
        return cls(
            id=str(item["id"]),
            location=GeoPoint.from_geojson(item["location"]),
            name=name,
        )


def get_places(
    lat: float,
    lng: float,
    r: float,
    base_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> List[MapPlace]:
    """
    Fetch places within `r` kilometers of (lat, lng).

    Any failure (network, HTTP status, error envelope, malformed payload) is
    logged and yields an empty list, so the map simply shows no markers.
    """
    url = (base_url or settings.PLACES_API_BASE_URL).rstrip("/") + "/place"
    http = session or _session
    try:
        resp = http.get(
            url,
            params={"lat": lat, "lng": lng, "r": r},
            timeout=settings.PLACES_API_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError):
        logger.exception("get_places failed: lat=%s lng=%s r=%s", lat, lng, r)
        return []

    if not isinstance(data, dict) or not data.get("success", False):
        logger.warning(
            "get_places error envelope: %r",
            data if not isinstance(data, dict) else (data.get("error_code"), data.get("error_message")),
        )
        return []

    items = data.get("places") or []
    if not isinstance(items, list):
        logger.warning("get_places: places is not a list: %r", items)
        return []

    places: List[MapPlace] = []
    for item in items:
        try:
            places.append(MapPlace.from_api(item))
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("get_places: skipping malformed place %r", item)
    logger.debug("get_places: lat=%.6f lng=%.6f r=%.1f got %d", lat, lng, r, len(places))
    return places
