"""
Core domain models for the place map.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid


DEFAULT_YEAR_FROM = 0
DEFAULT_YEAR_TO = 2999
DEFAULT_RADIUS_KM = 1.0
MAX_PLACE_LIMIT = 1000


class PlaceValidationError(ValueError):
    """Raised when a place violates a domain invariant."""


class PlaceProvider(str, Enum):
    """Source of a place record."""
    MANUAL = "manual"
    HAD = "had"  # Historic address dataset import


class LinkageType(str, Enum):
    """Historical relationship between places."""
    RENAMED = "renamed"
    MERGED = "merged"
    SPLIT = "split"
    RELOCATED = "relocated"


@dataclass
class GeoPoint:
    """A WGS84 point. Longitude comes first, as in GeoJSON."""
    lng: float
    lat: float

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "Point", "coordinates": [self.lng, self.lat]}

    @classmethod
    def from_geojson(cls, data: Dict[str, Any]) -> "GeoPoint":
        lng, lat = data["coordinates"][:2]
        return cls(lng=float(lng), lat=float(lat))


@dataclass
class Place:
    """
    A geotagged record with a validity interval and provenance.

    `name` and `description` map language codes (e.g. "zh_hk", "en_us")
    to text.
    """
    id: str
    location: GeoPoint
    provider: PlaceProvider
    provider_id: Optional[str] = None
    name: Dict[str, str] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)
    address: Optional[str] = None
    year_from: int = DEFAULT_YEAR_FROM
    year_to: int = DEFAULT_YEAR_TO
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())

    def validate(self) -> None:
        if self.year_from > self.year_to:
            raise PlaceValidationError(
                f"year_from ({self.year_from}) must not be after year_to ({self.year_to})"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "location": self.location.to_geojson(),
            "address": self.address,
            "provider": self.provider.value,
            "provider_id": self.provider_id,
            "year_from": self.year_from,
            "year_to": self.year_to,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class PlaceSummary:
    """Reduced projection of a place returned by proximity queries."""
    id: str
    location: GeoPoint
    name: Dict[str, str] = field(default_factory=dict)
    year_from: int = DEFAULT_YEAR_FROM
    year_to: int = DEFAULT_YEAR_TO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location.to_geojson(),
            "year_from": self.year_from,
            "year_to": self.year_to,
        }


@dataclass
class PlaceDraft:
    """Client-supplied fields for a new place. None means "not supplied"."""
    location: GeoPoint
    provider: PlaceProvider
    provider_id: Optional[str] = None
    name: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    address: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None


@dataclass
class PlaceQuery:
    """
    Proximity + validity query.

    A place matches when it lies within `radius_km` of (lat, lng) and
    `year_from >= self.year_from` and `year_to <= self.year_to`.
    `limit` is clamped to MAX_PLACE_LIMIT; non-positive means the maximum.
    """
    lat: float
    lng: float
    radius_km: float = DEFAULT_RADIUS_KM
    year_from: int = DEFAULT_YEAR_FROM
    year_to: int = DEFAULT_YEAR_TO
    limit: int = MAX_PLACE_LIMIT

    def __post_init__(self) -> None:
        if self.limit <= 0 or self.limit > MAX_PLACE_LIMIT:
            self.limit = MAX_PLACE_LIMIT


@dataclass
class LinkedPlace:
    """A place as inlined into a linkage: just enough to label it."""
    id: str
    name: Dict[str, str] = field(default_factory=dict)
    year_from: int = DEFAULT_YEAR_FROM
    year_to: int = DEFAULT_YEAR_TO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "year_from": self.year_from,
            "year_to": self.year_to,
        }


@dataclass
class PlaceLinkage:
    """
    Historical relationship between places, e.g. a street renamed to
    another one (parents -> children).
    """
    id: str
    type: LinkageType
    parents: List[LinkedPlace] = field(default_factory=list)
    children: List[LinkedPlace] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "parents": [p.to_dict() for p in self.parents],
            "children": [c.to_dict() for c in self.children],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
