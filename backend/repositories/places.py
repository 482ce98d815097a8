"""
Place repository backed by SQLAlchemy/SQLite.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session, load_only

from domain.models import GeoPoint, Place, PlaceProvider, PlaceQuery, PlaceSummary
from repositories.models import PlaceORM
from services.geo import bounding_box, haversine_km

logger = logging.getLogger(__name__)


def _place_from_orm(orm: PlaceORM) -> Place:
    return Place(
        id=orm.id,
        name=orm.name or {},
        description=orm.description or {},
        location=GeoPoint(lng=orm.lng, lat=orm.lat),
        address=orm.address,
        year_from=orm.year_from,
        year_to=orm.year_to,
        provider=PlaceProvider(orm.provider),
        provider_id=orm.provider_id,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def _summary_from_orm(orm: PlaceORM) -> PlaceSummary:
    return PlaceSummary(
        id=orm.id,
        name=orm.name or {},
        location=GeoPoint(lng=orm.lng, lat=orm.lat),
        year_from=orm.year_from,
        year_to=orm.year_to,
    )


class PlacesRepository:
    """Persistence and proximity queries for places."""

    def find_near(self, session: Session, query: PlaceQuery) -> List[PlaceSummary]:
        """
        Places within `query.radius_km` of the centre whose validity interval
        lies inside the requested year range, nearest first.

        An indexed bounding box narrows the candidates in SQL; the exact
        great-circle distance is applied afterwards.
        """
        min_lat, max_lat, min_lng, max_lng = bounding_box(query.lat, query.lng, query.radius_km)
        q = (
            session.query(PlaceORM)
            .options(
                load_only(
                    PlaceORM.id,
                    PlaceORM.name,
                    PlaceORM.lng,
                    PlaceORM.lat,
                    PlaceORM.year_from,
                    PlaceORM.year_to,
                )
            )
            .filter(
                PlaceORM.lat >= min_lat,
                PlaceORM.lat <= max_lat,
                PlaceORM.year_from >= query.year_from,
                PlaceORM.year_to <= query.year_to,
            )
        )
        if min_lng is not None and max_lng is not None:
            q = q.filter(PlaceORM.lng >= min_lng, PlaceORM.lng <= max_lng)

        matches = []
        for orm in q.all():
            distance = haversine_km(query.lat, query.lng, orm.lat, orm.lng)
            if distance <= query.radius_km:
                matches.append((distance, orm))
        matches.sort(key=lambda item: item[0])
        return [_summary_from_orm(orm) for _, orm in matches[: query.limit]]

    def get_place(self, session: Session, place_id: str) -> Optional[Place]:
        orm = session.get(PlaceORM, place_id)
        if not orm:
            return None
        try:
            return _place_from_orm(orm)
        except ValueError:
            logger.warning("place %s has unknown provider %r, ignored", orm.id, orm.provider)
            return None

    def create_place(self, session: Session, place: Place) -> Place:
        now = datetime.utcnow()
        orm = PlaceORM(
            id=place.id,
            name=place.name,
            description=place.description,
            lng=place.location.lng,
            lat=place.location.lat,
            address=place.address,
            year_from=place.year_from,
            year_to=place.year_to,
            provider=place.provider.value,
            provider_id=place.provider_id,
            created_at=place.created_at or now,
            updated_at=place.updated_at or now,
        )
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _place_from_orm(orm)
