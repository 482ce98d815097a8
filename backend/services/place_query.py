"""
Read-side place service.

Store failures on reads are logged and answered with an empty result so the
map keeps rendering; writes (see place_command) let them propagate.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.models import Place, PlaceLinkage, PlaceQuery, PlaceSummary
from repositories import LinkagesRepository, PlacesRepository

logger = logging.getLogger(__name__)


class PlaceQueryService:
    def __init__(
        self,
        places_repo: Optional[PlacesRepository] = None,
        linkages_repo: Optional[LinkagesRepository] = None,
    ):
        self.places_repo = places_repo or PlacesRepository()
        self.linkages_repo = linkages_repo or LinkagesRepository()

    def list_places(self, session: Session, query: PlaceQuery) -> Dict[str, List[PlaceSummary]]:
        """Places near the query centre, as {"places": [...]}."""
        try:
            places = self.places_repo.find_near(session, query)
        except SQLAlchemyError:
            logger.exception(
                "place list failed: lat=%s lng=%s r=%s", query.lat, query.lng, query.radius_km
            )
            places = []
        logger.debug(
            "list_places: lat=%.6f lng=%.6f r=%.2fkm years=%s-%s limit=%d got %d",
            query.lat,
            query.lng,
            query.radius_km,
            query.year_from,
            query.year_to,
            query.limit,
            len(places),
        )
        return {"places": places}

    def get_place(self, session: Session, place_id: str) -> Optional[Place]:
        try:
            return self.places_repo.get_place(session, place_id)
        except SQLAlchemyError:
            logger.exception("place fetch failed: id=%s", place_id)
            return None

    def list_linkages(self, session: Session, place_id: str) -> List[PlaceLinkage]:
        """Linkages naming the place as a parent or a child."""
        try:
            return self.linkages_repo.list_for_place(session, place_id)
        except SQLAlchemyError:
            logger.exception("linkage fetch failed: id=%s", place_id)
            return []
