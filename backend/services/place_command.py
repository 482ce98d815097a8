"""
Write-side place service.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from domain.models import Place, PlaceDraft, PlaceProvider
from repositories import PlacesRepository

logger = logging.getLogger(__name__)


def build_place(draft: PlaceDraft) -> Place:
    """
    Construct a new Place from client input.

    Only supplied fields are copied; absent ones keep the model defaults.
    Manual entries always get a fresh provider_id so they can never collide
    with ids from an imported dataset.
    """
    place = Place(
        id=Place.generate_id(),
        location=draft.location,
        provider=draft.provider,
        provider_id=draft.provider_id,
    )
    if draft.name is not None:
        place.name = draft.name
    if draft.description is not None:
        place.description = draft.description
    if draft.address is not None:
        place.address = draft.address
    if draft.year_from is not None:
        place.year_from = draft.year_from
    if draft.year_to is not None:
        place.year_to = draft.year_to

    if place.provider == PlaceProvider.MANUAL:
        place.provider_id = uuid.uuid4().hex

    place.validate()
    return place


class PlaceCommandService:
    def __init__(self, places_repo: Optional[PlacesRepository] = None):
        self.places_repo = places_repo or PlacesRepository()

    def create_place(self, session: Session, draft: PlaceDraft) -> Place:
        """Persist a new place. Store errors propagate to the caller."""
        place = build_place(draft)
        saved = self.places_repo.create_place(session, place)
        logger.info(
            "created place id=%s provider=%s provider_id=%s",
            saved.id,
            saved.provider.value,
            saved.provider_id,
        )
        return saved

    def update_place(self, session: Session, place_id: str, changes: Dict[str, Any]) -> Place:
        # TODO: partial update of name/description/address/years once edit rules are settled
        raise NotImplementedError("Updating places is not supported yet")
