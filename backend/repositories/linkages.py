"""
Place linkage repository backed by SQLAlchemy/SQLite.
"""
import logging
from datetime import datetime
from typing import List
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from domain.models import LinkageType, LinkedPlace, PlaceLinkage
from repositories.models import PlaceLinkageORM, PlaceORM

logger = logging.getLogger(__name__)


def _linked_place_from_orm(orm: PlaceORM) -> LinkedPlace:
    return LinkedPlace(
        id=orm.id,
        name=orm.name or {},
        year_from=orm.year_from,
        year_to=orm.year_to,
    )


def _linkage_from_orm(orm: PlaceLinkageORM) -> PlaceLinkage:
    return PlaceLinkage(
        id=orm.id,
        type=LinkageType(orm.type),
        parents=[_linked_place_from_orm(p) for p in orm.parents],
        children=[_linked_place_from_orm(c) for c in orm.children],
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


class LinkagesRepository:
    """Read access to place linkages, plus creation for imports."""

    def list_for_place(self, session: Session, place_id: str) -> List[PlaceLinkage]:
        linkages = (
            session.query(PlaceLinkageORM)
            .options(
                selectinload(PlaceLinkageORM.parents),
                selectinload(PlaceLinkageORM.children),
            )
            .filter(
                or_(
                    PlaceLinkageORM.parents.any(PlaceORM.id == place_id),
                    PlaceLinkageORM.children.any(PlaceORM.id == place_id),
                )
            )
            .order_by(PlaceLinkageORM.created_at)
            .all()
        )
        result = []
        for link in linkages:
            try:
                result.append(_linkage_from_orm(link))
            except ValueError:
                logger.warning("linkage %s has unknown type %r, skipped", link.id, link.type)
        return result

    def create_linkage(
        self,
        session: Session,
        linkage_type: LinkageType,
        parent_ids: List[str],
        child_ids: List[str],
    ) -> PlaceLinkage:
        parents = session.query(PlaceORM).filter(PlaceORM.id.in_(parent_ids)).all() if parent_ids else []
        children = session.query(PlaceORM).filter(PlaceORM.id.in_(child_ids)).all() if child_ids else []
        missing = set(parent_ids) | set(child_ids)
        missing -= {p.id for p in parents} | {c.id for c in children}
        if missing:
            raise ValueError(f"Unknown place ids: {sorted(missing)}")

        now = datetime.utcnow()
        orm = PlaceLinkageORM(
            id=PlaceLinkage.generate_id(),
            type=linkage_type.value,
            created_at=now,
            updated_at=now,
        )
        orm.parents = parents
        orm.children = children
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _linkage_from_orm(orm)
