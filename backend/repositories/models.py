"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Float, Index, Integer, JSON, String, Table
from sqlalchemy.orm import relationship

from db import Base


linkage_parents = Table(
    "place_linkage_parents",
    Base.metadata,
    Column("linkage_id", String, ForeignKey("place_linkages.id", ondelete="CASCADE"), primary_key=True),
    Column("place_id", String, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True, index=True),
)

linkage_children = Table(
    "place_linkage_children",
    Base.metadata,
    Column("linkage_id", String, ForeignKey("place_linkages.id", ondelete="CASCADE"), primary_key=True),
    Column("place_id", String, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class PlaceORM(Base):
    __tablename__ = "places"

    id = Column(String, primary_key=True, index=True)
    name = Column(JSON, nullable=False, default=dict)
    description = Column(JSON, nullable=False, default=dict)
    # Stored as (lng, lat); the composite index backs the bounding-box prefilter
    lng = Column(Float, nullable=False)
    lat = Column(Float, nullable=False)
    address = Column(String, nullable=True)
    year_from = Column(Integer, nullable=False, default=0)
    year_to = Column(Integer, nullable=False, default=2999)
    provider = Column(String, nullable=False)
    provider_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_places_lat_lng", "lat", "lng"),
        Index("ix_places_provider", "provider", "provider_id"),
    )


class PlaceLinkageORM(Base):
    __tablename__ = "place_linkages"

    id = Column(String, primary_key=True, index=True)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    parents = relationship("PlaceORM", secondary=linkage_parents, order_by="PlaceORM.year_from")
    children = relationship("PlaceORM", secondary=linkage_children, order_by="PlaceORM.year_from")
