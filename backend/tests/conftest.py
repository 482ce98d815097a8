import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from db import init_db  # noqa: E402
from domain.models import GeoPoint, Place, PlaceProvider  # noqa: E402
from repositories import PlacesRepository  # noqa: E402


@pytest.fixture
def session_factory():
    """Fresh in-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def session(session_factory):
    with session_factory() as s:
        yield s


@pytest.fixture
def add_place(session):
    """Insert a place directly through the repository."""
    repo = PlacesRepository()

    def _add(lat, lng, name="place", year_from=0, year_to=2999, provider=PlaceProvider.HAD):
        place = Place(
            id=Place.generate_id(),
            location=GeoPoint(lng=lng, lat=lat),
            provider=provider,
            provider_id=f"ext-{name}",
            name={"zh_hk": name, "en_us": name},
            year_from=year_from,
            year_to=year_to,
        )
        return repo.create_place(session, place)

    return _add
