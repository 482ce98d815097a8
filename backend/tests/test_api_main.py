from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.main import RootRouteMiddleware, app
from api.routes import places as places_router


def test_health():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_root_route_prefix_is_stripped():
    inner = FastAPI()

    @inner.get("/place")
    async def place():
        return {"ok": True}

    inner.add_middleware(RootRouteMiddleware, root_route="/api/")
    client = TestClient(inner)

    assert client.get("/api/place").json() == {"ok": True}
    assert client.get("/place").json() == {"ok": True}
    assert client.get("/apiplace").status_code == 404


def test_place_routes_are_mounted(session_factory):
    with patch.object(places_router, "SessionLocal", session_factory):
        client = TestClient(app)
        place = client.get("/place/missing")
        linkage = client.get("/place/missing/linkage")
        listing = client.get("/place", params={"lat": 22.3, "lng": 114.17})

    assert place.status_code == 200
    assert place.json() == {"success": True, "place": None}
    assert linkage.status_code == 200
    assert linkage.json() == {"success": True, "linkages": []}
    assert listing.status_code == 200
    assert listing.json() == {"success": True, "places": []}
