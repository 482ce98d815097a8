import requests

from domain.models import GeoPoint
from viewer import api_client


class DummyResponse:
    def __init__(self, json_data, status_code=200):
        self._json = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._json


class DummySession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.exc:
            raise self.exc
        return self.response


def test_get_places_converts_geojson_to_lat_lng():
    session = DummySession(
        DummyResponse(
            {
                "success": True,
                "places": [
                    {
                        "id": "p1",
                        "name": {"zh_hk": "尖沙咀"},
                        "location": {"type": "Point", "coordinates": [114.17, 22.30]},
                        "year_from": 0,
                        "year_to": 2999,
                    }
                ],
            }
        )
    )

    places = api_client.get_places(22.30, 114.17, 10, base_url="http://api.test/", session=session)

    assert len(places) == 1
    assert places[0].id == "p1"
    assert places[0].location == GeoPoint(lng=114.17, lat=22.30)
    assert places[0].name["zh_hk"] == "尖沙咀"
    url, params, _ = session.calls[0]
    assert url == "http://api.test/place"
    assert params == {"lat": 22.30, "lng": 114.17, "r": 10}


def test_get_places_network_error_returns_empty():
    session = DummySession(exc=requests.ConnectionError("refused"))

    assert api_client.get_places(22.3, 114.17, 10, base_url="http://api.test", session=session) == []


def test_get_places_http_error_returns_empty():
    session = DummySession(DummyResponse({}, status_code=500))

    assert api_client.get_places(22.3, 114.17, 10, base_url="http://api.test", session=session) == []


def test_get_places_error_envelope_returns_empty():
    session = DummySession(
        DummyResponse({"success": False, "error_code": "server_exception", "error_message": "x"})
    )

    assert api_client.get_places(22.3, 114.17, 10, base_url="http://api.test", session=session) == []


def test_get_places_skips_malformed_entries():
    session = DummySession(
        DummyResponse(
            {
                "success": True,
                "places": [
                    {"id": "bad"},
                    {"id": "ok", "location": {"type": "Point", "coordinates": [114.0, 22.0]}},
                ],
            }
        )
    )

    places = api_client.get_places(22.0, 114.0, 10, base_url="http://api.test", session=session)

    assert [p.id for p in places] == ["ok"]
    assert places[0].name == {}


def test_get_places_null_places_returns_empty():
    session = DummySession(DummyResponse({"success": True, "places": None}))

    assert api_client.get_places(22.3, 114.17, 10, base_url="http://api.test", session=session) == []


def test_get_places_non_list_places_returns_empty():
    session = DummySession(DummyResponse({"success": True, "places": {"id": "p1"}}))

    assert api_client.get_places(22.3, 114.17, 10, base_url="http://api.test", session=session) == []


def test_get_places_skips_place_with_non_mapping_name():
    session = DummySession(
        DummyResponse(
            {
                "success": True,
                "places": [
                    {"id": "plain", "name": "plain", "location": {"type": "Point", "coordinates": [114.0, 22.0]}},
                    "not-a-place",
                    {"id": "ok", "name": {"zh_hk": "中環"}, "location": {"type": "Point", "coordinates": [114.1, 22.2]}},
                ],
            }
        )
    )

    places = api_client.get_places(22.0, 114.0, 10, base_url="http://api.test", session=session)

    assert [p.id for p in places] == ["ok"]
