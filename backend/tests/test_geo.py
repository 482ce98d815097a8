import math

from services.geo import EARTH_RADIUS_KM, bounding_box, compute_centroid, haversine_km


def test_haversine_one_degree_of_latitude():
    expected = 2 * math.pi * EARTH_RADIUS_KM / 360
    assert math.isclose(haversine_km(22.0, 114.0, 23.0, 114.0), expected, rel_tol=1e-9)


def test_haversine_zero_for_same_point():
    assert haversine_km(22.3, 114.17, 22.3, 114.17) == 0.0


def test_bounding_box_encloses_circle_edge_points():
    lat, lon, r = 22.3, 114.17, 10.0
    min_lat, max_lat, min_lon, max_lon = bounding_box(lat, lon, r)
    # Points exactly r km due north and due east lie inside the box
    north = lat + math.degrees(r / EARTH_RADIUS_KM)
    assert min_lat <= north <= max_lat
    assert max_lon > lon and min_lon < lon
    east_edge = haversine_km(lat, lon, lat, max_lon)
    assert east_edge >= r - 1e-6


def test_bounding_box_near_pole_drops_longitude_bounds():
    min_lat, max_lat, min_lon, max_lon = bounding_box(89.99, 0.0, 50.0)
    assert max_lat == 90.0
    assert min_lon is None and max_lon is None


def test_bounding_box_across_antimeridian_drops_longitude_bounds():
    _, _, min_lon, max_lon = bounding_box(0.0, 179.99, 10.0)
    assert min_lon is None and max_lon is None


def test_compute_centroid():
    assert compute_centroid([(0.0, 0.0), (2.0, 4.0)]) == (1.0, 2.0)
    assert compute_centroid([]) is None
