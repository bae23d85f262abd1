import math

import pytest

from algorithms.distance import EARTH_RADIUS_KM, haversine_distance, stop_distance
from models import Stop

POINTS = [
    (19.07, 72.87),
    (19.08, 72.88),
    (-33.8688, 151.2093),
    (51.5074, -0.1278),
    (0.0, 0.0),
    (89.9, -179.9),
]


def test_identical_points_have_zero_distance():
    for lat, lon in POINTS:
        assert haversine_distance(lat, lon, lat, lon) == 0.0


def test_distance_is_symmetric():
    for lat1, lon1 in POINTS:
        for lat2, lon2 in POINTS:
            forward = haversine_distance(lat1, lon1, lat2, lon2)
            backward = haversine_distance(lat2, lon2, lat1, lon1)
            assert forward == pytest.approx(backward, rel=1e-9, abs=1e-12)


def test_distance_is_non_negative_and_satisfies_triangle_inequality():
    for p in POINTS:
        for q in POINTS:
            for r in POINTS:
                pq = haversine_distance(*p, *q)
                qr = haversine_distance(*q, *r)
                pr = haversine_distance(*p, *r)
                assert pq >= 0
                assert pr <= (pq + qr) * (1 + 1e-9) + 1e-9


def test_one_degree_of_longitude_on_equator():
    expected = EARTH_RADIUS_KM * math.radians(1)
    assert haversine_distance(0, 0, 0, 1) == pytest.approx(expected, rel=1e-9)


def test_antipodal_points_are_half_circumference():
    half = math.pi * EARTH_RADIUS_KM
    assert haversine_distance(0, 0, 0, 180) == pytest.approx(half, rel=1e-9)
    assert haversine_distance(90, 0, -90, 0) == pytest.approx(half, rel=1e-9)


def test_known_city_distance():
    # Лондон - Париж, около 344 км
    distance = haversine_distance(51.5074, -0.1278, 48.8566, 2.3522)
    assert 340 < distance < 350


def test_nan_propagates():
    assert math.isnan(haversine_distance(float('nan'), 0, 0, 0))


def test_stop_distance_uses_coordinates():
    a = Stop(id=1, name="A", latitude=19.07, longitude=72.87)
    b = Stop(id=2, name="B", latitude=19.08, longitude=72.88)
    assert stop_distance(a, b) == haversine_distance(19.07, 72.87, 19.08, 72.88)
