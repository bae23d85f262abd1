import folium

from algorithms.tsp_solver import compare_routes
from models import Stop
from planner import DEFAULT_CENTER
from utils.map_generator import create_route_map


def _stops() -> list[Stop]:
    return [
        Stop(id=1, name="Dadar", latitude=19.0178, longitude=72.8478),
        Stop(id=2, name="Bandra", latitude=19.0596, longitude=72.8295),
        Stop(id=3, name="Worli", latitude=19.0176, longitude=72.8162),
    ]


def _render(m: folium.Map) -> str:
    return m.get_root().render()


def test_map_without_stops_uses_center():
    m = create_route_map([], center=(19.07, 72.87))

    assert isinstance(m, folium.Map)
    assert m.location == [19.07, 72.87]


def test_map_without_route_numbers_stops_by_insertion():
    html = _render(create_route_map(_stops()))

    assert "Stop 1: Dadar" in html
    assert "Stop 3: Worli" in html
    assert "Optimized route" not in html


def test_map_marks_start_and_end_of_route():
    stops = _stops()
    comparison = compare_routes(stops)
    end = comparison.optimized.end

    html = _render(create_route_map(stops, route=comparison.optimized))

    assert "Start: Dadar" in html
    assert f"End: {end.name}" in html
    assert "Optimized route" in html
    assert "Original order" not in html


def test_map_comparison_overlay():
    stops = _stops()
    comparison = compare_routes(stops)

    html = _render(create_route_map(stops, route=comparison.optimized, original_route=comparison.original))

    assert "Original order" in html


def test_map_escapes_user_text():
    stops = [
        Stop(id=1, name="<img src=x onerror=alert(1)>", latitude=19.0178, longitude=72.8478),
        Stop(id=2, name="`${alert(2)}`", latitude=19.0596, longitude=72.8295),
    ]
    comparison = compare_routes(stops)

    html = _render(create_route_map(stops, route=comparison.optimized, title="<b>Title</b>"))

    assert "<img src=x onerror=alert(1)>" not in html
    assert "&lt;img src=x onerror=alert(1)&gt;" in html
    assert "${alert(2)}" not in html
    assert "&#96;&#36;{alert(2)}&#96;" in html
    assert "&lt;b&gt;Title&lt;/b&gt;" in html


def test_map_default_center_matches_stop_set():
    assert create_route_map([]).location == list(DEFAULT_CENTER)
