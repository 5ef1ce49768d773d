from __future__ import annotations

from types import SimpleNamespace

import pytest

from pymarkerlayout import MapUnavailableError, MarkerLayout, WebMercatorView
from pymarkerlayout._map import mercator_world_xy, screen_xy


def _city(feature_id: int, lon: float, lat: float, layer: str = "City labels", **properties: object) -> dict:
    return {
        "id": feature_id,
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
        "sourceLayer": layer,
    }


def test_screen_xy_accepts_pairs_and_points() -> None:
    assert screen_xy((1, 2)) == (1.0, 2.0)
    assert screen_xy(SimpleNamespace(x=3, y=4.5)) == (3.0, 4.5)


def test_mercator_world_xy() -> None:
    assert mercator_world_xy(0.0, 0.0, 512.0) == pytest.approx((256.0, 256.0))
    assert mercator_world_xy(-180.0, 0.0, 512.0)[0] == pytest.approx(0.0)
    north = mercator_world_xy(0.0, 89.9, 512.0)
    assert north[1] == pytest.approx(0.0, abs=1e-6)


def test_center_projects_to_viewport_center() -> None:
    view = WebMercatorView(center=(2.35, 48.85), zoom=5, width=800, height=600)
    assert view.project(2.35, 48.85) == pytest.approx((400.0, 300.0))


def test_projection_follows_pan_and_zoom() -> None:
    view = WebMercatorView(width=1024, height=768)
    assert view.project(90.0, 0.0) == pytest.approx((640.0, 384.0))
    view.set_zoom(1)
    assert view.project(90.0, 0.0) == pytest.approx((768.0, 384.0))
    view.pan_to(90.0, 0.0)
    assert view.project(90.0, 0.0) == pytest.approx((512.0, 384.0))


def test_query_validates_records_and_filters_layers() -> None:
    view = WebMercatorView(
        [
            _city(1, 2.35, 48.85),
            _city(2, 4.83, 45.76, layer="Place labels"),
            {"id": 3, "properties": "broken"},
        ],
        center=(3.0, 47.0),
        zoom=4,
    )
    assert [f.id for f in view.query_rendered_features()] == [1, 2]
    assert [f.id for f in view.query_rendered_features(["Place labels"])] == [2]
    assert view.query_rendered_features([]) == []


def test_query_skips_points_outside_viewport() -> None:
    view = WebMercatorView([_city(1, 0.0, 0.0), _city(2, 170.0, 0.0)], zoom=2)
    assert [f.id for f in view.query_rendered_features()] == [1]


def test_query_reports_non_point_geometries() -> None:
    line = {"id": 9, "geometry": {"type": "LineString", "coordinates": [[0, 0], [170, 0]]}}
    view = WebMercatorView([line], zoom=2)
    assert [f.id for f in view.query_rendered_features()] == [9]


def test_not_ready_raises() -> None:
    view = WebMercatorView(ready=False)
    with pytest.raises(MapUnavailableError):
        view.query_rendered_features()
    with pytest.raises(MapUnavailableError):
        view.project(0.0, 0.0)


def test_engine_over_mercator_view_tracks_pan() -> None:
    view = WebMercatorView(
        [_city(1, 2.35, 48.85, rank=1), _city(2, 4.83, 45.76, rank=2), _city(3, -1.55, 47.22, rank=3)],
        center=(2.0, 47.0),
        zoom=5,
    )
    engine = MarkerLayout(view, {"markerSize": [40, 70], "sortingProperty": "rank", "layers": ["City labels"]})
    first = engine.update()
    assert first is not None
    assert len(first.new) == 3

    view.pan_to(2.5, 47.0)
    second = engine.update()
    assert second is not None
    assert second.new == {}
    assert set(second.updated) == set(first.new)
    for marker_id, marker in second.updated.items():
        assert marker.position[0] < first.new[marker_id].position[0]

    view.clear_features()
    third = engine.update()
    assert third is not None
    assert set(third.removed) == set(first.new)
