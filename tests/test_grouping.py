from __future__ import annotations

from typing import Any

from pymarkerlayout.layout.grouping import group_features, group_key
from pymarkerlayout.models.feature import Feature


def _point(feature_id: int, lon: float = 0.0, lat: float = 0.0, **properties: Any) -> Feature:
    return Feature(id=feature_id, geometry={"type": "Point", "coordinates": [lon, lat]}, properties=properties)


def test_without_group_by_one_group_per_feature() -> None:
    features = [_point(4), _point(2), _point(9)]
    groups = group_features(features)
    assert [g.group_key for g in groups] == [4, 2, 9]
    assert [g.features for g in groups] == [[features[0]], [features[1]], [features[2]]]


def test_group_by_property_keeps_first_occurrence_order() -> None:
    features = [
        _point(1, country="FR"),
        _point(2, country="DE"),
        _point(3, country="FR"),
        _point(4, country="IT"),
        _point(5, country="DE"),
    ]
    groups = group_features(features, "country")
    assert [g.group_key for g in groups] == ["FR", "DE", "IT"]
    assert [[f.id for f in g.features] for g in groups] == [[1, 3], [2, 5], [4]]


def test_group_by_coordinates_merges_shared_locations() -> None:
    features = [_point(1, 2.35, 48.85), _point(2, 4.83, 45.76), _point(3, 2.35, 48.85)]
    groups = group_features(features, "coordinates")
    assert len(groups) == 2
    assert [f.id for f in groups[0].features] == [1, 3]
    assert [f.id for f in groups[1].features] == [2]


def test_full_group_drops_extra_features() -> None:
    features = [_point(i, kind="station") for i in range(5)]
    groups = group_features(features, "kind", max_features_per_marker=1)
    assert len(groups) == 1
    assert [f.id for f in groups[0].features] == [0]


def test_cap_applies_per_group() -> None:
    features = [_point(1, k="a"), _point(2, k="a"), _point(3, k="b"), _point(4, k="a"), _point(5, k="b")]
    groups = group_features(features, "k", max_features_per_marker=2)
    assert [[f.id for f in g.features] for g in groups] == [[1, 2], [3, 5]]


def test_missing_property_shares_none_key() -> None:
    features = [_point(1), _point(2, k="a"), _point(3)]
    groups = group_features(features, "k")
    assert [g.group_key for g in groups] == [None, "a"]
    assert [f.id for f in groups[0].features] == [1, 3]


def test_unhashable_property_values_group_by_value() -> None:
    first = _point(1, tags=["a", "b"])
    second = _point(2, tags=["a", "b"])
    assert group_key(first, "tags") == group_key(second, "tags")
    assert len(group_features([first, second], "tags")) == 1


def test_bool_and_int_values_form_separate_groups() -> None:
    features = [_point(1, k=True), _point(2, k=1), _point(3, k=False), _point(4, k=0), _point(5, k=True)]
    groups = group_features(features, "k")
    assert [[f.id for f in g.features] for g in groups] == [[1, 5], [2], [3], [4]]
    assert group_key(features[1], "k") == 1
