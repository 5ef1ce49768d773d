"""Partition ordered features into marker groups."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from pymarkerlayout._constants import COORDINATES_GROUP_KEY
from pymarkerlayout._hashing import coordinate_hash
from pymarkerlayout.models.feature import Feature
from pymarkerlayout.models.marker import FeatureGroup


def _hashable(value: Any) -> Hashable:
    # True == 1 and False == 0 as dict keys; keep booleans apart.
    if isinstance(value, bool):
        return ("<bool>", value)
    try:
        hash(value)
    except TypeError:
        return ("<unhashable>", repr(value))
    return value


def group_key(feature: Feature, group_by: str) -> Hashable:
    """Key of the group *feature* belongs to.

    Features lacking the property all share the ``None`` key.
    """
    if group_by == COORDINATES_GROUP_KEY:
        return coordinate_hash(feature)
    return _hashable(feature.properties.get(group_by))


def group_features(
    features: list[Feature],
    group_by: str | None = None,
    max_features_per_marker: int | None = None,
) -> list[FeatureGroup]:
    """Group *features*, preserving first-occurrence order of the keys.

    A feature arriving at a full group is dropped, not reassigned.
    Without *group_by* every feature forms its own group keyed by its id.
    """
    if group_by is None:
        return [FeatureGroup(group_key=f.id, features=[f]) for f in features]

    groups: dict[Hashable, FeatureGroup] = {}
    for feature in features:
        key = group_key(feature, group_by)
        group = groups.get(key)
        if group is None:
            group = FeatureGroup(group_key=key)
            groups[key] = group
        if max_features_per_marker is None or len(group.features) < max_features_per_marker:
            group.features.append(feature)
    return list(groups.values())
