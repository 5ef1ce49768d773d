"""Screen-space placement with greedy collision avoidance."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from pymarkerlayout._hashing import compute_feature_group_id
from pymarkerlayout._map import ScreenPoint, screen_xy
from pymarkerlayout.config import LayoutConfig
from pymarkerlayout.models.feature import Feature
from pymarkerlayout.models.marker import AbstractMarker, FeatureGroup, MarkerAnchor, MarkerT

_logger = logging.getLogger(__name__)

Projector = Callable[[float, float], ScreenPoint]


def compute_anchor_offset(
    anchor: MarkerAnchor,
    marker_size: tuple[float, float],
    offset: tuple[float, float] = (0.0, 0.0),
    nb_features: float = 1,
) -> tuple[float, float]:
    """Offset from the projected point to the marker's top-left corner.

    For every anchor but `right`, the vertical part scales with
    *nb_features* so that taller, multi-feature markers stay anchored
    where a single one would be.
    The user *offset* is added last.
    """
    width, height = marker_size
    total_height = nb_features * height

    if anchor is MarkerAnchor.CENTER:
        dx, dy = -width / 2, -total_height / 2
    elif anchor is MarkerAnchor.TOP:
        dx, dy = -width / 2, -total_height
    elif anchor is MarkerAnchor.BOTTOM:
        dx, dy = -width / 2, 0.0
    elif anchor is MarkerAnchor.LEFT:
        dx, dy = -width, -total_height / 2
    else:
        # `right` sits one unit above the point regardless of the displayed count.
        dx, dy = 0.0, -height

    return dx + offset[0], dy + offset[1]


def does_collide(a: AbstractMarker, b: AbstractMarker) -> bool:
    """AABB overlap test. Boxes sharing an edge count as colliding."""
    ax0, ay0, ax1, ay1 = a.bounds
    bx0, by0, bx1, by1 = b.bounds
    return not (bx0 > ax1 or bx1 < ax0 or by0 > ay1 or by1 < ay0)


def collides_with_any(marker: AbstractMarker, others: Iterable[AbstractMarker]) -> bool:
    return any(does_collide(marker, other) for other in others)


def displayed_count(nb_features: int, max_ratio_unit_size: float) -> float:
    """Number of units a marker is sized for (may be fractional)."""
    return min(nb_features, max_ratio_unit_size)


def anchored_position(
    anchor_feature: Feature,
    nb_features: int,
    config: LayoutConfig,
    project: Projector,
) -> list[float] | None:
    """Top-left screen position of a marker whose anchor is *anchor_feature*."""
    lon_lat = anchor_feature.lon_lat
    if lon_lat is None:
        return None
    x, y = screen_xy(project(*lon_lat))
    dx, dy = compute_anchor_offset(
        config.anchor,
        config.marker_size,
        config.offset,
        displayed_count(nb_features, config.max_ratio_unit_size),
    )
    return [x + dx, y + dy]


def build_marker(
    group: FeatureGroup,
    config: LayoutConfig,
    project: Projector,
    marker_class: type[MarkerT],
) -> MarkerT | None:
    """Turn *group* into a candidate marker, or ``None`` if it cannot be placed."""
    if not group.features:
        return None
    position = anchored_position(group.features[0], len(group.features), config, project)
    if position is None:
        return None
    width, height = config.marker_size
    units = displayed_count(len(group.features), config.max_ratio_unit_size)
    return marker_class(
        id=compute_feature_group_id(group.features),
        position=position,
        size=(width, height * units),
        internal_element_size=(width, height),
        features=group.features,
    )


def place_groups(
    groups: Iterable[FeatureGroup],
    config: LayoutConfig,
    project: Projector,
    marker_class: type[MarkerT],
) -> dict[int, MarkerT]:
    """Greedily accept markers in group order.

    A candidate is kept only if it overlaps none of the markers accepted
    so far; rejected candidates are not retried.  Acceptance stops once
    ``config.max`` markers are placed.

    Returns
    -------
    dict
        Accepted markers keyed by id, in acceptance order.
    """
    accepted: dict[int, MarkerT] = {}
    rejected = 0

    for group in groups:
        if config.max is not None and len(accepted) >= config.max:
            _logger.debug("Marker cap of %d reached", config.max)
            break

        marker = build_marker(group, config, project, marker_class)
        if marker is None:
            continue
        if marker.id in accepted:
            # Same feature set reported twice (e.g. across tile boundaries).
            rejected += 1
            continue
        if collides_with_any(marker, accepted.values()):
            rejected += 1
            continue
        accepted[marker.id] = marker

    _logger.debug("Placed %d markers, rejected %d", len(accepted), rejected)
    return accepted
