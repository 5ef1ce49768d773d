"""Feature acquisition, filtering and ordering."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from pymarkerlayout._map import MapView
from pymarkerlayout.config import FeaturePredicate, LayoutConfig, RankingFunction, SortingOrder
from pymarkerlayout.models.feature import Feature

_logger = logging.getLogger(__name__)


def _coerce_features(records: Iterable[Feature | Mapping[str, Any]]) -> Iterable[Feature]:
    for record in records:
        if isinstance(record, Feature):
            yield record
            continue
        try:
            yield Feature.model_validate(record)
        except ValidationError:
            _logger.debug("Dropping feature record that failed validation: %r", record)


def acquire_features(map_view: MapView, layers: Sequence[str] | None = None) -> list[Feature]:
    """Query the map and keep well-formed point features.

    :class:`~pymarkerlayout.exceptions.MapUnavailableError` raised by the
    map propagates to the caller.
    """
    records = map_view.query_rendered_features(layers)
    points: list[Feature] = []
    dropped = 0
    for feature in _coerce_features(records):
        if feature.lon_lat is None:
            dropped += 1
            continue
        points.append(feature)
    if dropped:
        _logger.debug("Dropped %d non-point or malformed features", dropped)
    return points


def apply_filter(features: list[Feature], predicate: FeaturePredicate | None) -> list[Feature]:
    if predicate is None:
        return features
    return [f for f in features if predicate(f)]


def _sorted_by_keys(
    features: list[Feature],
    key_of: Callable[[Feature], Any],
    order: SortingOrder,
) -> list[Feature]:
    # Keys are computed up front so errors raised by a ranking function
    # propagate, while incomparable values only disable sorting.
    keyed = [(key_of(f), f) for f in features]
    try:
        keyed.sort(key=lambda item: item[0], reverse=order is SortingOrder.DESCENDING)
    except TypeError:
        _logger.warning("Sorting values are not mutually comparable; keeping unsorted order")
        return features
    return [f for _, f in keyed]


def sort_features(
    features: list[Feature],
    sorting_property: str | RankingFunction | None,
    order: SortingOrder = SortingOrder.ASCENDING,
) -> list[Feature]:
    """Order *features* by a property value or a ranking function.

    Sorting by property name discards features that lack the property
    (or carry ``None``).  The sort is stable: ties keep their query order
    in both directions.
    """
    if sorting_property is None:
        return features

    if isinstance(sorting_property, str):
        name = sorting_property
        ranked = [f for f in features if f.properties.get(name) is not None]
        if len(ranked) != len(features):
            _logger.debug("Discarded %d features without `%s`", len(features) - len(ranked), name)
        return _sorted_by_keys(ranked, lambda f: f.properties[name], order)

    return _sorted_by_keys(features, sorting_property, order)


def select_features(features: list[Feature], config: LayoutConfig) -> list[Feature]:
    """Apply the configured filter, then the configured ordering."""
    filtered = apply_filter(features, config.filter)
    return sort_features(filtered, config.sorting_property, config.sorting_order)
