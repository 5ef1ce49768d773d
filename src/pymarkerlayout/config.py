"""Layout engine configuration."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pymarkerlayout._constants import DEFAULT_MARKER_SIZE, DEFAULT_MAX_RATIO_UNIT_SIZE, DEFAULT_OFFSET
from pymarkerlayout.exceptions import MarkerLayoutConfigError
from pymarkerlayout.models.feature import Feature
from pymarkerlayout.models.marker import MarkerAnchor

FeaturePredicate = Callable[[Feature], bool]
RankingFunction = Callable[[Feature], float]


class SortingOrder(StrEnum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


# camelCase option names (as used by browser map clients) -> field names.
# Both historical engines' spellings are accepted.
_OPTION_MAP: dict[str, str] = {
    "layers": "layers",
    "markerSize": "marker_size",
    "popupSize": "marker_size",
    "max": "max",
    "anchor": "anchor",
    "markerAnchor": "anchor",
    "popupAnchor": "anchor",
    "offset": "offset",
    "filter": "filter",
    "sortingProperty": "sorting_property",
    "sortingOrder": "sorting_order",
    "groupBy": "group_by",
    "maxFeaturesPerMarker": "max_features_per_marker",
    "maxNbFeaturesPerMarker": "max_features_per_marker",
    "maxNbFeaturesPerPopup": "max_features_per_marker",
    "maxRatioUnitSize": "max_ratio_unit_size",
}


def _pair(option: str, value: Any, *, positive: bool) -> tuple[float, float]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)) or len(value) != 2:
        raise MarkerLayoutConfigError(f"`{option}` must be a [x, y] pair, got {value!r}", option=option)
    result: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)) or not math.isfinite(item):
            raise MarkerLayoutConfigError(f"`{option}` must contain finite numbers, got {value!r}", option=option)
        if positive and item <= 0:
            raise MarkerLayoutConfigError(f"`{option}` must contain positive numbers, got {value!r}", option=option)
        result.append(float(item))
    return result[0], result[1]


def _limit(option: str, value: Any) -> int | None:
    """Normalize an optional count limit; ``None`` and infinity mean unlimited."""
    if value is None:
        return None
    if isinstance(value, float) and math.isinf(value) and value > 0:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise MarkerLayoutConfigError(f"`{option}` must be an integer >= 1, got {value!r}", option=option)
    return value


@dataclasses.dataclass(frozen=True)
class LayoutConfig:
    """Layout engine configuration.

    Parameters
    ----------
    layers : tuple of str or None
        Style layer ids to query for features. ``None`` queries every layer.
    marker_size : tuple of float
        Size ``(width, height)`` of a single-feature marker in pixels.
    max : int or None
        Maximum number of markers kept per update. ``None`` means no maximum.
    anchor : MarkerAnchor
        Which part of the marker box sits on the feature's point.
    offset : tuple of float
        Pixel offset ``(dx, dy)`` added after anchoring; positive values
        shift right and down.
    filter : callable or None
        Predicate; features for which it returns false are discarded.
    sorting_property : str, callable or None
        Property name to sort by (features lacking it are discarded), or a
        ranking function returning the sort value of a feature.
    sorting_order : SortingOrder
        ``"ascending"`` or ``"descending"``. Ignored without a sorting property.
    group_by : str or None
        Property name to group features by, or ``"coordinates"`` to merge
        features sharing a location. ``None`` gives one marker per feature.
    max_features_per_marker : int or None
        Cap on the member count of a group. Extra features are dropped.
    max_ratio_unit_size : float
        Cap on the height of a multi-feature marker, in units of
        ``marker_size[1]``. Intentionally fractional by default so a
        half-visible row hints at scrollable content.
    """

    layers: tuple[str, ...] | None = None
    marker_size: tuple[float, float] = DEFAULT_MARKER_SIZE
    max: int | None = None
    anchor: MarkerAnchor = MarkerAnchor.CENTER
    offset: tuple[float, float] = DEFAULT_OFFSET
    filter: FeaturePredicate | None = None
    sorting_property: str | RankingFunction | None = None
    sorting_order: SortingOrder = SortingOrder.ASCENDING
    group_by: str | None = None
    max_features_per_marker: int | None = None
    max_ratio_unit_size: float = DEFAULT_MAX_RATIO_UNIT_SIZE

    def __post_init__(self) -> None:
        # Frozen dataclass: normalized values are written back via object.__setattr__.
        def _set(name: str, value: Any) -> None:
            object.__setattr__(self, name, value)

        if self.layers is not None:
            layers = (self.layers,) if isinstance(self.layers, str) else tuple(self.layers)
            if not all(isinstance(layer, str) for layer in layers):
                raise MarkerLayoutConfigError(f"`layers` must contain layer ids, got {self.layers!r}", option="layers")
            _set("layers", layers)

        _set("marker_size", _pair("marker_size", self.marker_size, positive=True))
        _set("offset", _pair("offset", self.offset, positive=False))
        _set("max", _limit("max", self.max))
        _set("max_features_per_marker", _limit("max_features_per_marker", self.max_features_per_marker))

        try:
            _set("anchor", MarkerAnchor(self.anchor))
        except ValueError as err:
            allowed = ", ".join(repr(a.value) for a in MarkerAnchor)
            raise MarkerLayoutConfigError(
                f"`anchor` must be one of {allowed}, got {self.anchor!r}",
                option="anchor",
            ) from err

        try:
            _set("sorting_order", SortingOrder(self.sorting_order))
        except ValueError as err:
            raise MarkerLayoutConfigError(
                f"`sorting_order` must be 'ascending' or 'descending', got {self.sorting_order!r}",
                option="sorting_order",
            ) from err

        if self.filter is not None and not callable(self.filter):
            raise MarkerLayoutConfigError("`filter` must be callable", option="filter")

        if self.sorting_property == "":
            _set("sorting_property", None)
        elif self.sorting_property is not None and not (
            isinstance(self.sorting_property, str) or callable(self.sorting_property)
        ):
            raise MarkerLayoutConfigError(
                "`sorting_property` must be a property name or a ranking function",
                option="sorting_property",
            )

        if self.group_by == "":
            _set("group_by", None)
        elif self.group_by is not None and not isinstance(self.group_by, str):
            raise MarkerLayoutConfigError(f"`group_by` must be a property name, got {self.group_by!r}", option="group_by")

        ratio = self.max_ratio_unit_size
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not math.isfinite(ratio) or ratio <= 0:
            raise MarkerLayoutConfigError(
                f"`max_ratio_unit_size` must be a positive number, got {ratio!r}",
                option="max_ratio_unit_size",
            )
        _set("max_ratio_unit_size", float(ratio))

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, **overrides: Any) -> LayoutConfig:
        """Create configuration from an options mapping.

        Accepts camelCase option names (``markerSize``, ``sortingOrder``,
        ``maxNbFeaturesPerPopup``, ...) as well as field names. Explicit
        keyword arguments override mapping values. ``None`` values fall
        back to the field default.

        Parameters
        ----------
        options : Mapping or None
            Option name -> value.
        **overrides
            Explicit field values that take precedence over *options*.

        Returns
        -------
        LayoutConfig
            Validated configuration.

        Raises
        ------
        MarkerLayoutConfigError
            On unknown option names or invalid values.
        """
        field_names = {f.name for f in dataclasses.fields(cls)}

        config_kwargs: dict[str, Any] = {}
        for key, value in {**(options or {}), **overrides}.items():
            field_name = key if key in field_names else _OPTION_MAP.get(key)
            if field_name is None:
                raise MarkerLayoutConfigError(f"Unknown layout option `{key}`", option=key)
            if value is None:
                continue
            config_kwargs[field_name] = value

        return cls(**config_kwargs)
