"""Layout engine: turns visible map features into non-overlapping markers."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, cast

from pymarkerlayout._map import MapView
from pymarkerlayout.config import LayoutConfig
from pymarkerlayout.exceptions import MapUnavailableError
from pymarkerlayout.layout.diff import MarkerDiffState
from pymarkerlayout.layout.grouping import group_features
from pymarkerlayout.layout.placement import anchored_position, place_groups
from pymarkerlayout.layout.selection import acquire_features, select_features
from pymarkerlayout.models.marker import AbstractMarker, AbstractPopup, MarkerStatus, MarkerT

_logger = logging.getLogger(__name__)


class LayoutEngine(Generic[MarkerT]):
    """Computes a stable, collision-free marker layout for a map viewport.

    The engine performs no rendering.  Each :meth:`update` queries the map,
    filters/sorts/groups the point features, greedily places one marker
    per group and reports which markers appeared, stayed or disappeared
    since the previous update.

    Not safe for concurrent use: ``update``, ``soft_update`` and ``reset``
    all touch the same diff state and must be called sequentially, e.g.
    ``update`` on "move end" and ``soft_update_all`` on "move".

    Example:
        engine = MarkerLayout(map_view, {"markerSize": [40, 70], "sortingProperty": "rank"})
        status = engine.update()
        if status is not None:
            for marker in status.new.values():
                ...
    """

    marker_class: ClassVar[type[AbstractMarker]] = AbstractMarker

    def __init__(
        self,
        map_view: MapView | None,
        config: LayoutConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        if isinstance(config, LayoutConfig):
            self._config = config
            if options:
                current = {f.name: getattr(config, f.name) for f in dataclasses.fields(config)}
                self._config = LayoutConfig.from_options(current, **options)
        else:
            self._config = LayoutConfig.from_options(config, **options)
        self._map = map_view
        self._state: MarkerDiffState[MarkerT] = MarkerDiffState()

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def last_status(self) -> MarkerStatus[MarkerT]:
        """Shallow copy of the status returned by the last update."""
        status = self._state.last_status
        return MarkerStatus(new=dict(status.new), updated=dict(status.updated), removed=dict(status.removed))

    def update(self) -> MarkerStatus[MarkerT] | None:
        """Recompute the layout for the current viewport.

        Returns
        -------
        MarkerStatus or None
            ``None`` when the map is not available; callers treat it as
            "no change" and retry on a later event.
        """
        if self._map is None:
            _logger.debug("No map attached; skipping layout update")
            return None

        config = self._config
        marker_class = cast("type[MarkerT]", self.marker_class)
        try:
            features = acquire_features(self._map, config.layers)
            features = select_features(features, config)
            groups = group_features(features, config.group_by, config.max_features_per_marker)
            accepted = place_groups(groups, config, self._map.project, marker_class)
        except MapUnavailableError:
            _logger.debug("Map unavailable; skipping layout update", exc_info=True)
            return None

        _logger.debug("Layout update: %d features in %d groups", len(features), len(groups))
        return self._state.apply(accepted)

    def soft_update(self, marker: MarkerT) -> bool:
        """Re-project *marker* in place without a full update.

        Only ``position`` changes; id, size and diff state are untouched.
        Intended for high-frequency "still moving" callbacks.

        Returns
        -------
        bool
            ``True`` if the position was recomputed.
        """
        if self._map is None or not marker.features:
            return False
        try:
            position = anchored_position(marker.anchor_feature, len(marker.features), self._config, self._map.project)
        except MapUnavailableError:
            _logger.debug("Map unavailable; soft update skipped for marker %s", marker.id)
            return False
        if position is None:
            return False
        marker.position[0], marker.position[1] = position
        return True

    def soft_update_all(self) -> int:
        """Soft-update every marker currently on screen.

        Returns the number of markers repositioned.
        """
        return sum(1 for marker in self._state.last_status.present.values() if self.soft_update(marker))

    def reset(self) -> None:
        """Forget all markers; the next update reports everything as new."""
        self._state.reset()
        _logger.debug("Layout state reset")


class MarkerLayout(LayoutEngine[AbstractMarker]):
    """Layout engine producing :class:`AbstractMarker` items."""

    marker_class = AbstractMarker

    def soft_update_abstract_marker(self, marker: AbstractMarker) -> bool:
        return self.soft_update(marker)


class PopupManager(LayoutEngine[AbstractPopup]):
    """Layout engine producing :class:`AbstractPopup` items.

    Shares every option with :class:`MarkerLayout`, including ranking
    functions for ``sorting_property``.
    """

    marker_class = AbstractPopup

    def soft_update_abstract_popup(self, popup: AbstractPopup) -> bool:
        return self.soft_update(popup)
