"""Map collaborator interface and an in-memory Web Mercator implementation."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from pymarkerlayout._constants import MERCATOR_LAT_BOUND, WORLD_TILE_SIZE
from pymarkerlayout.exceptions import MapUnavailableError
from pymarkerlayout.models.feature import Feature

_logger = logging.getLogger(__name__)

ScreenPoint = Any
"""``(x, y)`` pair or any object exposing ``x`` and ``y`` attributes."""


class MapView(Protocol):
    """Structural interface of the map/rendering engine.

    Having a protocol here makes it easy to plug any renderer (or a test
    double) while keeping the engine free of rendering concerns.
    Implementations raise :class:`MapUnavailableError` while not ready.
    """

    def query_rendered_features(self, layers: Sequence[str] | None = None) -> Iterable[Feature | Mapping[str, Any]]:
        ...

    def project(self, lon: float, lat: float) -> ScreenPoint:
        ...


def screen_xy(point: ScreenPoint) -> tuple[float, float]:
    """Normalize a projected point to an ``(x, y)`` float tuple."""
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


def mercator_world_xy(lon: float, lat: float, world_size: float) -> tuple[float, float]:
    """Convert geographic coordinates to Web Mercator world pixels."""
    lat = max(min(lat, MERCATOR_LAT_BOUND), -MERCATOR_LAT_BOUND)
    x = (lon + 180.0) / 360.0 * world_size
    sin_lat = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * world_size
    return x, y


class WebMercatorView:
    """In-memory map holding a feature list and a Web Mercator viewport.

    Point features are reported only while they project inside the
    viewport; other geometries are always reported, like a renderer
    returning every visible line and polygon.
    """

    def __init__(
        self,
        features: Iterable[Feature | Mapping[str, Any]] = (),
        *,
        center: tuple[float, float] = (0.0, 0.0),
        zoom: float = 0.0,
        width: int = 1024,
        height: int = 768,
        ready: bool = True,
    ) -> None:
        self._features: list[Feature] = []
        self._center = center
        self._zoom = zoom
        self.width = width
        self.height = height
        self.ready = ready
        self.add_features(features)

    @property
    def center(self) -> tuple[float, float]:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def world_size(self) -> float:
        return WORLD_TILE_SIZE * 2.0**self._zoom

    def add_features(self, features: Iterable[Feature | Mapping[str, Any]]) -> None:
        for item in features:
            if isinstance(item, Feature):
                self._features.append(item)
                continue
            try:
                self._features.append(Feature.model_validate(item))
            except ValidationError:
                _logger.debug("Skipping invalid feature record %r", item, exc_info=True)

    def clear_features(self) -> None:
        self._features.clear()

    def pan_to(self, lon: float, lat: float) -> None:
        self._center = (lon, lat)

    def set_zoom(self, zoom: float) -> None:
        self._zoom = zoom

    def project(self, lon: float, lat: float) -> tuple[float, float]:
        if not self.ready:
            raise MapUnavailableError("map is not loaded")
        size = self.world_size
        x, y = mercator_world_xy(lon, lat, size)
        cx, cy = mercator_world_xy(self._center[0], self._center[1], size)
        return x - cx + self.width / 2, y - cy + self.height / 2

    def _in_viewport(self, feature: Feature) -> bool:
        lon_lat = feature.lon_lat
        if lon_lat is None:
            # Malformed points are reported as-is; consumers decide what to keep.
            return True
        x, y = self.project(*lon_lat)
        return 0 <= x <= self.width and 0 <= y <= self.height

    def query_rendered_features(self, layers: Sequence[str] | None = None) -> list[Feature]:
        if not self.ready:
            raise MapUnavailableError("map is not loaded")
        wanted = set(layers) if layers is not None else None
        result: list[Feature] = []
        for feature in self._features:
            if wanted is not None and feature.layer not in wanted:
                continue
            if feature.is_point and not self._in_viewport(feature):
                continue
            result.append(feature)
        return result
