"""Marker models produced by the layout engine."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from pymarkerlayout.models.feature import Feature


class MarkerAnchor(StrEnum):
    """How a marker box is anchored to its geographic point."""

    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class FeatureGroup:
    """Features rendered together as a single marker.

    Member order is discovery order; the first member is the anchor.
    """

    group_key: Hashable
    features: list[Feature] = field(default_factory=list)


@dataclass
class AbstractMarker:
    """Minimalist description of a marker in screen space.

    Parameters
    ----------
    id : int
        Deterministic 32-bit id derived from the member feature ids.
    position : list of float
        Top-left corner ``[x, y]`` in screen space. Soft updates mutate it
        in place.
    size : tuple of float
        ``(width, height)``; the height grows with the displayed member count.
    internal_element_size : tuple of float
        Size of one displayed unit, for callers rendering one row per feature.
    features : list of Feature
        Every member feature, possibly more than the displayed count.
    """

    id: int
    position: list[float]
    size: tuple[float, float]
    internal_element_size: tuple[float, float]
    features: list[Feature]

    @property
    def anchor_feature(self) -> Feature:
        return self.features[0]

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """``(min_x, min_y, max_x, max_y)`` of the screen-space box."""
        x, y = self.position
        return x, y, x + self.size[0], y + self.size[1]


@dataclass
class AbstractPopup(AbstractMarker):
    """A popup laid out with the same rules as a marker."""


MarkerT = TypeVar("MarkerT", bound=AbstractMarker)


@dataclass
class MarkerStatus(Generic[MarkerT]):
    """Markers whose presence or position changed since the previous update."""

    new: dict[int, MarkerT] = field(default_factory=dict)
    updated: dict[int, MarkerT] = field(default_factory=dict)
    removed: dict[int, MarkerT] = field(default_factory=dict)

    @property
    def present(self) -> dict[int, MarkerT]:
        """Markers currently on screen (``new`` then ``updated``)."""
        return {**self.new, **self.updated}

    def is_empty(self) -> bool:
        return not (self.new or self.updated or self.removed)
