"""Data models for features and laid-out markers."""

from pymarkerlayout.models.feature import Feature, Geometry
from pymarkerlayout.models.marker import (
    AbstractMarker,
    AbstractPopup,
    FeatureGroup,
    MarkerAnchor,
    MarkerStatus,
    MarkerT,
)

__all__ = [
    "AbstractMarker",
    "AbstractPopup",
    "Feature",
    "FeatureGroup",
    "Geometry",
    "MarkerAnchor",
    "MarkerStatus",
    "MarkerT",
]
