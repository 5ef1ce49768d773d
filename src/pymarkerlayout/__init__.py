"""pymarkerlayout - Collision-free marker layout for interactive maps."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymarkerlayout")
except PackageNotFoundError:
    __version__ = "0+local"
from pymarkerlayout._map import MapView, WebMercatorView
from pymarkerlayout.config import LayoutConfig, SortingOrder
from pymarkerlayout.engine import LayoutEngine, MarkerLayout, PopupManager
from pymarkerlayout.exceptions import MapUnavailableError, MarkerLayoutConfigError, MarkerLayoutError
from pymarkerlayout.models import (
    AbstractMarker,
    AbstractPopup,
    Feature,
    FeatureGroup,
    Geometry,
    MarkerAnchor,
    MarkerStatus,
)

__all__ = [
    "__version__",
    "AbstractMarker",
    "AbstractPopup",
    "Feature",
    "FeatureGroup",
    "Geometry",
    "LayoutConfig",
    "LayoutEngine",
    "MapUnavailableError",
    "MapView",
    "MarkerAnchor",
    "MarkerLayout",
    "MarkerLayoutConfigError",
    "MarkerLayoutError",
    "MarkerStatus",
    "PopupManager",
    "SortingOrder",
    "WebMercatorView",
]
