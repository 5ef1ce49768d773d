"""Feature records supplied by the map collaborator."""

from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Geometry(BaseModel):
    """GeoJSON-like geometry.

    Only ``Point`` geometries are laid out; every other type is carried
    through validation so the selection stage can discard it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = ""
    coordinates: Any = None


class Feature(BaseModel):
    """A rendered vector feature as reported by the map.

    Parameters
    ----------
    id : int, str or None
        Stable feature identifier, most likely coming from a vector tile.
    geometry : Geometry
        Feature geometry. Point coordinates are ``[lon, lat]``.
    properties : dict
        Arbitrary named properties (``rank``, ``class``, ...).
    layer : str or None
        Identifier of the style layer the feature was rendered in.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: int | str | None = None
    geometry: Geometry = Field(default_factory=Geometry)
    properties: dict[str, Any] = Field(default_factory=dict)
    layer: str | None = Field(
        default=None,
        validation_alias=AliasChoices("layer", "sourceLayer", "source_layer", "layerId"),
    )

    @field_validator("properties", mode="before")
    @classmethod
    def _none_properties(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("layer", mode="before")
    @classmethod
    def _unwrap_layer(cls, value: Any) -> Any:
        # Style-aware maps report the whole layer object ({"id": ..., "type": ...}).
        if isinstance(value, dict):
            return value.get("id")
        return value

    @property
    def is_point(self) -> bool:
        return self.geometry.type == "Point"

    @property
    def lon_lat(self) -> tuple[float, float] | None:
        """Return ``(lon, lat)`` for a well-formed point, ``None`` otherwise."""
        if not self.is_point:
            return None
        coords = self.geometry.coordinates
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            return None
        lon, lat = coords[0], coords[1]
        if isinstance(lon, bool) or isinstance(lat, bool):
            return None
        if not isinstance(lon, (int, float)) or not isinstance(lat, (int, float)):
            return None
        if not (math.isfinite(lon) and math.isfinite(lat)):
            return None
        return float(lon), float(lat)
