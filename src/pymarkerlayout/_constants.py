"""Internal constants shared across the library."""

DEFAULT_MARKER_SIZE: tuple[float, float] = (150.0, 50.0)
DEFAULT_OFFSET: tuple[float, float] = (0.0, 0.0)
DEFAULT_MAX_RATIO_UNIT_SIZE = 2.5

# Special ``group_by`` value that merges features sharing a location.
COORDINATES_GROUP_KEY = "coordinates"

# ------------------------------------------------------------------
# Web Mercator screen projection
# ------------------------------------------------------------------

WORLD_TILE_SIZE = 512.0
MERCATOR_LAT_BOUND = 85.05112878
