"""Deterministic identity hashes for feature groups.

Marker ids must be reproducible across frames (and across processes), so
Python's salted ``hash()`` cannot be used.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable

from pymarkerlayout.models.feature import Feature

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def string_hash32(value: str) -> int:
    """Polynomial rolling hash of *value*, wrapped to a signed 32-bit int.

    Uses the classic ``hash = hash * 31 + code_unit`` recurrence over the
    UTF-16 code units of the string, so ids match those computed by
    browser-side map clients.

    Parameters
    ----------
    value : str
        The string to hash.

    Returns
    -------
    int
        Value in ``[-2**31, 2**31 - 1]``.
    """
    data = value.encode("utf-16-le", "surrogatepass")
    code_units = struct.unpack(f"<{len(data) // 2}H", data)

    result = 0
    for unit in code_units:
        result = (result * 31 + unit) & _UINT32_MASK
    if result & _INT32_SIGN:
        result -= 1 << 32
    return result


def _id_text(feature_id: int | str | None) -> str:
    return "" if feature_id is None else str(feature_id)


def compute_feature_group_id(features: Iterable[Feature]) -> int:
    """Compute the marker id of a group from its member feature ids.

    Ids are sorted as text (missing ids last) and joined with ``_`` before
    hashing, so any permutation of the same multiset yields the same id.
    """
    ids = [f.id for f in features]
    ids.sort(key=lambda feature_id: (feature_id is None, _id_text(feature_id)))
    return string_hash32("_".join(_id_text(feature_id) for feature_id in ids))


def coordinate_hash(feature: Feature) -> str:
    """Location key used by ``group_by="coordinates"``.

    Built from the full double-precision ``(lon, lat)`` pair.  Returns an
    empty string for features without usable point coordinates.
    """
    lon_lat = feature.lon_lat
    if lon_lat is None:
        return ""
    lon, lat = lon_lat
    # + 0.0 folds -0.0 into 0.0 so equal coordinates share a key.
    return "_".join(str(byte) for byte in struct.pack("<2d", lon + 0.0, lat + 0.0))
