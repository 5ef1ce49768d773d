"""Cross-frame identity tracking of accepted markers.

This is the only layout component that keeps state between updates.
"""

from __future__ import annotations

import logging
from typing import Generic

from pymarkerlayout.models.marker import MarkerStatus, MarkerT

_logger = logging.getLogger(__name__)


class MarkerDiffState(Generic[MarkerT]):
    """Classifies each frame's markers as new, updated or removed.

    Deterministic: the same sequence of accepted sets always yields the
    same statuses.  A marker is ``updated`` only if it was on screen in
    the previous frame, so there is no transition from absent straight
    to updated.
    """

    def __init__(self) -> None:
        self._last_present: dict[int, MarkerT] = {}
        self._last_status: MarkerStatus[MarkerT] = MarkerStatus()

    @property
    def last_status(self) -> MarkerStatus[MarkerT]:
        return self._last_status

    def apply(self, accepted: dict[int, MarkerT]) -> MarkerStatus[MarkerT]:
        """Record *accepted* as the current frame and return its status."""
        new: dict[int, MarkerT] = {}
        updated: dict[int, MarkerT] = {}
        for marker_id, marker in accepted.items():
            if marker_id in self._last_present:
                updated[marker_id] = marker
            else:
                new[marker_id] = marker

        removed = {
            marker_id: marker for marker_id, marker in self._last_present.items() if marker_id not in accepted
        }

        self._last_present = dict(accepted)
        self._last_status = MarkerStatus(new=new, updated=updated, removed=removed)
        _logger.debug("Marker diff: new=%d updated=%d removed=%d", len(new), len(updated), len(removed))
        return self._last_status

    def reset(self) -> None:
        self._last_present = {}
        self._last_status = MarkerStatus()
