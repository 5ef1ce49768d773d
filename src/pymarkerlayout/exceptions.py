"""Custom exception hierarchy for pymarkerlayout."""

from __future__ import annotations


class MarkerLayoutError(Exception):
    """Base exception for all pymarkerlayout errors."""


class MarkerLayoutConfigError(MarkerLayoutError):
    """Invalid layout options.

    Raised synchronously while building a :class:`~pymarkerlayout.config.LayoutConfig`,
    before any engine state exists.
    """

    def __init__(self, message: str, *, option: str = "") -> None:
        self.option = option
        super().__init__(message)


class MapUnavailableError(MarkerLayoutError):
    """The map collaborator cannot answer queries or projections yet.

    Map adapters raise this while their style/tiles are not loaded.  The
    engine never lets it escape: ``update()`` returns ``None`` and soft
    updates leave markers untouched.
    """
