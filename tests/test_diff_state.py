from __future__ import annotations

from pymarkerlayout.layout.diff import MarkerDiffState
from pymarkerlayout.models.marker import AbstractMarker


def _marker(marker_id: int, x: float = 0.0) -> AbstractMarker:
    return AbstractMarker(id=marker_id, position=[x, 0.0], size=(10.0, 10.0), internal_element_size=(10.0, 10.0), features=[])


def _frame(*ids: int) -> dict[int, AbstractMarker]:
    return {marker_id: _marker(marker_id) for marker_id in ids}


def test_first_frame_is_all_new() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    status = state.apply(_frame(1, 2))
    assert set(status.new) == {1, 2}
    assert status.updated == {}
    assert status.removed == {}


def test_present_again_is_updated() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    state.apply(_frame(1, 2))
    status = state.apply(_frame(2, 3))
    assert set(status.new) == {3}
    assert set(status.updated) == {2}
    assert set(status.removed) == {1}


def test_updated_stays_updated() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    state.apply(_frame(1))
    state.apply(_frame(1))
    status = state.apply(_frame(1))
    assert set(status.updated) == {1}
    assert status.new == {}


def test_no_direct_absent_to_updated() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    state.apply(_frame(1))
    state.apply(_frame())
    status = state.apply(_frame(1))
    assert set(status.new) == {1}
    assert status.updated == {}


def test_removed_carries_previous_marker_objects() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    first = _frame(5)
    state.apply(first)
    status = state.apply(_frame())
    assert status.removed[5] is first[5]


def test_updated_carries_current_marker_objects() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    state.apply({1: _marker(1, x=0.0)})
    current = {1: _marker(1, x=25.0)}
    status = state.apply(current)
    assert status.updated[1] is current[1]


def test_partition_is_disjoint_and_complete() -> None:
    frames = [(1, 2, 3), (2, 3, 4), (), (4, 5), (4, 5), (1, 5, 6)]
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    previous: set[int] = set()
    for ids in frames:
        status = state.apply(_frame(*ids))
        new, updated, removed = set(status.new), set(status.updated), set(status.removed)
        assert not new & updated and not new & removed and not updated & removed
        assert new | updated == set(ids)
        assert removed == previous - set(ids)
        assert set(status.present) == set(ids)
        previous = set(ids)


def test_reset_forgets_everything() -> None:
    state: MarkerDiffState[AbstractMarker] = MarkerDiffState()
    state.apply(_frame(1, 2))
    state.reset()
    assert state.last_status.is_empty()
    status = state.apply(_frame(1, 2))
    assert set(status.new) == {1, 2}
    assert status.removed == {}
