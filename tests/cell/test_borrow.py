"""Tests for borrow guards and runtime borrow tracking.

Critical Invariants:
- Shared guards coexist, an exclusive guard excludes everything else
- Violations raise BorrowError and leave the cell unchanged
- The write guard creates the overlay when it is constructed
"""

import pytest

from ghostcell import (
    BorrowError,
    BorrowTracker,
    CellClosedError,
    CellState,
    GhostBorrow,
    GhostBorrowMut,
    GhostCell,
)


@pytest.fixture
def data():
    return [1, 2, 3]


@pytest.fixture
def cell(data):
    return GhostCell(data)


def test_borrow_reads_effective_value(cell, data):
    with cell.borrow() as items:
        assert items is data

    cell.get_mut().append(4)
    with cell.borrow() as items:
        assert items == [1, 2, 3, 4]


def test_shared_borrows_coexist(cell):
    first = cell.borrow()
    second = cell.borrow()

    assert len(first.value) == len(second.value) == 3
    assert cell.get() == [1, 2, 3]

    first.release()
    second.release()


def test_borrow_mut_creates_overlay_at_construction(cell, data):
    guard = cell.borrow_mut()

    assert cell.state is CellState.DIRTY
    assert guard.value is not data
    guard.release()


def test_nested_borrows_mutate_overlay_only(cell, data):
    with cell.borrow_mut() as items:
        items.append(4)
        assert len(items) == 4
        items.pop()
    assert data == [1, 2, 3]
    assert cell.get() == [1, 2, 3]


def test_borrow_then_borrow_mut(cell, data):
    with cell.borrow() as items:
        assert len(items) == 3

    with cell.borrow_mut() as items:
        items.append(4)
        assert len(items) == 4

    cell.discard()
    assert data == [1, 2, 3]


def test_borrow_mut_value_setter_replaces_overlay():
    cell = GhostCell(10)

    with cell.borrow_mut():
        pass
    guard = cell.borrow_mut()
    guard.value = 20
    assert guard.value == 20
    guard.release()

    assert cell.get() == 20
    assert cell.original == 10


def test_exclusive_guard_blocks_everything(cell):
    """CRITICAL: No second accessor can alias a live write guard.

    Why: A reader holding the original while a writer swaps in an overlay
    would observe stale data.
    """
    guard = cell.borrow_mut()

    for operation in (
        cell.get,
        cell.get_mut,
        cell.revert,
        cell.into_inner,
        cell.discard,
        cell.borrow,
        cell.borrow_mut,
        lambda: cell.set([0]),
        lambda: cell.update(list),
    ):
        with pytest.raises(BorrowError, match="mutably borrowed"):
            operation()

    guard.release()
    assert cell.get() == [1, 2, 3]


def test_shared_guard_blocks_writes(cell):
    guard = cell.borrow()

    for operation in (
        cell.get_mut,
        cell.revert,
        cell.into_inner,
        cell.discard,
        cell.borrow_mut,
        lambda: cell.set([0]),
    ):
        with pytest.raises(BorrowError, match="shared guard"):
            operation()

    assert cell.state is CellState.CLEAN
    guard.release()
    cell.get_mut().append(4)
    assert cell.get() == [1, 2, 3, 4]


def test_failed_borrow_mut_does_not_create_overlay(cell):
    guard = cell.borrow()

    with pytest.raises(BorrowError):
        cell.borrow_mut()

    assert cell.state is CellState.CLEAN
    guard.release()


def test_release_is_idempotent(cell):
    guard = cell.borrow_mut()

    guard.release()
    guard.release()

    assert guard.released
    assert not cell._tracker.is_borrowed


def test_released_guard_is_unusable(cell):
    read = cell.borrow()
    read.release()
    write = cell.borrow_mut()
    write.release()

    with pytest.raises(BorrowError, match="after release"):
        _ = read.value
    with pytest.raises(BorrowError, match="after release"):
        write.value = [0]


def test_guard_outliving_cell_scope(data):
    with GhostCell(data) as cell:
        guard = cell.borrow_mut()
        guard.value.append(4)
    assert cell.state is CellState.DISCARDED
    assert data == [1, 2, 3]

    with pytest.raises(CellClosedError):
        _ = guard.value
    guard.release()


def test_guard_types(cell):
    with cell.borrow() as _:
        pass
    assert isinstance(cell.borrow(), GhostBorrow)
    assert not isinstance(cell.borrow(), GhostBorrowMut)


def test_tracker_counts():
    tracker = BorrowTracker()

    tracker.acquire_shared()
    tracker.acquire_shared()
    assert tracker.shared_count == 2
    assert tracker.is_borrowed
    tracker.check_readable("get")

    tracker.release_shared()
    tracker.release_shared()
    tracker.acquire_exclusive()
    assert tracker.is_exclusive

    with pytest.raises(BorrowError):
        tracker.acquire_shared()


def test_tracker_rejects_unbalanced_release():
    tracker = BorrowTracker()

    with pytest.raises(BorrowError):
        tracker.release_shared()
    with pytest.raises(BorrowError):
        tracker.release_exclusive()


@pytest.mark.parametrize("guard_cls", [GhostBorrow, GhostBorrowMut])
def test_guard_constructors_reject_closed_cells(data, guard_cls):
    consumed = GhostCell(data)
    consumed.into_inner()
    discarded = GhostCell(data)
    discarded.discard()

    for closed in (consumed, discarded):
        with pytest.raises(CellClosedError):
            guard_cls(closed)
        assert not closed._tracker.is_borrowed
    assert data == [1, 2, 3]


def test_direct_guard_construction_on_open_cell(cell, data):
    with GhostBorrowMut(cell) as items:
        items.append(4)
    with GhostBorrow(cell) as items:
        assert items == [1, 2, 3, 4]
    assert data == [1, 2, 3]


def test_incomplete_guard_subclass_names_missing_members(cell):
    from ghostcell.cell.borrow import _Guard

    class HalfGuard(_Guard):
        __slots__ = ()

    guard = HalfGuard(cell)

    with pytest.raises(NotImplementedError, match="HalfGuard must implement value"):
        _ = guard.value
    with pytest.raises(NotImplementedError, match="HalfGuard must implement _release"):
        guard.release()
