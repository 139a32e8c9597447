"""Tests for Layer 2 — segment validity and the sparse grid."""

from cellbounds.engine.context import Orientation, Rect, Segment
from cellbounds.engine.layer2.t2_01_valid_segments import filter_valid_segments
from cellbounds.engine.layer2.t2_02_grid import build_grid, containing_rect, grid_lines


def _seg(i: int, start, end, orientation: Orientation) -> Segment:
    return Segment(id=i, start=start, end=end, orientation=orientation, cell_ids=("cell-0", "cell-1"))


def test_segments_entering_a_cell_are_dropped():
    cells = [Rect(0, 0, 100, 100), Rect(200, 75, 300, 175)]
    segments = [
        _seg(0, (150.0, 0.0), (150.0, 87.5), Orientation.VERTICAL),
        _seg(1, (150.0, 87.5), (150.0, 175.0), Orientation.VERTICAL),
        # Starts on cell 0's left border
        _seg(2, (0.0, 87.5), (150.0, 87.5), Orientation.HORIZONTAL),
        # Ends on cell 1's right border
        _seg(3, (150.0, 87.5), (300.0, 87.5), Orientation.HORIZONTAL),
    ]
    assert [s.id for s in filter_valid_segments(segments, cells)] == [0, 1]


def test_segment_crossing_a_cell_is_dropped():
    cells = [Rect(20, 0, 30, 10)]
    crossing = _seg(0, (25.0, -5.0), (25.0, 15.0), Orientation.VERTICAL)
    assert filter_valid_segments([crossing], cells) == []


def test_grid_lines_include_container_edges():
    valid = [
        _seg(0, (150.0, 0.0), (150.0, 125.0), Orientation.VERTICAL),
        _seg(1, (150.0, 125.0), (150.0, 250.0), Orientation.VERTICAL),
        _seg(2, (0.0, 125.0), (150.0, 125.0), Orientation.HORIZONTAL),
        _seg(3, (150.0, 125.00001), (300.0, 125.00001), Orientation.HORIZONTAL),
    ]
    xs, ys = grid_lines(valid, 300, 250)
    assert xs == [0.0, 150.0, 300]
    assert ys == [0.0, 125.0, 250]


def test_containing_rect_snaps_outward():
    xs = [0.0, 150.0, 300.0]
    ys = [0.0, 125.0, 250.0]
    assert containing_rect(Rect(0, 0, 100, 100), xs, ys) == Rect(0, 0, 150, 125)
    assert containing_rect(Rect(200, 150, 300, 250), xs, ys) == Rect(150, 125, 300, 250)
    # A cell already on grid lines keeps its extent
    assert containing_rect(Rect(150, 0, 300, 125), xs, ys) == Rect(150, 0, 300, 125)


def test_build_grid_skips_cells_and_appends_containing_rects():
    cells = [Rect(0, 0, 100, 100), Rect(200, 150, 300, 250)]
    arena, containing = build_grid(cells, [0.0, 150.0, 300.0], [0.0, 125.0, 250.0])

    assert [g.rect for g in arena] == [
        Rect(0, 125, 150, 250),
        Rect(150, 0, 300, 125),
        Rect(0, 0, 150, 125),
        Rect(150, 125, 300, 250),
    ]
    assert [g.id for g in arena] == [0, 1, 2, 3]
    assert containing == [2, 3]
    assert [g.cell_index for g in arena] == [None, None, 0, 1]
    assert arena[2].is_seed and not arena[0].is_seed


def test_build_grid_with_no_free_cells():
    cells = [Rect(0, 0, 100, 100), Rect(200, 75, 300, 175)]
    arena, containing = build_grid(cells, [0.0, 150.0, 300.0], [0.0, 175.0])
    assert [g.rect for g in arena] == [Rect(0, 0, 150, 175), Rect(150, 0, 300, 175)]
    assert containing == [0, 1]
