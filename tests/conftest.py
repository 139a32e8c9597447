"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cellbounds.engine.context import Line


# Scenes as [minX, minY, maxX, maxY] rows, with their expected boundaries.

TWO_SIDE_BY_SIDE = [[0, 0, 100, 100], [200, 0, 300, 100]]
TWO_SIDE_BY_SIDE_LINES = [((150, 0), (150, 100))]

TWO_DIAGONAL = [[0, 0, 100, 100], [200, 75, 300, 175]]
TWO_DIAGONAL_LINES = [((150, 0), (150, 175))]

TWO_STACKED = [[0, 0, 100, 100], [0, 200, 100, 300]]
TWO_STACKED_LINES = [((0, 150), (100, 150))]

THREE_T_JUNCTION = [[0, 0, 100, 100], [50, 200, 250, 300], [200, 0, 300, 100]]
THREE_T_JUNCTION_LINES = [((0, 150), (300, 150)), ((150, 0), (150, 150))]

TWO_OFFSET_STACKED = [[0, 0, 100, 100], [75, 150, 275, 250]]
TWO_OFFSET_STACKED_LINES = [((0, 125), (275, 125))]

THREE_L_SHAPE = [[50, 50, 150, 150], [300, 250, 400, 350], [50, 250, 150, 350]]
THREE_L_SHAPE_LINES = [((50, 200), (225, 200)), ((225, 50), (225, 350))]

THREE_STAIRCASE = [[100, 75, 200, 175], [400, 200, 500, 300], [250, 150, 350, 250]]
THREE_STAIRCASE_LINES = [((225, 75), (225, 300)), ((375, 75), (375, 300))]

THREE_COLUMN_AND_PAIR = [[300, 250, 400, 350], [125, 100, 225, 200], [300, 100, 400, 200]]
THREE_COLUMN_AND_PAIR_LINES = [((262.5, 100), (262.5, 350)), ((262.5, 225), (400, 225))]

THREE_ZIGZAG = [[175, 0, 275, 100], [275, 150, 375, 250], [175, 300, 275, 400]]
THREE_ZIGZAG_LINES = [((175, 125), (375, 125)), ((175, 275), (375, 275))]

THREE_STEP_DOWN = [[150, 100, 250, 200], [250, 250, 350, 350], [300, 50, 400, 150]]
THREE_STEP_DOWN_LINES = [((150, 225), (400, 225)), ((275, 50), (275, 200)), ((275, 200), (400, 200))]

THREE_STEP_UP = [[375, 50, 475, 150], [175, 125, 275, 225], [325, 175, 425, 275]]
THREE_STEP_UP_LINES = [((300, 162.5), (300, 275)), ((300, 162.5), (475, 162.5)), ((325, 50), (325, 162.5))]

FOUR_PINWHEEL = [[175, 50, 275, 150], [25, 225, 125, 325], [250, 300, 350, 400], [375, 75, 475, 175]]
FOUR_PINWHEEL_LINES = [
    ((25, 200), (187.5, 200)),
    ((187.5, 200), (187.5, 225)),
    ((187.5, 225), (362.5, 225)),
    ((187.5, 237.5), (187.5, 400)),
    ((187.5, 237.5), (250, 237.5)),
    ((250, 225), (250, 237.5)),
    ((325, 50), (325, 225)),
    ((362.5, 225), (362.5, 237.5)),
    ((362.5, 237.5), (475, 237.5)),
]

SCENES = {
    "side_by_side": (TWO_SIDE_BY_SIDE, TWO_SIDE_BY_SIDE_LINES),
    "diagonal": (TWO_DIAGONAL, TWO_DIAGONAL_LINES),
    "stacked": (TWO_STACKED, TWO_STACKED_LINES),
    "t_junction": (THREE_T_JUNCTION, THREE_T_JUNCTION_LINES),
    "offset_stacked": (TWO_OFFSET_STACKED, TWO_OFFSET_STACKED_LINES),
    "l_shape": (THREE_L_SHAPE, THREE_L_SHAPE_LINES),
    "staircase": (THREE_STAIRCASE, THREE_STAIRCASE_LINES),
    "column_and_pair": (THREE_COLUMN_AND_PAIR, THREE_COLUMN_AND_PAIR_LINES),
    "zigzag": (THREE_ZIGZAG, THREE_ZIGZAG_LINES),
    "step_down": (THREE_STEP_DOWN, THREE_STEP_DOWN_LINES),
    "step_up": (THREE_STEP_UP, THREE_STEP_UP_LINES),
    "pinwheel": (FOUR_PINWHEEL, FOUR_PINWHEEL_LINES),
}


def as_dicts(rows: list[list[float]]) -> list[dict[str, float]]:
    return [{"minX": r[0], "minY": r[1], "maxX": r[2], "maxY": r[3]} for r in rows]


def as_tuples(lines: list[Line]) -> list[tuple]:
    """Rounded (start, end) tuples for float-safe comparison."""
    return [
        ((round(l.start[0], 6), round(l.start[1], 6)), (round(l.end[0], 6), round(l.end[1], 6)))
        for l in lines
    ]


def expected(lines: list[tuple]) -> list[tuple]:
    return sorted(((float(a[0]), float(a[1])), (float(b[0]), float(b[1]))) for a, b in lines)


@pytest.fixture
def side_by_side() -> list[dict[str, float]]:
    return as_dicts(TWO_SIDE_BY_SIDE)


@pytest.fixture
def t_junction() -> list[dict[str, float]]:
    return as_dicts(THREE_T_JUNCTION)
