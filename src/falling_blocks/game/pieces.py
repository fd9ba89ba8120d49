from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Mask = np.ndarray

SPAWN_X = 3
SPAWN_Y = -2
ROTATIONS = 4


def _masks(*states: str) -> Tuple[Mask, ...]:
    """Build read-only 4x4 masks from 16-character row-major strings."""
    out = []
    for state in states:
        mask = np.array([ch == "#" for ch in state], dtype=np.bool_).reshape(4, 4)
        mask.setflags(write=False)
        out.append(mask)
    return tuple(out)


PIECE_MASKS: Dict[TetrominoType, Tuple[Mask, ...]] = {
    TetrominoType.I: _masks(
        "....####........",
        "..#...#...#...#.",
        "........####....",
        ".#...#...#...#..",
    ),
    TetrominoType.J: _masks(
        "#...###.........",
        ".##..#...#......",
        "....###...#.....",
        ".#...#..##......",
    ),
    TetrominoType.L: _masks(
        "..#.###.........",
        ".#...#...##.....",
        "....###.#.......",
        "##...#...#......",
    ),
    TetrominoType.O: _masks(
        ".##..##.........",
        ".##..##.........",
        ".##..##.........",
        ".##..##.........",
    ),
    TetrominoType.S: _masks(
        ".##.##..........",
        ".#...##...#.....",
        ".....##.##......",
        "#...##...#......",
    ),
    TetrominoType.T: _masks(
        ".#..###.........",
        ".#...##..#......",
        "....###..#......",
        ".#..##...#......",
    ),
    TetrominoType.Z: _masks(
        "##...##.........",
        "..#..##..#......",
        "....##...##.....",
        ".#..##..#.......",
    ),
}

# Display colors keyed by the color token a piece writes into the board.
PIECE_COLORS: Dict[int, str] = {
    int(TetrominoType.I): "#FF0D72",
    int(TetrominoType.J): "#0DC2FF",
    int(TetrominoType.L): "#0DFF72",
    int(TetrominoType.O): "#F538FF",
    int(TetrominoType.S): "#FF8E0D",
    int(TetrominoType.T): "#FFE138",
    int(TetrominoType.Z): "#3877FF",
}


def color_token(kind: TetrominoType) -> int:
    return int(kind)


def preview_mask(kind: TetrominoType) -> Mask:
    """Rotation-0 mask, used for the next and hold previews."""
    return PIECE_MASKS[kind][0]


@dataclass
class Piece:
    """A live piece: catalog reference plus rotation and board anchor.

    The anchor is the top-left corner of the 4x4 mask; ``y`` may be negative
    while the piece is still above the visible board.
    """

    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = SPAWN_X
    y: int = SPAWN_Y
    color: int = 0

    def __post_init__(self) -> None:
        self.kind = TetrominoType(self.kind)
        self.rotation %= ROTATIONS
        if not self.color:
            self.color = color_token(self.kind)

    @classmethod
    def spawn(cls, kind: TetrominoType, color: int | None = None, x: int = SPAWN_X, y: int = SPAWN_Y) -> "Piece":
        return cls(kind=kind, rotation=0, x=x, y=y, color=color or color_token(kind))

    def mask(self, rotation: int | None = None) -> Mask:
        if rotation is None:
            rotation = self.rotation
        return PIECE_MASKS[self.kind][rotation % ROTATIONS]

    def next_rotation(self) -> int:
        return (self.rotation + 1) % ROTATIONS

    def cells_at(self, origin_x: int, origin_y: int, rotation: int | None = None) -> List[Tuple[int, int]]:
        """Absolute (x, y) of every occupied sub-cell, in row-major mask order."""
        m = self.mask(rotation)
        cells: List[Tuple[int, int]] = []
        for r in range(4):
            for c in range(4):
                if m[r, c]:
                    cells.append((origin_x + c, origin_y + r))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)
