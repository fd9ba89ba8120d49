from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .pieces import Mask, Piece


EMPTY = 0


@dataclass
class CommitResult:
    rows_touched: List[int] = field(default_factory=list)
    game_over: bool = False


class GameGrid:
    """Fixed-size board of color tokens.

    The grid uses 0 for empty cells and the committing piece's color token for
    filled cells. Row 0 is the top of the visible board; rows above it
    (negative indices) exist only for falling pieces and are never stored.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, row: int, col: int) -> bool:
        if row < 0:
            return False
        return self.grid[row, col] != EMPTY

    def collides(self, piece: Piece, dx: int = 0, dy: int = 0, mask: Optional[Mask] = None) -> bool:
        """True if ``mask`` (default: the piece's current one) hits a wall, the floor or a block.

        Sub-cells above the board are ignored so pieces can float in from the top.
        """
        if mask is None:
            mask = piece.mask()
        rows, cols = np.nonzero(mask)
        for r, c in zip(rows, cols):
            x = piece.x + int(c) + dx
            y = piece.y + int(r) + dy
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y < 0:
                continue
            if self.grid[y, x] != EMPTY:
                return True
        return False

    def commit(self, piece: Piece) -> CommitResult:
        """Write the piece's color into the board.

        Sub-cells above the visible board cannot be stored; any such cell
        reports game over while the visible cells are still written.
        """
        result = CommitResult()
        for x, y in piece.cells():
            if y < 0:
                result.game_over = True
                continue
            self.grid[y, x] = piece.color
            if y not in result.rows_touched:
                result.rows_touched.append(y)
        return result

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_full_lines(self) -> int:
        """Remove complete rows top to bottom, shifting everything above down by one."""
        cleared = 0
        for row in range(self.height):
            if np.all(self.grid[row] != EMPTY):
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0].fill(EMPTY)
                cleared += 1
        return cleared

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
