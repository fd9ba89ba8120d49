from __future__ import annotations

from falling_blocks.game import BlockGame, Piece, TetrominoType


def set_active(game: BlockGame, kind: TetrominoType, x: int = 3, y: int = -2, rotation: int = 0) -> Piece:
    """Replace the active piece with a known one."""
    piece = Piece(kind=kind, rotation=rotation, x=x, y=y)
    game.current_piece = piece
    return piece


def fill_row(game: BlockGame, row: int, except_cols: tuple[int, ...] = (), token: int = 1) -> None:
    for col in range(game.grid.width):
        if col not in except_cols:
            game.grid.grid[row, col] = token
