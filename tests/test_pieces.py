# tests/test_pieces.py
from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game.pieces import (
    PIECE_COLORS,
    PIECE_MASKS,
    SPAWN_X,
    SPAWN_Y,
    Piece,
    TetrominoType,
    preview_mask,
)


def test_catalog_has_seven_kinds_with_four_states_of_four_cells() -> None:
    assert len(PIECE_MASKS) == 7
    for kind, states in PIECE_MASKS.items():
        assert len(states) == 4, kind
        for mask in states:
            assert mask.shape == (4, 4)
            assert int(np.count_nonzero(mask)) == 4


def test_catalog_masks_are_read_only() -> None:
    with pytest.raises(ValueError):
        PIECE_MASKS[TetrominoType.T][0][0, 0] = True


def test_i_piece_spawn_state_is_second_row() -> None:
    mask = PIECE_MASKS[TetrominoType.I][0]
    assert mask[1].all()
    assert not mask[0].any() and not mask[2].any() and not mask[3].any()


def test_o_piece_rotations_are_identical() -> None:
    states = PIECE_MASKS[TetrominoType.O]
    for mask in states[1:]:
        assert np.array_equal(mask, states[0])


def test_every_kind_has_a_color() -> None:
    assert set(PIECE_COLORS) == {int(k) for k in TetrominoType}


def test_spawn_uses_default_anchor_and_kind_color() -> None:
    piece = Piece.spawn(TetrominoType.L)
    assert (piece.x, piece.y, piece.rotation) == (SPAWN_X, SPAWN_Y, 0)
    assert (SPAWN_X, SPAWN_Y) == (3, -2)
    assert piece.color == int(TetrominoType.L)


def test_rotation_index_wraps() -> None:
    piece = Piece(TetrominoType.T, rotation=3)
    assert piece.next_rotation() == 0
    assert Piece(TetrominoType.T, rotation=5).rotation == 1


def test_cells_are_absolute_and_row_major() -> None:
    piece = Piece.spawn(TetrominoType.O)
    assert piece.cells() == [(4, -2), (5, -2), (4, -1), (5, -1)]


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        Piece(kind=9)  # type: ignore[arg-type]


def test_preview_uses_rotation_zero() -> None:
    assert preview_mask(TetrominoType.S) is PIECE_MASKS[TetrominoType.S][0]
