"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board storage, collision checks and line clearing
- Piece: Live tetromino with rotation index and board anchor
- TetrominoType: Enum of the seven piece kinds
- ScoringRules: Line-clear scores and level/speed progression
- BlockGame: Game session state machine (spawn, move, lock, hold, pause)
"""

from .grid import CommitResult, GameGrid
from .pieces import PIECE_COLORS, PIECE_MASKS, Piece, TetrominoType, preview_mask
from .rules import ScoringRules
from .core import Action, BlockGame, GameConfig, HeldPiece, LockResult, MoveOutcome, Phase

__all__ = [
    "GameGrid",
    "CommitResult",
    "Piece",
    "TetrominoType",
    "PIECE_MASKS",
    "PIECE_COLORS",
    "preview_mask",
    "ScoringRules",
    "BlockGame",
    "GameConfig",
    "HeldPiece",
    "LockResult",
    "MoveOutcome",
    "Phase",
    "Action",
]
