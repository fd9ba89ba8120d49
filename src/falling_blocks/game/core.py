from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import SPAWN_X, SPAWN_Y, Piece, TetrominoType
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5
    NONE = 6
    PAUSE = 7


class MoveOutcome(Enum):
    MOVED = "moved"
    LOCKED = "locked"
    LOCKED_GAME_OVER = "locked_game_over"
    REJECTED = "rejected"


class Phase(Enum):
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_x: int = SPAWN_X
    spawn_y: int = SPAWN_Y

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class HeldPiece:
    kind: TetrominoType
    color: int


@dataclass(frozen=True)
class LockResult:
    lines_cleared: int = 0
    score_delta: int = 0
    leveled_up: bool = False
    game_over: bool = False


class BlockGame:
    """One game session: board, active/next/hold pieces and progression.

    Every operation is synchronous and returns once the state is updated; a
    presentation layer reads the accessors afterwards and drives ``tick``.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[TetrominoType] = None
        self.hold_piece: Optional[HeldPiece] = None
        self.last_lock: Optional[LockResult] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval = self.rules.drop_interval(self.level)
        self.can_hold = True
        self.hold_piece = None
        self.next_piece = None
        self.last_lock = None
        self.phase = Phase.ACTIVE
        self.paused = False
        self._drop_elapsed = 0
        self.spawn()

    # -- accessors ---------------------------------------------------------

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def accepts_input(self) -> bool:
        return self.phase is Phase.ACTIVE and not self.paused and self.current_piece is not None

    def board(self) -> np.ndarray:
        return self.grid.clone_state()

    # -- spawning ----------------------------------------------------------

    def _random_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def _new_piece(self, kind: TetrominoType, color: Optional[int] = None) -> Piece:
        return Piece.spawn(kind, color, x=self.config.spawn_x, y=self.config.spawn_y)

    def spawn(self) -> Piece:
        if self.next_piece is None:
            self.next_piece = self._random_kind()
        self.current_piece = self._new_piece(self.next_piece)
        self.next_piece = self._random_kind()
        self.can_hold = True
        self._drop_elapsed = 0
        logger.debug("spawned %s, next %s", self.current_piece.kind.name, self.next_piece.name)
        return self.current_piece

    # -- movement ----------------------------------------------------------

    def _shift(self, dx: int) -> bool:
        if not self.accepts_input:
            return False
        piece = self.current_piece
        if self.grid.collides(piece, dx, 0):
            return False
        piece.x += dx
        self._drop_elapsed = 0
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def rotate(self) -> bool:
        if not self.accepts_input:
            return False
        piece = self.current_piece
        rotation = piece.next_rotation()
        candidate = piece.mask(rotation)
        kick = 0
        if self.grid.collides(piece, 0, 0, candidate):
            # Single horizontal kick away from the nearer wall
            kick = -1 if piece.x > self.grid.width / 2 else 1
        if self.grid.collides(piece, kick, 0, candidate):
            return False
        piece.x += kick
        piece.rotation = rotation
        self._drop_elapsed = 0
        return True

    def move_down(self) -> MoveOutcome:
        if not self.accepts_input:
            return MoveOutcome.REJECTED
        piece = self.current_piece
        if not self.grid.collides(piece, 0, 1):
            piece.y += 1
            return MoveOutcome.MOVED
        return self._lock_and_spawn()

    def hard_drop(self) -> MoveOutcome:
        if not self.accepts_input:
            return MoveOutcome.REJECTED
        piece = self.current_piece
        while not self.grid.collides(piece, 0, 1):
            piece.y += 1
        return self._lock_and_spawn()

    def tick(self, elapsed: Optional[int] = None) -> Optional[MoveOutcome]:
        """Gravity step driven by the external scheduler.

        Without ``elapsed`` the caller has already waited one drop interval.
        With it, time accumulates until it exceeds the current interval.
        """
        if not self.accepts_input:
            return MoveOutcome.REJECTED
        if elapsed is not None:
            self._drop_elapsed += elapsed
            if self._drop_elapsed <= self.drop_interval:
                return None
        self._drop_elapsed = 0
        return self.move_down()

    # -- locking -----------------------------------------------------------

    def _lock_piece(self) -> LockResult:
        assert self.current_piece is not None
        commit = self.grid.commit(self.current_piece)
        if commit.game_over:
            self.phase = Phase.GAME_OVER
            self.current_piece = None
            logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)
            return LockResult(game_over=True)

        cleared = self.grid.clear_full_lines()
        delta = self.rules.score_for_lines(cleared, self.level)
        self.score += delta
        self.lines += cleared
        leveled_up = False
        if cleared > 0 and self.rules.should_level_up(self.lines, self.level):
            self.level += 1
            self.drop_interval = self.rules.drop_interval(self.level)
            leveled_up = True
            logger.info("level %d reached, drop interval %d", self.level, self.drop_interval)
        logger.debug("locked rows %s, cleared %d, +%d", commit.rows_touched, cleared, delta)
        return LockResult(lines_cleared=cleared, score_delta=delta, leveled_up=leveled_up)

    def _lock_and_spawn(self) -> MoveOutcome:
        self.last_lock = self._lock_piece()
        if self.last_lock.game_over:
            return MoveOutcome.LOCKED_GAME_OVER
        self.spawn()
        return MoveOutcome.LOCKED

    # -- hold / pause ------------------------------------------------------

    def hold(self) -> bool:
        if not self.accepts_input or not self.can_hold:
            return False
        piece = self.current_piece
        previous = self.hold_piece
        self.hold_piece = HeldPiece(piece.kind, piece.color)
        if previous is None:
            self.spawn()
        else:
            self.current_piece = self._new_piece(previous.kind, previous.color)
            self._drop_elapsed = 0
        self.can_hold = False
        logger.debug("held %s", self.hold_piece.kind.name)
        return True

    def toggle_pause(self) -> bool:
        if self.game_over:
            return False
        self.paused = not self.paused
        if not self.paused:
            self._drop_elapsed = 0
        return True

    # -- stepping ----------------------------------------------------------

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        score_before = self.score
        action = Action(action)
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.move_down()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.HOLD:
            self.hold()
        elif action == Action.PAUSE:
            self.toggle_pause()
        elif action == Action.NONE:
            pass

        info = {
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "paused": self.paused,
        }
        return self.get_state(), self.score - score_before, self.game_over, info

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current_piece.color
        return state

    def snapshot(self) -> Dict[str, Any]:
        piece = self.current_piece
        return {
            "board": self.board(),
            "active": None
            if piece is None
            else {"kind": piece.kind, "rotation": piece.rotation, "x": piece.x, "y": piece.y, "color": piece.color},
            "next": self.next_piece,
            "hold": self.hold_piece,
            "can_hold": self.can_hold,
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "drop_interval": self.drop_interval,
            "paused": self.paused,
            "game_over": self.game_over,
        }
