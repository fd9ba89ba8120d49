from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import PIECE_COLORS, Action, BlockGame, GameConfig, TetrominoType

# Every action except pause; an agent has no use for freezing gravity.
AGENT_ACTIONS: Tuple[Action, ...] = tuple(a for a in Action if a != Action.PAUSE)


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        # Reward shaping parameters
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        height, width = self.game.grid.height, self.game.grid.width
        kinds = len(TetrominoType)

        # Observation space: board with falling piece overlaid as negative tokens
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-kinds, high=kinds, shape=(height, width), dtype=np.int8),
                "next": spaces.Discrete(kinds + 1),
                "hold": spaces.Discrete(kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        hold = self.game.hold_piece
        next_kind = self.game.next_piece
        return {
            "board": self.game.get_state().astype(np.int8),
            "next": 0 if next_kind is None else int(next_kind),
            "hold": 0 if hold is None else int(hold.kind),
            "can_hold": int(self.game.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines": self.game.lines,
            "max_height": self.game.grid.get_max_height(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        game_action = AGENT_ACTIONS[int(action)]
        _, score_delta, terminated, _ = self.game.step(game_action)
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward_components: Dict[str, float] = {
            "score": float(score_delta),
            "step": self.step_penalty,
        }
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["lock"] = self.game.last_lock
        self._last_obs = obs
        return obs, reward, bool(terminated), bool(truncated), info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering delegated to the pygame harness
            return None
        board = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                token = abs(int(board[y, x]))
                color = _hex_to_rgb(PIECE_COLORS[token]) if token else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
