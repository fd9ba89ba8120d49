# tests/test_env.py
from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import AGENT_ACTIONS, FallingBlocksEnv
from falling_blocks.game import Action, TetrominoType
from falling_blocks.rl.random_agent import run_random
from helpers import fill_row, set_active


def test_registered_env_reset_and_step() -> None:
    env = gym.make("FallingBlocks-20x10-v0")
    obs, info = env.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    for action in range(env.action_space.n):
        obs, reward, terminated, truncated, info = env.step(action)
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
    env.close()


def test_pause_is_not_an_agent_action() -> None:
    assert Action.PAUSE not in AGENT_ACTIONS
    assert len(AGENT_ACTIONS) == 7


def test_reward_is_score_delta() -> None:
    env = FallingBlocksEnv()
    env.reset(seed=1)
    game = env.game
    fill_row(game, 19, except_cols=(5,))
    set_active(game, TetrominoType.I, x=3, y=-2, rotation=1)
    _, reward, terminated, truncated, info = env.step(AGENT_ACTIONS.index(Action.HARD_DROP))
    assert reward == 100.0
    assert info["lines"] == 1
    assert info["lock"].lines_cleared == 1
    assert not terminated and not truncated


def test_episode_terminates_on_game_over() -> None:
    env = FallingBlocksEnv(terminal_penalty=-5.0)
    env.reset(seed=2)
    for row in range(env.game.grid.height):
        fill_row(env.game, row, except_cols=(9,))
    _, reward, terminated, _, info = env.step(AGENT_ACTIONS.index(Action.HARD_DROP))
    assert terminated
    assert reward == -5.0
    assert info["reward_components"]["terminal"] == -5.0


def test_truncation_after_max_steps() -> None:
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=0)
    noop = AGENT_ACTIONS.index(Action.NONE)
    results = [env.step(noop)[3] for _ in range(3)]
    assert results == [False, False, True]


def test_hold_shows_up_in_observation() -> None:
    env = FallingBlocksEnv()
    obs, _ = env.reset(seed=4)
    assert obs["hold"] == 0 and obs["can_hold"] == 1
    kind = env.game.current_piece.kind
    obs, *_ = env.step(AGENT_ACTIONS.index(Action.HOLD))
    assert obs["hold"] == int(kind)
    assert obs["can_hold"] == 0


def test_rgb_render() -> None:
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    env.step(AGENT_ACTIONS.index(Action.HARD_DROP))
    img = env.render()
    assert img is not None
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8
    assert img.any()


def test_random_agent_runs() -> None:
    assert run_random(steps=300, seed=0) >= 0.0
