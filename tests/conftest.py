# tests/conftest.py
from __future__ import annotations

import pytest

from falling_blocks.game import BlockGame, GameConfig


@pytest.fixture
def game() -> BlockGame:
    return BlockGame(GameConfig(random_seed=7))
