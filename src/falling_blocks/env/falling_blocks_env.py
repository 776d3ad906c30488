from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, TetrominoType


class FallingBlocksEnv(gym.Env):
    """Discrete-step falling-block environment.

    Each step applies one action, drops the piece one row and settles any line
    clear immediately, so the agent never sees a half-finished animation.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = -10.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = FallingBlocksGame(config)
        self.render_mode = render_mode
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,            # reward per line cleared
            "lines_sq": 0.5,         # extra for multiple lines (quadratic)
            "holes": 0.05,           # penalize holes created
            "height": 0.02,          # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        rows, cols = self.game.board.rows, self.game.board.cols
        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = dict(self.game.get_info())
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        lines_before = self.game.lines_cleared_total
        holes_before = self.game.board.count_holes()
        height_before = self.game.board.get_max_height()

        obs, terminated, _ = self.game.step(Action(int(action)))
        self._steps += 1

        lines = self.game.lines_cleared_total - lines_before
        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(lines),
            "lines_sq": self.reward_weights["lines_sq"] * float(lines * lines),
            "holes": -self.reward_weights["holes"] * float(
                max(0, self.game.board.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, self.game.board.get_max_height() - height_before)),
            "step": self.step_penalty,
        }
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_components"] = reward_components
        return obs, float(sum(reward_components.values())), bool(terminated), truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v > 0:
                    color = (70, 200, 120)
                elif v < 0:
                    color = (230, 230, 90)
                else:
                    color = (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
