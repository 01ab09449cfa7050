"""Per-location, per-direction action weights guiding the planner."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from fppmapf.action import Action
from fppmapf.environment import Environment

logger = logging.getLogger(__name__)

_N_SLOTS = 5


class GuidanceMapError(ValueError):
    """Raised when a weights file is unreadable or invalid."""


class GuidanceMap:
    """Five weights per location: east, south, west, north, stay."""

    def __init__(self, env: Environment):
        self.env = env
        self.weights: list[float] = [1.0] * (env.rows * env.cols * _N_SLOTS)

    def load(self, weights_path: str) -> str:
        """Load weights from a JSON array; returns a suffix naming the weights."""
        logger.info("map_weights_path:%s", weights_path)
        self.weights = [1.0] * (self.env.rows * self.env.cols * _N_SLOTS)
        if not weights_path:
            logger.info("all one guidance")
            return "all_one"
        try:
            with open(weights_path, encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise GuidanceMapError(f"Failed to load {weights_path}: {exc}") from exc
        if not isinstance(raw, list) or len(raw) != len(self.weights):
            raise GuidanceMapError("map weights size mismatch")
        weights = []
        for value in raw:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise GuidanceMapError(f"map weight is not a number: {value!r}")
            if value < 1:
                raise GuidanceMapError(f"map weights is less than 1: {value}")
            weights.append(float(value))
        self.weights = weights
        return Path(weights_path).stem

    def get_weight(self, location: int, orientation: int, action: Action) -> float:
        """Weight of performing ``action`` at a location facing ``orientation``."""
        if action is not Action.FW:
            return self.weights[location * _N_SLOTS + 4]
        if not 0 <= orientation < 4:
            raise ValueError(f"invalid orientation: {orientation}")
        return self.weights[location * _N_SLOTS + orientation]