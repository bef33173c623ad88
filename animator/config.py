"""Player configuration.

Defaults match the stock player. Hosts may override any value through
environment variables, e.g. ``ANIMATOR_SPEED_STEPS="0.25,0.5,1,2"``. Values
that fail to parse are ignored and the default is kept.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENV_PREFIX = "ANIMATOR_"


@dataclass(frozen=True)
class PlayerConfig:
    fallback_fps: float = 60.0  # used when neither asset nor decoder declares one
    min_tick_rate: float = 60.0  # ticks per second never drop below this
    min_speed: float = 0.1
    max_speed: float = 4.0
    speed_steps: tuple[float, ...] = (0.5, 1.0, 1.5, 2.0)
    repeat_delay_ms: int = 300
    repeat_interval_ms: int = 120

    def clamp_speed(self, speed: float) -> float:
        return max(self.min_speed, min(self.max_speed, speed))

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "PlayerConfig":
        env = os.environ if environ is None else environ
        config = cls()
        overrides = {}
        for name, parse in (
            ("fallback_fps", _positive_float),
            ("min_tick_rate", _positive_float),
            ("speed_steps", _speed_steps),
            ("repeat_delay_ms", _positive_int),
            ("repeat_interval_ms", _positive_int),
        ):
            value = _read(env, name, parse)
            if value is not None:
                overrides[name] = value
        return replace(config, **overrides)


def _read(env, name: str, parse: Callable[[str], T]) -> Optional[T]:
    key = ENV_PREFIX + name.upper()
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return parse(raw)
    except ValueError:
        logger.warning("ignoring invalid %s=%r", key, raw)
        return None


def _positive_float(raw: str) -> float:
    value = float(raw)
    if not value > 0:
        raise ValueError(raw)
    return value


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise ValueError(raw)
    return value


def _speed_steps(raw: str) -> tuple[float, ...]:
    steps = tuple(_positive_float(part) for part in raw.split(",") if part.strip())
    if not steps:
        raise ValueError(raw)
    return steps


__all__ = ["PlayerConfig"]
