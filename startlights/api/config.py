from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from startlights import const


@dataclass
class TrainerConfig:
    screen_size: Tuple[int, int] = (const.SCREEN_W, const.SCREEN_H)
    fps: int = const.FPS
    light_count: int = const.LIGHT_COUNT
    light_interval_ms: float = const.LIGHT_INTERVAL_MS
    min_delay_ms: float = const.MIN_DELAY_MS
    max_delay_ms: float = const.MAX_DELAY_MS
    calibration_trials: int = const.CALIBRATION_TRIALS
    latency_buffer_ms: float = const.LATENCY_BUFFER_MS
    history_size: int = const.HISTORY_SIZE
    best_key: str = const.BEST_KEY
    data_dir: Optional[Path] = None
    seed: Optional[int] = None
    # key names as understood by pygame.key.key_code, e.g. "space", "return"
    reaction_keys: Tuple[str, ...] = field(default_factory=lambda: ("space",))

    def __post_init__(self):
        if self.light_count <= 0:
            raise ValueError("light_count must be positive")
        if self.light_interval_ms <= 0:
            raise ValueError("light_interval_ms must be positive")
        if not 0 <= self.min_delay_ms < self.max_delay_ms:
            raise ValueError(
                f"need 0 <= min_delay_ms < max_delay_ms, got {self.min_delay_ms}..{self.max_delay_ms}")
        if self.calibration_trials < 10:
            raise ValueError("calibration_trials must be at least 10")
        if self.latency_buffer_ms < 0:
            raise ValueError("latency_buffer_ms must not be negative")
        if self.history_size <= 0:
            raise ValueError("history_size must be positive")
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if self.data_dir is not None:
            self.data_dir = Path(self.data_dir)
        self.screen_size = tuple(self.screen_size)
        self.reaction_keys = tuple(self.reaction_keys)
