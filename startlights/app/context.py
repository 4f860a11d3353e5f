from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import pygame

from startlights.api.config import TrainerConfig
from startlights.app.machine import GameStateMachine
from startlights.timing.scheduler import FrameScheduler


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: TrainerConfig
    machine: GameStateMachine
    scheduler: FrameScheduler
    screen_size: Tuple[int, int]
