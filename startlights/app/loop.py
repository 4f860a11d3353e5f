from __future__ import annotations
import logging

import pygame

from startlights.api.config import TrainerConfig
from startlights.app.context import Context
from startlights.app.machine import build_machine
from startlights.input.reaction_input import ReactionInput
from startlights.render.panel import BG_COLOR, draw_calibrating, draw_panel
from startlights.timing.scheduler import FrameScheduler, monotonic_ms

logger = logging.getLogger(__name__)


def run_trainer(cfg: TrainerConfig):
    pygame.init()
    pygame.display.set_caption("Reaction Trainer - start lights")
    screen = pygame.display.set_mode(cfg.screen_size)
    clock = pygame.time.Clock()

    scheduler = FrameScheduler(clock=monotonic_ms)
    machine = build_machine(cfg, scheduler=scheduler)
    input_layer = ReactionInput(cfg.reaction_keys)

    ctx = Context(
        screen=screen,
        clock=clock,
        cfg=cfg,
        machine=machine,
        scheduler=scheduler,
        screen_size=cfg.screen_size,
    )

    # show the calibrating screen before blocking on the measurement
    draw_calibrating(ctx.screen)
    pygame.display.flip()
    machine.calibrate()
    pygame.event.clear()

    running = True
    try:
        while running:
            ctx.clock.tick(cfg.fps)

            # input before timers: a press queued last frame happened before anything due now
            for event in pygame.event.get():
                if input_layer.is_quit(event):
                    running = False
                elif input_layer.is_reaction(event):
                    machine.react()

            ctx.scheduler.tick()

            ctx.screen.fill(BG_COLOR)
            draw_panel(ctx.screen, machine.snapshot, cfg.light_count)
            pygame.display.flip()

    finally:
        machine.reset()
        scheduler.close()
        pygame.quit()
