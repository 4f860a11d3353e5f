from __future__ import annotations
import pygame

from startlights.api.snapshot import GameState, Snapshot
from startlights.results.ledger import numbered
from startlights.render.shapes import draw_text, draw_text_centered

BG_COLOR = (12, 14, 18)
HUD_COLOR = (230, 230, 230)
DIM_COLOR = (140, 140, 150)
LIGHT_ON = (220, 38, 38)
LIGHT_ON_RIM = (153, 27, 27)
LIGHT_OFF = (31, 41, 55)
LIGHT_OFF_RIM = (55, 65, 81)
GO_COLOR = (50, 220, 80)
WAIT_COLOR = (230, 190, 40)
JUMP_COLOR = (240, 70, 70)

LIGHT_RADIUS = 40
LIGHT_GAP = 24

STATUS = {
    GameState.Idle: ("Ready to Start", HUD_COLOR),
    GameState.Countdown: ("Get Ready...", HUD_COLOR),
    GameState.Waiting: ("Wait for it...", WAIT_COLOR),
    GameState.Reacting: ("GO!", GO_COLOR),
}


def draw_gantry(surface: pygame.Surface, lit: int, count: int, center_y: int):
    w = surface.get_width()
    span = count * LIGHT_RADIUS * 2 + (count - 1) * LIGHT_GAP
    x = (w - span) // 2 + LIGHT_RADIUS
    for i in range(1, count + 1):
        on = lit >= i
        pygame.draw.circle(surface, LIGHT_ON if on else LIGHT_OFF, (x, center_y), LIGHT_RADIUS)
        pygame.draw.circle(surface, LIGHT_ON_RIM if on else LIGHT_OFF_RIM, (x, center_y), LIGHT_RADIUS, 4)
        x += LIGHT_RADIUS * 2 + LIGHT_GAP


def draw_calibrating(surface: pygame.Surface):
    surface.fill(BG_COLOR)
    w, h = surface.get_size()
    draw_text_centered(surface, "Calibrating system...", (w // 2, h // 2), HUD_COLOR, size=36)


def draw_panel(surface: pygame.Surface, snap: Snapshot, light_count: int):
    w, h = surface.get_size()
    mid = w // 2

    draw_text_centered(surface, "Reaction Trainer", (mid, 40), HUD_COLOR, size=48)
    draw_text_centered(surface, f"System latency compensation: {snap.latency_compensation_ms:.1f}ms",
                       (mid, 80), DIM_COLOR, size=20)

    draw_gantry(surface, snap.progress, light_count, center_y=180)
    _draw_status(surface, snap, mid, 280)
    _draw_stats(surface, snap, 40, 400)


def _draw_status(surface, snap: Snapshot, x: int, y: int):
    if snap.state == GameState.Result:
        if snap.jump_start:
            draw_text_centered(surface, "JUMP START!", (x, y), JUMP_COLOR, size=56)
            draw_text_centered(surface, "You reacted before the lights went out", (x, y + 44), DIM_COLOR)
        else:
            draw_text_centered(surface, f"{snap.reaction_time_ms}ms", (x, y), HUD_COLOR, size=64)
            if snap.hint:
                draw_text_centered(surface, snap.hint, (x, y + 44), DIM_COLOR)
        draw_text_centered(surface, "Click or press SPACE to go again", (x, y + 80), DIM_COLOR, size=20)
        return

    text, color = STATUS[snap.state]
    draw_text_centered(surface, text, (x, y), color, size=44)
    if snap.state == GameState.Idle:
        draw_text_centered(surface, "Click anywhere or press SPACE", (x, y + 40), DIM_COLOR)


def _draw_stats(surface, snap: Snapshot, x: int, y: int):
    best = f"{snap.best_ms}ms" if snap.best_ms is not None else "--"
    avg = f"{round(snap.average_ms)}ms" if snap.average_ms is not None else "--"
    draw_text(surface, f"Best: {best}    Average: {avg}", (x, y), HUD_COLOR, size=28)

    if not snap.history:
        draw_text(surface, "No attempts yet", (x, y + 40), DIM_COLOR)
        return

    for i, (number, attempt) in enumerate(numbered(snap.history)):
        label = "Jump start" if attempt.is_jump_start else f"{attempt.elapsed_ms}ms"
        color = JUMP_COLOR if attempt.is_jump_start else HUD_COLOR
        row = f"#{number}  {label}  {attempt.recorded_at:%H:%M:%S}"
        # two columns of five
        col, line = divmod(i, 5)
        draw_text(surface, row, (x + col * 320, y + 40 + line * 28), color, size=22)
