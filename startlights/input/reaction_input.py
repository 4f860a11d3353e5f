from __future__ import annotations
from typing import Iterable, Set

import pygame


def key_for_name(name: str) -> int:
    """pygame key constant for a name like "space", "return" or "a"."""
    name = name.strip()
    code = getattr(pygame, f"K_{name}", None)
    if code is None:
        code = getattr(pygame, f"K_{name.upper()}", None)
    if code is None:
        raise ValueError(f"Unknown key name: {name!r}")
    return code


class ReactionInput:
    """
    Maps raw pygame events to the trainer's single reaction signal:
    - any mouse button press
    - any of the configured keys
    Escape and window close are quit requests, never reactions.
    """

    def __init__(self, key_names: Iterable[str] = ("space",)):
        self.keys: Set[int] = {key_for_name(n) for n in key_names}
        self.keys.discard(pygame.K_ESCAPE)

    def is_reaction(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN:
            return True
        if event.type == pygame.KEYDOWN:
            return event.key in self.keys
        return False

    def is_quit(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            return True
        return event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
