# dinorun/game/controls.py
from __future__ import annotations
from enum import Enum
from typing import List, Set
import pygame

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)
DUCK_KEYS = (pygame.K_DOWN, pygame.K_s)


class Intent(Enum):
    JUMP = "jump"
    DUCK_ON = "duck_on"
    DUCK_OFF = "duck_off"
    QUIT = "quit"


class InputAdapter:
    """
    pygame events -> intents.
    Jump is edge-triggered and duck is level-triggered; both ignore OS key-repeat
    by remembering which keys are currently held.
    """
    def __init__(self):
        self._held: Set[int] = set()

    def translate(self, event) -> List[Intent]:
        if event.type == pygame.QUIT:
            return [Intent.QUIT]

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return [Intent.QUIT]
            if event.key in JUMP_KEYS:
                fresh = not any(k in self._held for k in JUMP_KEYS)
                self._held.add(event.key)
                return [Intent.JUMP] if fresh else []
            if event.key in DUCK_KEYS:
                fresh = not any(k in self._held for k in DUCK_KEYS)
                self._held.add(event.key)
                return [Intent.DUCK_ON] if fresh else []
            return []

        if event.type == pygame.KEYUP:
            self._held.discard(event.key)
            if event.key in DUCK_KEYS and not any(k in self._held for k in DUCK_KEYS):
                return [Intent.DUCK_OFF]
            return []

        # clicks and taps don't auto-repeat, every press is a jump
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            return [Intent.JUMP]

        return []


def apply_intents(world, intents: List[Intent]) -> bool:
    """Apply intents to the world right away. Returns False once a quit was requested."""
    running = True
    for intent in intents:
        if intent is Intent.JUMP:
            world.handle_jump()
        elif intent is Intent.DUCK_ON:
            world.set_ducking(True)
        elif intent is Intent.DUCK_OFF:
            world.set_ducking(False)
        elif intent is Intent.QUIT:
            running = False
    return running
