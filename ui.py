#!/usr/bin/env python3
"""Pointer-driven buttons for the evolution inputs."""

from __future__ import annotations

from dataclasses import dataclass, field

import pygame

from evolution import InputKind


BUTTON_IDLE = "idle"
BUTTON_HOVERED = "hovered"
BUTTON_PRESSED = "pressed"
BUTTON_RELEASED = "released"

TINT_IDLE = (204, 204, 204)
TINT_ACTIVE = (255, 255, 255)
TINT_PRESSED = (102, 102, 102)


@dataclass
class Button:
    """One fixed rectangle that turns pointer samples into one-frame clicks.

    A press only counts when the pointer goes down while over the button;
    the click fires on the frame the pointer is released over it again.
    Releasing elsewhere cancels the press.
    """

    kind: InputKind
    rect: pygame.Rect
    label: str = ""
    enabled: bool = True
    state: str = BUTTON_IDLE
    # Starts as held so a pointer already down at creation is not a fresh press.
    _pointer_was_down: bool = field(default=True, repr=False)

    def __post_init__(self) -> None:
        self.rect = pygame.Rect(self.rect)
        if not self.label:
            self.label = self.kind.name.title()

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self.enabled:
            return
        self.enabled = enabled
        self.state = BUTTON_IDLE
        self._pointer_was_down = True

    def update(self, pointer_pos: tuple[float, float], pointer_down: bool) -> bool:
        """Advance one frame and return whether the button was clicked."""
        if not self.enabled:
            return False

        fresh_press = pointer_down and not self._pointer_was_down
        self._pointer_was_down = pointer_down
        inside = self.rect.collidepoint(int(pointer_pos[0]), int(pointer_pos[1]))

        if self.state == BUTTON_PRESSED:
            if pointer_down:
                new_state = BUTTON_PRESSED
            elif inside:
                new_state = BUTTON_RELEASED
            else:
                new_state = BUTTON_IDLE
        elif inside:
            new_state = BUTTON_PRESSED if fresh_press else BUTTON_HOVERED
        else:
            new_state = BUTTON_IDLE

        self.state = new_state
        return new_state == BUTTON_RELEASED

    @property
    def tint(self) -> tuple[int, int, int]:
        if self.state == BUTTON_PRESSED:
            return TINT_PRESSED
        if self.state in (BUTTON_HOVERED, BUTTON_RELEASED):
            return TINT_ACTIVE
        return TINT_IDLE
