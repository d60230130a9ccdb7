#!/usr/bin/env python3
"""World controller: resting state, active transition, and the input buttons."""

from __future__ import annotations

from typing import Any

import pygame

from cues import CueScheduler
from evolution import (
    INITIAL_STATE,
    EvolutionError,
    EvolutionState,
    InputKind,
    is_terminal,
    next_state,
    valid_inputs,
)
from transition import DEFAULT_TIMINGS, Transition, TransitionTimings
from ui import Button


WORLD_WIDTH = 2480
WORLD_HEIGHT = 3508

HISTORY_LIMIT = 500

BUTTON_RECTS = {
    InputKind.SUN: pygame.Rect(180, 2820, 520, 520),
    InputKind.WATER: pygame.Rect(980, 2820, 520, 520),
    InputKind.ARROWHEAD: pygame.Rect(1780, 2820, 520, 520),
    InputKind.RESTART: pygame.Rect(740, 2900, 1000, 360),
}


class World:
    """Owns all mutable game state and advances it once per frame."""

    def __init__(
        self,
        cues: CueScheduler | None = None,
        timings: TransitionTimings = DEFAULT_TIMINGS,
        button_rects: dict[InputKind, pygame.Rect] | None = None,
    ) -> None:
        self.cues = cues if cues is not None else CueScheduler()
        self.timings = timings
        rects = button_rects if button_rects is not None else BUTTON_RECTS
        self.buttons: dict[InputKind, Button] = {kind: Button(kind, rect) for kind, rect in rects.items()}
        self.state: EvolutionState = INITIAL_STATE
        self.transition: Transition | None = None
        self.history: list[EvolutionState] = []
        self.reset()

    def reset(self) -> None:
        self.state = INITIAL_STATE
        self.transition = None
        self.history = [INITIAL_STATE]
        self._refresh_buttons()

    @property
    def resting(self) -> bool:
        return self.transition is None

    def enabled_inputs(self) -> list[InputKind]:
        return [kind for kind, button in self.buttons.items() if button.enabled]

    def _refresh_buttons(self) -> None:
        allowed = valid_inputs(self.state) if self.transition is None else frozenset()
        for kind, button in self.buttons.items():
            button.set_enabled(kind in allowed)

    def _record(self, state: EvolutionState) -> None:
        self.history.append(state)
        if len(self.history) > HISTORY_LIMIT:
            del self.history[: len(self.history) - HISTORY_LIMIT]

    def handle_input(self, pointer_pos: tuple[float, float], pointer_down: bool) -> InputKind | None:
        """Sample every enabled button, then act on the first click. Returns the clicked input."""
        clicked: Button | None = None
        for button in self.buttons.values():
            if button.enabled and button.update(pointer_pos, pointer_down) and clicked is None:
                clicked = button
        if clicked is None:
            return None
        clicked.set_enabled(False)
        self.choose(clicked.kind)
        return clicked.kind

    def choose(self, choice: InputKind) -> None:
        if self.transition is not None:
            raise EvolutionError(
                f"{choice.name} chosen while moving to {self.transition.goal_state.name}"
            )
        if choice is InputKind.RESTART:
            next_state(self.state, choice)
            self.reset()
            return
        self.transition = Transition.begin(self.state, choice, self.timings)
        self._refresh_buttons()

    def progress(self, delta_s: float) -> None:
        """Advance the active transition, finalizing every stage that completes."""
        remaining = delta_s
        while self.transition is not None:
            active = self.transition
            tick = active.progress(remaining)
            if tick.sound_triggered:
                self.cues.fire(active)
            if not tick.finished:
                break
            self._finalize(active, tick.follow_up)
            remaining = tick.leftover

    def _finalize(self, completed: Transition, follow_up: Transition | None) -> None:
        self.state = completed.goal_state
        self._record(self.state)
        self.transition = follow_up
        self._refresh_buttons()

    def frame(self) -> dict[str, Any]:
        """Describe what to draw this frame."""
        if self.transition is not None:
            current_alpha, goal_alpha = self.transition.blend()
            return {
                "screen": "transition",
                "layers": [
                    (self.state, current_alpha),
                    (self.transition.goal_state, goal_alpha),
                ],
                "buttons": [],
            }
        return {
            "screen": "resting",
            "state": self.state,
            "terminal": is_terminal(self.state),
            "layers": [(self.state, 1.0)],
            "buttons": [
                {
                    "label": button.label,
                    "rect": button.rect,
                    "tint": button.tint,
                }
                for button in self.buttons.values()
                if button.enabled
            ],
        }
