#!/usr/bin/env python3
"""Sound cue selection for transition stages."""

from __future__ import annotations

import random
from typing import Protocol

from evolution import CRACK_CHAIN
from transition import Transition


CUE_CRACK_1 = "crack1"
CUE_CRACK_2 = "crack2"
CUE_SCALE_1 = "scale1"
CUE_SCALE_2 = "scale2"

SCALE_CUES = (CUE_SCALE_1, CUE_SCALE_2)
CRACK_CUES = (CUE_CRACK_1, CUE_CRACK_2)
ALL_CUES = CRACK_CUES + SCALE_CUES
CUE_HISTORY_LIMIT = 64

CUE_VOLUMES = {
    CUE_CRACK_1: 1.0,
    CUE_CRACK_2: 1.0,
    CUE_SCALE_1: 0.45,
    CUE_SCALE_2: 0.45,
}


class CueSink(Protocol):
    def play(self, name: str) -> None: ...


def select_cue(transition: Transition, rng: random.Random) -> str:
    """Pick the cue for a transition whose sound trigger just fired."""
    if transition.kind.is_egg_cracking:
        return CUE_CRACK_1 if transition.goal_state in CRACK_CHAIN else CUE_CRACK_2
    return rng.choice(SCALE_CUES)


class CueScheduler:
    """Forwards one cue per fired transition stage to a sink."""

    def __init__(self, sink: CueSink | None = None, rng: random.Random | None = None) -> None:
        self.sink = sink
        self.rng = rng if rng is not None else random.Random()
        self.played: list[str] = []

    def fire(self, transition: Transition) -> str:
        name = select_cue(transition, self.rng)
        self.played.append(name)
        if len(self.played) > CUE_HISTORY_LIMIT:
            del self.played[:-CUE_HISTORY_LIMIT]
        if self.sink is not None:
            self.sink.play(name)
        return name
