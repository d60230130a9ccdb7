#!/usr/bin/env python3
"""Timed transitions between evolution states: durations, sound triggers, and blend alphas."""

from __future__ import annotations

from dataclasses import dataclass, field
import math

from evolution import CRACK_CHAIN, EvolutionState, InputKind, hatchling, is_crack_start, next_state


REGULAR_DURATION_S = 4.0
EGG_CRACKING_DURATION_S = 1.2
REGULAR_SOUND_DIVISOR = 1.9

FADE_START = 1.0 / 7.0
FADE_MIDPOINT = 0.5
FADE_END = 6.0 / 7.0


@dataclass(frozen=True)
class TransitionKind:
    """Regular crossfade, or egg cracking carrying the input that started the crack."""

    cracking_trigger: InputKind | None = None

    @property
    def is_egg_cracking(self) -> bool:
        return self.cracking_trigger is not None

    def __str__(self) -> str:
        if self.cracking_trigger is None:
            return "Regular"
        return f"EggCracking({self.cracking_trigger.name})"


REGULAR = TransitionKind()


def egg_cracking(trigger: InputKind) -> TransitionKind:
    return TransitionKind(cracking_trigger=trigger)


@dataclass(frozen=True)
class TransitionTimings:
    """Per-kind duration table."""

    regular_s: float = REGULAR_DURATION_S
    egg_cracking_s: float = EGG_CRACKING_DURATION_S

    def total_duration(self, kind: TransitionKind) -> float:
        return self.egg_cracking_s if kind.is_egg_cracking else self.regular_s

    def sound_threshold(self, kind: TransitionKind) -> float:
        # Regular transitions swell a little past the middle; cracks sound on the cut.
        if kind.is_egg_cracking:
            return self.egg_cracking_s
        return self.regular_s / REGULAR_SOUND_DIVISOR


DEFAULT_TIMINGS = TransitionTimings()


@dataclass
class TransitionTick:
    """Result payload for one transition progress step."""

    sound_triggered: bool = False
    finished: bool = False
    leftover: float = 0.0
    follow_up: Transition | None = None


def _ease_out(t: float) -> float:
    return 0.5 * (1.0 + math.cos(math.pi * t))


def _ease_in(t: float) -> float:
    return 0.5 * (1.0 - math.cos(math.pi * t))


@dataclass
class Transition:
    """An in-flight move from the resting state towards `goal_state`."""

    goal_state: EvolutionState
    kind: TransitionKind = REGULAR
    elapsed: float = 0.0
    sound_trigger_fired: bool = False
    timings: TransitionTimings = field(default=DEFAULT_TIMINGS, repr=False)

    @classmethod
    def begin(
        cls,
        current: EvolutionState,
        choice: InputKind,
        timings: TransitionTimings = DEFAULT_TIMINGS,
    ) -> Transition:
        goal = next_state(current, choice)
        kind = egg_cracking(choice) if is_crack_start(goal) else REGULAR
        return cls(goal_state=goal, kind=kind, timings=timings)

    @property
    def total_duration(self) -> float:
        return self.timings.total_duration(self.kind)

    @property
    def completed(self) -> bool:
        return self.elapsed >= self.total_duration

    @property
    def ratio(self) -> float:
        total = self.total_duration
        if total <= 0:
            return 1.0
        return min(1.0, self.elapsed / total)

    def follow_up(self) -> Transition | None:
        """The transition that chains after this one without player input, if any."""
        if self.goal_state in CRACK_CHAIN:
            return Transition(CRACK_CHAIN[self.goal_state], self.kind, timings=self.timings)
        if self.kind.cracking_trigger is not None:
            goal = hatchling(self.goal_state, self.kind.cracking_trigger)
            return Transition(goal, REGULAR, timings=self.timings)
        return None

    def progress(self, delta_s: float) -> TransitionTick:
        tick = TransitionTick()
        delta_s = max(0.0, float(delta_s))
        total = self.total_duration
        before = self.elapsed

        self.elapsed = min(total, self.elapsed + delta_s)

        if not self.sound_trigger_fired and self.elapsed >= self.timings.sound_threshold(self.kind):
            self.sound_trigger_fired = True
            tick.sound_triggered = True

        if self.elapsed >= total:
            tick.finished = True
            tick.leftover = max(0.0, delta_s - (total - before))
            tick.follow_up = self.follow_up()
        return tick

    def blend(self) -> tuple[float, float]:
        """Alpha for (current art, goal art).

        Regular transitions fade the current art out over the first half and
        the goal art in over the second half, holding still near both ends.
        Egg cracking is a hard cut applied when the transition finalizes.
        """
        if self.kind.is_egg_cracking:
            return (1.0, 0.0)

        p = self.ratio
        if p <= FADE_START:
            current = 1.0
        elif p < FADE_MIDPOINT:
            current = _ease_out((p - FADE_START) / (FADE_MIDPOINT - FADE_START))
        else:
            current = 0.0

        if p <= FADE_MIDPOINT:
            goal = 0.0
        elif p < FADE_END:
            goal = _ease_in((p - FADE_MIDPOINT) / (FADE_END - FADE_MIDPOINT))
        else:
            goal = 1.0
        return (current, goal)
