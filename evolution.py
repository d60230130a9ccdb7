#!/usr/bin/env python3
"""Evolution graph: creature forms, player inputs, and the lookup table between them."""

from __future__ import annotations

from collections import deque
from enum import Enum


class EvolutionState(Enum):
    """Creature forms. The value is also the index into the artwork list."""

    EGG = 0
    EGG_CRACK_1 = 1
    EGG_CRACK_2 = 2
    BIG_EGG = 3
    BIG_EGG_CRACK_1 = 4
    BIG_EGG_CRACK_2 = 5
    CHICK = 6
    ROOSTER = 7
    DUCKLING = 8
    DUCK = 9
    SWAN = 10
    BIRD = 11
    EAGLE = 12
    PHOENIX = 13
    BABY_TURTLE = 14
    SEA_TURTLE = 15
    TORTOISE = 16
    SMALL_DRAGON = 17
    DRAGON = 18
    WYVERN = 19
    KRAKEN = 20
    LEVIATHAN = 21


class InputKind(Enum):
    SUN = "sun"
    WATER = "water"
    ARROWHEAD = "arrowhead"
    RESTART = "restart"


class EvolutionError(ValueError):
    """Raised when the graph is asked about a (state, input) pair it does not define."""


S = EvolutionState
K = InputKind

INITIAL_STATE = S.EGG

TERMINAL_STATES = frozenset(
    {
        S.ROOSTER,
        S.DUCK,
        S.SWAN,
        S.EAGLE,
        S.PHOENIX,
        S.SEA_TURTLE,
        S.TORTOISE,
        S.DRAGON,
        S.WYVERN,
        S.LEVIATHAN,
    }
)

# First crack stage -> second crack stage.
CRACK_CHAIN: dict[EvolutionState, EvolutionState] = {
    S.EGG_CRACK_1: S.EGG_CRACK_2,
    S.BIG_EGG_CRACK_1: S.BIG_EGG_CRACK_2,
}

# (second crack stage, input that started the cracking) -> hatchling.
HATCHLINGS: dict[tuple[EvolutionState, InputKind], EvolutionState] = {
    (S.EGG_CRACK_2, K.SUN): S.CHICK,
    (S.EGG_CRACK_2, K.WATER): S.BABY_TURTLE,
    (S.BIG_EGG_CRACK_2, K.SUN): S.SMALL_DRAGON,
    (S.BIG_EGG_CRACK_2, K.WATER): S.KRAKEN,
}

EVOLUTION_TABLE: dict[tuple[EvolutionState, InputKind], EvolutionState] = {
    (S.EGG, K.SUN): S.EGG_CRACK_1,
    (S.EGG, K.WATER): S.EGG_CRACK_1,
    (S.EGG, K.ARROWHEAD): S.BIG_EGG,
    (S.BIG_EGG, K.SUN): S.BIG_EGG_CRACK_1,
    (S.BIG_EGG, K.WATER): S.BIG_EGG_CRACK_1,
    (S.CHICK, K.SUN): S.ROOSTER,
    (S.CHICK, K.WATER): S.DUCKLING,
    (S.CHICK, K.ARROWHEAD): S.BIRD,
    (S.DUCKLING, K.WATER): S.DUCK,
    (S.DUCKLING, K.SUN): S.SWAN,
    (S.BIRD, K.SUN): S.PHOENIX,
    (S.BIRD, K.ARROWHEAD): S.EAGLE,
    (S.BABY_TURTLE, K.WATER): S.SEA_TURTLE,
    (S.BABY_TURTLE, K.SUN): S.TORTOISE,
    (S.SMALL_DRAGON, K.SUN): S.DRAGON,
    (S.SMALL_DRAGON, K.ARROWHEAD): S.WYVERN,
    (S.KRAKEN, K.WATER): S.LEVIATHAN,
}
EVOLUTION_TABLE.update({(state, K.RESTART): INITIAL_STATE for state in TERMINAL_STATES})

del S, K


def next_state(current: EvolutionState, choice: InputKind) -> EvolutionState:
    """Return the goal state for a player input. Unknown pairs are a bookkeeping bug."""
    try:
        return EVOLUTION_TABLE[(current, choice)]
    except KeyError:
        raise EvolutionError(f"No evolution from {current.name} with {choice.name}") from None


def valid_inputs(state: EvolutionState) -> frozenset[InputKind]:
    return frozenset(choice for (source, choice) in EVOLUTION_TABLE if source is state)


def is_terminal(state: EvolutionState) -> bool:
    return state in TERMINAL_STATES


def is_crack_start(state: EvolutionState) -> bool:
    return state in CRACK_CHAIN


def hatchling(crack_state: EvolutionState, trigger: InputKind) -> EvolutionState:
    try:
        return HATCHLINGS[(crack_state, trigger)]
    except KeyError:
        raise EvolutionError(
            f"{crack_state.name} cannot hatch from a crack started by {trigger.name}"
        ) from None


def reachable_states() -> list[EvolutionState]:
    """Breadth-first walk from the initial state through inputs and crack chains."""
    order = [INITIAL_STATE]
    # Crack stages are visited once per trigger, since the trigger picks the hatchling.
    visited: set[tuple[EvolutionState, InputKind | None]] = {(INITIAL_STATE, None)}
    queue: deque[tuple[EvolutionState, InputKind | None]] = deque([(INITIAL_STATE, None)])
    while queue:
        state, trigger = queue.popleft()
        successors: list[tuple[EvolutionState, InputKind | None]] = []
        if state in CRACK_CHAIN:
            successors.append((CRACK_CHAIN[state], trigger))
        elif trigger is not None and (state, trigger) in HATCHLINGS:
            successors.append((HATCHLINGS[(state, trigger)], None))
        else:
            for (source, choice), goal in EVOLUTION_TABLE.items():
                if source is not state or choice is InputKind.RESTART:
                    continue
                successors.append((goal, choice if goal in CRACK_CHAIN else None))
        for node in successors:
            if node in visited:
                continue
            visited.add(node)
            queue.append(node)
            if node[0] not in order:
                order.append(node[0])
    return order
