#!/usr/bin/env python3
"""Check an asset directory and the evolution graph before shipping."""

from __future__ import annotations

import argparse
from pathlib import Path

from assets import DEFAULT_ASSET_DIR, missing_assets, texture_paths
from evolution import (
    CRACK_CHAIN,
    EVOLUTION_TABLE,
    HATCHLINGS,
    EvolutionState,
    InputKind,
    is_terminal,
    reachable_states,
    valid_inputs,
)


def graph_problems() -> list[str]:
    problems: list[str] = []
    reachable = set(reachable_states())
    crack_states = set(CRACK_CHAIN) | set(CRACK_CHAIN.values())

    for state in EvolutionState:
        if state not in reachable:
            problems.append(f"{state.name} is unreachable from the initial state")
        inputs = valid_inputs(state)
        if state in crack_states:
            if inputs:
                problems.append(f"{state.name} is a crack stage but accepts input")
            continue
        if is_terminal(state):
            if inputs != {InputKind.RESTART}:
                problems.append(f"{state.name} is terminal but accepts {sorted(i.name for i in inputs)}")
        elif not inputs:
            problems.append(f"{state.name} is a dead end")
        elif InputKind.RESTART in inputs:
            problems.append(f"{state.name} accepts RESTART but is not terminal")

    for crack_state, _trigger in HATCHLINGS:
        if crack_state not in CRACK_CHAIN.values():
            problems.append(f"hatchling entry for {crack_state.name}, which is not a second crack stage")
    return problems


def print_graph() -> None:
    for (state, choice), goal in EVOLUTION_TABLE.items():
        print(f"{state.name:>16} + {choice.name:<9} -> {goal.name}")
    for first, second in CRACK_CHAIN.items():
        print(f"{first.name:>16} ~ (timer)   -> {second.name}")
    for (state, trigger), goal in HATCHLINGS.items():
        print(f"{state.name:>16} ~ {trigger.name:<9} -> {goal.name}")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Verify textures, sounds, and the evolution graph.")
    p.add_argument("--assets", default=str(DEFAULT_ASSET_DIR), help="Asset directory.")
    p.add_argument("--graph", action="store_true", help="Print the evolution table.")
    p.add_argument("--skip-files", action="store_true", help="Only check the evolution graph.")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    if args.graph:
        print_graph()

    failed = False
    problems = graph_problems()
    if problems:
        failed = True
        print(f"FAIL: evolution graph has {len(problems)} problem(s)")
        for problem in problems:
            print(f"  - {problem}")
    else:
        print(f"PASS: evolution graph covers {len(EvolutionState)} states")

    if not args.skip_files:
        asset_dir = Path(args.assets)
        if not asset_dir.is_dir():
            print(f"ERROR: asset directory not found: {asset_dir}")
            return 2
        missing = missing_assets(asset_dir)
        if missing:
            failed = True
            print(f"FAIL: {len(missing)} asset file(s) missing or invalid")
            for path in missing:
                print(f"  - {path}")
        else:
            print(f"PASS: {len(texture_paths(asset_dir))} textures and all sound cues present")

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
