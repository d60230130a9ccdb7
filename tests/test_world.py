import random
import unittest
from unittest.mock import patch

import pygame

from cues import CUE_CRACK_1, CUE_CRACK_2, SCALE_CUES, CueScheduler
from evolution import EVOLUTION_TABLE, EvolutionError, EvolutionState, InputKind
from transition import REGULAR, TransitionTimings, egg_cracking
from ui import Button
from world import BUTTON_RECTS, World


TIMINGS = TransitionTimings(regular_s=4.0, egg_cracking_s=1.0)
CHOOSERS = {InputKind.SUN, InputKind.WATER, InputKind.ARROWHEAD}


class RecordingSink:
    def __init__(self) -> None:
        self.played: list[str] = []

    def play(self, name: str) -> None:
        self.played.append(name)


def make_world(seed: int = 0) -> tuple[World, RecordingSink]:
    sink = RecordingSink()
    world = World(cues=CueScheduler(sink=sink, rng=random.Random(seed)), timings=TIMINGS)
    return world, sink


def click(world: World, kind: InputKind) -> InputKind | None:
    """Hover, press and release over a button; returns what the world saw on release."""
    pos = BUTTON_RECTS[kind].center
    world.handle_input(pos, False)
    world.handle_input(pos, True)
    return world.handle_input(pos, False)


def settle(world: World) -> None:
    world.progress(100.0)


class InitialStateTest(unittest.TestCase):
    def test_starts_at_egg(self) -> None:
        world, _ = make_world()
        self.assertIs(world.state, EvolutionState.EGG)
        self.assertTrue(world.resting)
        self.assertEqual(set(world.enabled_inputs()), CHOOSERS)
        self.assertEqual(world.history, [EvolutionState.EGG])

    def test_progress_without_transition_is_noop(self) -> None:
        world, sink = make_world()
        world.progress(5.0)
        self.assertIs(world.state, EvolutionState.EGG)
        self.assertEqual(sink.played, [])


class ClickTest(unittest.TestCase):
    def test_click_sun_starts_crack(self) -> None:
        world, _ = make_world()
        self.assertIs(click(world, InputKind.SUN), InputKind.SUN)
        self.assertIsNotNone(world.transition)
        self.assertIs(world.transition.goal_state, EvolutionState.EGG_CRACK_1)
        self.assertEqual(world.transition.kind, egg_cracking(InputKind.SUN))
        self.assertEqual(world.enabled_inputs(), [])
        self.assertIs(world.state, EvolutionState.EGG)

    def test_no_click_without_release(self) -> None:
        world, _ = make_world()
        pos = BUTTON_RECTS[InputKind.WATER].center
        world.handle_input(pos, False)
        self.assertIsNone(world.handle_input(pos, True))
        self.assertIsNone(world.handle_input(pos, True))
        self.assertTrue(world.resting)

    def test_clicks_ignored_during_transition(self) -> None:
        world, _ = make_world()
        click(world, InputKind.ARROWHEAD)
        goal = world.transition.goal_state
        self.assertIsNone(click(world, InputKind.SUN))
        self.assertIs(world.transition.goal_state, goal)

    def test_choose_during_transition_fails_fast(self) -> None:
        world, _ = make_world()
        world.choose(InputKind.SUN)
        with self.assertRaises(EvolutionError):
            world.choose(InputKind.WATER)

    def test_choose_invalid_input_fails_fast(self) -> None:
        world, _ = make_world()
        with self.assertRaises(EvolutionError):
            world.choose(InputKind.RESTART)


class PointerSamplingTest(unittest.TestCase):
    def test_every_enabled_button_sampled_on_click_frame(self) -> None:
        world, _ = make_world()
        pos = BUTTON_RECTS[InputKind.SUN].center
        world.handle_input(pos, False)
        world.handle_input(pos, True)
        with patch.object(Button, "update", autospec=True, side_effect=Button.update) as update:
            self.assertIs(world.handle_input(pos, False), InputKind.SUN)
        self.assertEqual(update.call_count, 3)
        sampled = {call.args[0].kind for call in update.call_args_list}
        self.assertEqual(sampled, CHOOSERS)

    def test_first_of_overlapping_buttons_wins(self) -> None:
        shared = pygame.Rect(0, 0, 100, 100)
        world = World(
            timings=TIMINGS,
            button_rects={InputKind.SUN: shared, InputKind.WATER: shared, InputKind.ARROWHEAD: shared},
        )
        world.handle_input((50, 50), False)
        world.handle_input((50, 50), True)
        self.assertIs(world.handle_input((50, 50), False), InputKind.SUN)
        self.assertEqual(world.transition.kind, egg_cracking(InputKind.SUN))
        self.assertEqual(world.enabled_inputs(), [])


class CrackSequenceTest(unittest.TestCase):
    def test_sun_hatches_chick_through_both_cracks(self) -> None:
        world, sink = make_world()
        click(world, InputKind.SUN)

        world.progress(1.0)
        self.assertIs(world.state, EvolutionState.EGG_CRACK_1)
        self.assertIs(world.transition.goal_state, EvolutionState.EGG_CRACK_2)
        self.assertEqual(world.transition.kind, egg_cracking(InputKind.SUN))
        self.assertEqual(world.enabled_inputs(), [])
        self.assertEqual(sink.played, [CUE_CRACK_1])

        world.progress(1.0)
        self.assertIs(world.state, EvolutionState.EGG_CRACK_2)
        self.assertIs(world.transition.goal_state, EvolutionState.CHICK)
        self.assertEqual(world.transition.kind, REGULAR)
        self.assertEqual(sink.played, [CUE_CRACK_1, CUE_CRACK_2])

        world.progress(4.0)
        self.assertIs(world.state, EvolutionState.CHICK)
        self.assertTrue(world.resting)
        self.assertEqual(set(world.enabled_inputs()), CHOOSERS)
        self.assertEqual(sink.played[:2], [CUE_CRACK_1, CUE_CRACK_2])
        self.assertEqual(len(sink.played), 3)
        self.assertIn(sink.played[2], SCALE_CUES)

    def test_water_on_big_egg_hatches_kraken(self) -> None:
        world, _ = make_world()
        world.choose(InputKind.ARROWHEAD)
        settle(world)
        self.assertIs(world.state, EvolutionState.BIG_EGG)
        world.choose(InputKind.WATER)
        settle(world)
        self.assertIs(world.state, EvolutionState.KRAKEN)
        self.assertEqual(
            world.history,
            [
                EvolutionState.EGG,
                EvolutionState.BIG_EGG,
                EvolutionState.BIG_EGG_CRACK_1,
                EvolutionState.BIG_EGG_CRACK_2,
                EvolutionState.KRAKEN,
            ],
        )

    def test_leftover_carries_into_next_stage(self) -> None:
        world, sink = make_world()
        world.choose(InputKind.WATER)
        world.progress(1.5)
        self.assertIs(world.state, EvolutionState.EGG_CRACK_1)
        self.assertIs(world.transition.goal_state, EvolutionState.EGG_CRACK_2)
        self.assertAlmostEqual(world.transition.elapsed, 0.5)
        self.assertEqual(sink.played, [CUE_CRACK_1])

    def test_one_large_step_visits_every_stage(self) -> None:
        world, sink = make_world()
        world.choose(InputKind.WATER)
        world.progress(2.5)
        self.assertEqual(
            world.history,
            [EvolutionState.EGG, EvolutionState.EGG_CRACK_1, EvolutionState.EGG_CRACK_2],
        )
        self.assertIs(world.transition.goal_state, EvolutionState.BABY_TURTLE)
        self.assertAlmostEqual(world.transition.elapsed, 0.5)

        settle(world)
        self.assertIs(world.state, EvolutionState.BABY_TURTLE)
        self.assertEqual(world.history[-1], EvolutionState.BABY_TURTLE)
        self.assertEqual(sink.played[:2], [CUE_CRACK_1, CUE_CRACK_2])
        self.assertEqual(len(sink.played), 3)

    def test_small_and_large_steps_play_same_cues(self) -> None:
        coarse, coarse_sink = make_world(seed=7)
        fine, fine_sink = make_world(seed=7)
        coarse.choose(InputKind.SUN)
        fine.choose(InputKind.SUN)

        coarse.progress(6.0)
        for _ in range(96):
            fine.progress(0.0625)

        self.assertIs(coarse.state, EvolutionState.CHICK)
        self.assertIs(fine.state, EvolutionState.CHICK)
        self.assertEqual(coarse_sink.played, fine_sink.played)
        self.assertEqual(coarse.history, fine.history)


class RestartTest(unittest.TestCase):
    def _reach_duck(self) -> tuple[World, RecordingSink]:
        world, sink = make_world()
        for choice in (InputKind.SUN, InputKind.WATER, InputKind.WATER):
            world.choose(choice)
            settle(world)
        return world, sink

    def test_terminal_enables_only_restart(self) -> None:
        world, _ = self._reach_duck()
        self.assertIs(world.state, EvolutionState.DUCK)
        self.assertEqual(world.enabled_inputs(), [InputKind.RESTART])

    def test_restart_click_resets(self) -> None:
        world, _ = self._reach_duck()
        self.assertIs(click(world, InputKind.RESTART), InputKind.RESTART)
        self.assertIs(world.state, EvolutionState.EGG)
        self.assertTrue(world.resting)
        self.assertEqual(set(world.enabled_inputs()), CHOOSERS)
        self.assertEqual(world.history, [EvolutionState.EGG])

    def test_chooser_clicks_ignored_at_terminal(self) -> None:
        world, _ = self._reach_duck()
        self.assertIsNone(click(world, InputKind.SUN))
        self.assertIs(world.state, EvolutionState.DUCK)


class EnablementCoverageTest(unittest.TestCase):
    def test_table_matches_every_enabled_pair(self) -> None:
        """Walk every playable path; the enabled (state, input) pairs are the table."""
        seen: set[tuple[EvolutionState, InputKind]] = set()
        pending: list[tuple[InputKind, ...]] = [()]
        while pending:
            path = pending.pop()
            world, _ = make_world()
            for choice in path:
                world.choose(choice)
                settle(world)
            self.assertTrue(world.resting)
            for choice in world.enabled_inputs():
                pair = (world.state, choice)
                if pair in seen:
                    continue
                seen.add(pair)
                if choice is not InputKind.RESTART:
                    pending.append(path + (choice,))
        self.assertEqual(seen, set(EVOLUTION_TABLE))


class FrameTest(unittest.TestCase):
    def test_resting_frame(self) -> None:
        world, _ = make_world()
        frame = world.frame()
        self.assertEqual(frame["screen"], "resting")
        self.assertEqual(frame["layers"], [(EvolutionState.EGG, 1.0)])
        self.assertFalse(frame["terminal"])
        self.assertEqual({b["label"] for b in frame["buttons"]}, {"Sun", "Water", "Arrowhead"})

    def test_transition_frame_hides_buttons(self) -> None:
        world, _ = make_world()
        world.choose(InputKind.ARROWHEAD)
        world.progress(2.0)
        frame = world.frame()
        self.assertEqual(frame["screen"], "transition")
        self.assertEqual(frame["buttons"], [])
        (current, current_alpha), (goal, goal_alpha) = frame["layers"]
        self.assertIs(current, EvolutionState.EGG)
        self.assertIs(goal, EvolutionState.BIG_EGG)
        self.assertAlmostEqual(current_alpha, 0.0)
        self.assertAlmostEqual(goal_alpha, 0.0)

    def test_crack_frame_shows_only_current_art(self) -> None:
        world, _ = make_world()
        world.choose(InputKind.SUN)
        world.progress(0.5)
        self.assertEqual(
            world.frame()["layers"],
            [(EvolutionState.EGG, 1.0), (EvolutionState.EGG_CRACK_1, 0.0)],
        )


if __name__ == "__main__":
    unittest.main()
