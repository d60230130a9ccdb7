#!/usr/bin/env python3
"""Runtime loop: window, asset loading, and the per-frame world cycle."""

from __future__ import annotations

from pathlib import Path
import random

import pygame

from assets import DEFAULT_ASSET_DIR, load_textures
from audio import AudioManager
from cues import CueScheduler
from evolution import InputKind
from renderer import Renderer
from transition import DEFAULT_TIMINGS, TransitionTimings
from world import World


FRAME_RATE = 60
AUTOPLAY_COOLDOWN_S = 0.4


class Game:
    """Owns the window, clock, renderer, audio and the world aggregate."""

    def __init__(
        self,
        asset_dir: str | Path = DEFAULT_ASSET_DIR,
        smoke: bool = False,
        max_frames: int = 90,
        autoplay: bool = False,
        seed: int | None = None,
        show_fps: bool = False,
        timings: TransitionTimings = DEFAULT_TIMINGS,
    ) -> None:
        self.renderer = Renderer()
        self.screen = pygame.display.set_mode((Renderer.WIDTH, Renderer.HEIGHT))
        self.clock = pygame.time.Clock()
        self.running = True
        self.smoke = smoke
        self.max_frames = max(1, int(max_frames))
        self.autoplay = autoplay
        self.show_fps = show_fps
        self.frame_count = 0
        self.autoplay_cooldown_s = AUTOPLAY_COOLDOWN_S

        # One-time loading gate before the world exists.
        self.renderer.draw(self.screen, {"screen": "loading", "detail": str(asset_dir)})
        pygame.display.flip()
        pygame.event.pump()

        self.renderer.set_textures(load_textures(asset_dir))
        self.audio = AudioManager(asset_dir)
        self.world = World(
            cues=CueScheduler(sink=self.audio, rng=random.Random(seed)),
            timings=timings,
        )

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r and InputKind.RESTART in self.world.enabled_inputs():
                    self.world.choose(InputKind.RESTART)

    def _update_autoplay(self, delta_s: float) -> None:
        if not self.autoplay or not self.world.resting:
            return
        self.autoplay_cooldown_s = max(0.0, self.autoplay_cooldown_s - delta_s)
        if self.autoplay_cooldown_s > 0:
            return
        enabled = self.world.enabled_inputs()
        if enabled:
            self.world.choose(enabled[0])
        self.autoplay_cooldown_s = AUTOPLAY_COOLDOWN_S

    def _pointer(self) -> tuple[tuple[float, float], bool]:
        pos = self.renderer.screen_to_world(pygame.mouse.get_pos())
        return pos, bool(pygame.mouse.get_pressed()[0])

    def run(self) -> None:
        while self.running:
            delta_s = self.clock.tick(FRAME_RATE) / 1000.0
            self._handle_events()

            pointer_pos, pointer_down = self._pointer()
            self.world.handle_input(pointer_pos, pointer_down)
            self._update_autoplay(delta_s)
            self.world.progress(delta_s)

            frame = self.world.frame()
            if self.show_fps:
                frame["fps"] = self.clock.get_fps()
            self.renderer.draw(self.screen, frame)
            pygame.display.flip()

            self.frame_count += 1
            if self.smoke and self.frame_count >= self.max_frames:
                self.running = False
