#!/usr/bin/env python3
"""Mixer wrapper that plays transition cues."""

from __future__ import annotations

from pathlib import Path

import pygame

from assets import DEFAULT_ASSET_DIR, check_sound_files, load_sounds


class AudioManager:
    """Plays named cues. Without an audio device the manager stays silent."""

    def __init__(self, asset_dir: str | Path = DEFAULT_ASSET_DIR) -> None:
        self.enabled = False
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        check_sound_files(asset_dir)

        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init()
            self.enabled = True
        except pygame.error:
            self.enabled = False
            return

        self.sounds = load_sounds(asset_dir)

    def play(self, name: str) -> None:
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play(loops=0)
