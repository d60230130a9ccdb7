#!/usr/bin/env python3
"""Texture and sound loading. Every asset is required; a missing one aborts startup."""

from __future__ import annotations

from pathlib import Path

import pygame

from cues import ALL_CUES, CUE_VOLUMES
from evolution import EvolutionState


DEFAULT_ASSET_DIR = Path("assets")
TEXTURE_DIR = "textures"
SOUND_DIR = "sounds"


class AssetError(RuntimeError):
    """Raised when a required texture or sound cannot be loaded."""


def texture_paths(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> list[Path]:
    """One artwork file per evolution state, numbered from 1 in state order."""
    root = Path(asset_dir) / TEXTURE_DIR
    return [root / f"{state.value + 1}.png" for state in EvolutionState]


def sound_paths(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> dict[str, Path]:
    root = Path(asset_dir) / SOUND_DIR
    return {name: root / f"{name}.wav" for name in ALL_CUES}


def header_valid(path: Path) -> bool:
    ext = path.suffix.lower()
    try:
        with path.open("rb") as fh:
            header = fh.read(8)
    except OSError:
        return False
    if ext == ".wav":
        return header[:4] == b"RIFF"
    if ext == ".png":
        return header == b"\x89PNG\r\n\x1a\n"
    return True


def missing_assets(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> list[Path]:
    """Asset files that are absent or do not look like their format."""
    paths = texture_paths(asset_dir) + list(sound_paths(asset_dir).values())
    return [path for path in paths if not path.is_file() or not header_valid(path)]


def load_textures(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> list[pygame.Surface]:
    textures: list[pygame.Surface] = []
    for path in texture_paths(asset_dir):
        if not path.is_file():
            raise AssetError(f"Missing texture: {path}")
        try:
            surface = pygame.image.load(str(path))
        except pygame.error as exc:
            raise AssetError(f"Unreadable texture {path}: {exc}") from exc
        if pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()
        textures.append(surface)

    if len(textures) != len(EvolutionState):
        raise AssetError(f"Expected {len(EvolutionState)} textures, loaded {len(textures)}")
    return textures


def check_sound_files(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> None:
    """Fail on absent or malformed cue files, whether or not a mixer is available."""
    for path in sound_paths(asset_dir).values():
        if not path.is_file() or not header_valid(path):
            raise AssetError(f"Missing or invalid sound: {path}")


def load_sounds(asset_dir: str | Path = DEFAULT_ASSET_DIR) -> dict[str, pygame.mixer.Sound]:
    """Load every cue. The mixer must already be initialised."""
    check_sound_files(asset_dir)
    sounds: dict[str, pygame.mixer.Sound] = {}
    for name, path in sound_paths(asset_dir).items():
        try:
            sound = pygame.mixer.Sound(str(path))
        except pygame.error as exc:
            raise AssetError(f"Unreadable sound {path}: {exc}") from exc
        sound.set_volume(max(0.0, min(1.0, CUE_VOLUMES[name])))
        sounds[name] = sound
    return sounds
