#!/usr/bin/env python3
"""Draws world frames: creature artwork layers, input buttons, and the loading screen."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pygame

from world import WORLD_HEIGHT, WORLD_WIDTH


WINDOW_SCALE = 6


class Renderer:
    """Centralized drawing for the loading screen and the world view."""

    WIDTH = WORLD_WIDTH // WINDOW_SCALE
    HEIGHT = WORLD_HEIGHT // WINDOW_SCALE

    COLOR_BG = (0x00, 0x00, 0x00)
    COLOR_TEXT = (0xFF, 0xFF, 0xFF)
    COLOR_DIM = (0x80, 0x80, 0x80)
    COLOR_BUTTON = (0x2E, 0x4A, 0x3A)
    COLOR_BORDER = (0xF2, 0xE8, 0xC9)

    def __init__(self, textures: list[pygame.Surface] | None = None) -> None:
        self.body_font = self._load_font(16)
        self.title_font = self._load_font(28)
        self.small_font = self._load_font(12)
        self.frame_surface = pygame.Surface((self.WIDTH, self.HEIGHT))
        self.textures: list[pygame.Surface] = list(textures or [])
        self._scaled_cache: dict[int, pygame.Surface] = {}

    def _load_font(self, size: int) -> pygame.font.Font:
        font_path = Path("assets/fonts/PressStart2P-Regular.ttf")
        if font_path.exists():
            return pygame.font.Font(str(font_path), size)
        return pygame.font.SysFont("couriernew", size)

    def set_textures(self, textures: list[pygame.Surface]) -> None:
        self.textures = list(textures)
        self._scaled_cache.clear()

    @staticmethod
    def world_rect(rect: pygame.Rect) -> pygame.Rect:
        return pygame.Rect(
            rect.x // WINDOW_SCALE,
            rect.y // WINDOW_SCALE,
            rect.width // WINDOW_SCALE,
            rect.height // WINDOW_SCALE,
        )

    @staticmethod
    def screen_to_world(pos: tuple[int, int]) -> tuple[float, float]:
        return (pos[0] * WINDOW_SCALE, pos[1] * WINDOW_SCALE)

    def _scaled_texture(self, index: int) -> pygame.Surface:
        cached = self._scaled_cache.get(index)
        if cached is not None:
            return cached
        surface = pygame.transform.smoothscale(self.textures[index], (self.WIDTH, self.HEIGHT))
        self._scaled_cache[index] = surface
        return surface

    def draw(self, screen: pygame.Surface, frame: dict[str, Any]) -> None:
        canvas = self.frame_surface
        canvas.fill(self.COLOR_BG)

        scene = frame.get("screen", "resting")
        if scene == "loading":
            self._draw_loading(canvas, frame)
        else:
            self._draw_layers(canvas, frame)
            self._draw_caption(canvas, frame)
            self._draw_buttons(canvas, frame)

        fps = frame.get("fps")
        if fps is not None:
            self._draw_debug(canvas, float(fps))

        screen.fill(self.COLOR_BG)
        screen.blit(canvas, (0, 0))

    def _draw_layers(self, canvas: pygame.Surface, frame: dict[str, Any]) -> None:
        for state, alpha in frame.get("layers", []):
            alpha_byte = max(0, min(255, int(round(alpha * 255))))
            if alpha_byte == 0:
                continue
            surface = self._scaled_texture(state.value)
            surface.set_alpha(alpha_byte)
            canvas.blit(surface, (0, 0))

    def _draw_caption(self, canvas: pygame.Surface, frame: dict[str, Any]) -> None:
        state = frame.get("state")
        if state is None:
            return
        name = self.title_font.render(state.name.replace("_", " ").title(), True, self.COLOR_BORDER)
        canvas.blit(name, ((self.WIDTH - name.get_width()) // 2, 16))
        if frame.get("terminal", False):
            hint = self.small_font.render("Final form. Press R to start again", True, self.COLOR_BORDER)
            canvas.blit(hint, ((self.WIDTH - hint.get_width()) // 2, 24 + name.get_height()))

    def _draw_buttons(self, canvas: pygame.Surface, frame: dict[str, Any]) -> None:
        for button in frame.get("buttons", []):
            rect = self.world_rect(button["rect"])
            tint = button.get("tint", self.COLOR_TEXT)
            fill = tuple(int(c * t / 255) for c, t in zip(self.COLOR_BUTTON, tint))
            pygame.draw.rect(canvas, fill, rect, border_radius=8)
            pygame.draw.rect(canvas, tint, rect, width=2, border_radius=8)

            label = self.body_font.render(str(button.get("label", "")), True, tint)
            canvas.blit(
                label,
                (rect.centerx - label.get_width() // 2, rect.centery - label.get_height() // 2),
            )

    def _draw_loading(self, canvas: pygame.Surface, frame: dict[str, Any]) -> None:
        title = self.title_font.render("LOADING", True, self.COLOR_TEXT)
        canvas.blit(title, ((self.WIDTH - title.get_width()) // 2, self.HEIGHT // 2 - title.get_height()))

        detail = str(frame.get("detail", ""))
        if detail:
            surf = self.small_font.render(detail, True, self.COLOR_DIM)
            canvas.blit(surf, ((self.WIDTH - surf.get_width()) // 2, self.HEIGHT // 2 + 12))

    def _draw_debug(self, canvas: pygame.Surface, fps: float) -> None:
        lines = (
            f"FPS: {fps:.0f}",
            f"width: {self.WIDTH}",
            f"height: {self.HEIGHT}",
        )
        for idx, line in enumerate(lines):
            surf = self.small_font.render(line, True, self.COLOR_TEXT)
            canvas.blit(surf, (4, 4 + idx * (surf.get_height() + 2)))
