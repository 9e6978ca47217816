"""pygame drawing for the text discovery world."""
from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pygame

from word_discovery.grid import jitter_offset
from word_discovery.rng import clamp, lerp
from word_discovery.world import DiscoveryWorld, Pointer

Color = Tuple[int, int, int]

DEBUG_MARK_COLOR: Color = (13, 166, 242)
HUD_COLOR: Color = (230, 230, 235)


class FontCache:
    """SysFont lookups are slow; keep one font object per (family, size, bold)."""

    def __init__(self) -> None:
        self._fonts: Dict[Tuple[Optional[str], int, bool], pygame.font.Font] = {}
        self._glyphs: Dict[Tuple[int, str, Color], pygame.Surface] = {}

    def get(self, family: Optional[str], size: int, bold: bool = False) -> pygame.font.Font:
        key = (family, size, bold)
        font = self._fonts.get(key)
        if font is None:
            try:
                font = pygame.font.SysFont(family, size, bold=bold)
            except Exception:
                font = pygame.font.Font(None, size)
            self._fonts[key] = font
        return font

    def glyph(self, font: pygame.font.Font, ch: str, color: Color) -> pygame.Surface:
        key = (id(font), ch, tuple(color))
        surf = self._glyphs.get(key)
        if surf is None:
            surf = self._glyphs[key] = font.render(ch, True, color)
        return surf


class SpotlightMask:
    """Square overlay that is clear inside the circle and feathers to the outside colour."""

    def __init__(self, radius: int, feather: int, color: Color):
        self.radius = max(1, int(radius))
        self.feather = max(0, int(feather))
        self.color = tuple(color)
        size = self.radius * 2 + 1
        self.surface = pygame.Surface((size, size), pygame.SRCALPHA)
        self.surface.fill(self.color + (255,))
        xs, ys = np.mgrid[0:size, 0:size]
        dist = np.sqrt((xs - self.radius) ** 2 + (ys - self.radius) ** 2)
        inner = max(0, self.radius - self.feather)
        span = max(1, self.radius - inner)
        alpha = np.clip((dist - inner) / span, 0.0, 1.0) * 255
        pixels = pygame.surfarray.pixels_alpha(self.surface)
        pixels[:, :] = alpha.astype(np.uint8)
        del pixels

    def apply(self, surface: pygame.Surface, cx: float, cy: float) -> None:
        """Cover everything outside the circle centred at (cx, cy)."""
        w, h = surface.get_size()
        left = int(round(cx)) - self.radius
        top = int(round(cy)) - self.radius
        size = self.radius * 2 + 1
        surface.blit(self.surface, (left, top))
        if top > 0:
            surface.fill(self.color, pygame.Rect(0, 0, w, top))
        if top + size < h:
            surface.fill(self.color, pygame.Rect(0, top + size, w, h - top - size))
        if left > 0:
            surface.fill(self.color, pygame.Rect(0, top, left, size))
        if left + size < w:
            surface.fill(self.color, pygame.Rect(left + size, top, w - left - size, size))


class WorldRenderer:
    def __init__(self, config: Dict[str, Any], fonts: Optional[FontCache] = None):
        self.config = config
        self.fonts = fonts or FontCache()
        self.mask = SpotlightMask(
            config["spotlight_radius_px"], config["spotlight_feather_px"], config["outside_color"]
        )

    @property
    def letter_font(self) -> pygame.font.Font:
        return self.fonts.get(self.config["font_family"], int(self.config["font_size_px"]))

    def draw(self, surface: pygame.Surface, world: DiscoveryWorld, pointer: Pointer, debug: bool = False) -> None:
        surface.fill(self.config["bg_color"])
        self._draw_letters(surface, world, pointer)
        self._draw_capture_highlight(surface, world)
        if debug:
            self._draw_candidate_marks(surface, world)
        self.mask.apply(surface, pointer.x, pointer.y)
        self._draw_hold_ring(surface, world, pointer)
        self._draw_sentence(surface, world)

    def _draw_letters(self, surface: pygame.Surface, world: DiscoveryWorld, pointer: Pointer) -> None:
        font = self.letter_font
        ascent = font.get_ascent()
        amp = float(self.config["jitter_amplitude_px"])
        color = self.config["letter_color"]
        reach = self.mask.radius + max(world.layout.cell_w, world.layout.cell_h)
        for cell in world.grid.cells:
            if abs(cell.x - pointer.x) > reach or abs(cell.y - pointer.y) > reach:
                continue
            alpha = clamp(cell.fade, 0.0, 1.0)
            if alpha <= 0.0:
                continue
            dx, dy = jitter_offset(cell, amp)
            glyph = self.fonts.glyph(font, cell.char, color)
            glyph.set_alpha(int(alpha * 255))
            surface.blit(glyph, (cell.x + dx, cell.y + dy - ascent))

    def _draw_capture_highlight(self, surface: pygame.Surface, world: DiscoveryWorld) -> None:
        candidate = world.capture.candidate
        if candidate is None:
            return
        font = self.letter_font
        ascent = font.get_ascent()
        amp = float(self.config["jitter_amplitude_px"])
        alpha = int(lerp(0.1, 1.0, world.capture.progress) * 255)
        for cell in candidate.cells:
            dx, dy = jitter_offset(cell, amp)
            glyph = self.fonts.glyph(font, cell.char, self.config["highlight_color"])
            glyph.set_alpha(alpha)
            surface.blit(glyph, (cell.x + dx, cell.y + dy - ascent))

    def _draw_candidate_marks(self, surface: pygame.Surface, world: DiscoveryWorld) -> None:
        candidate = world.capture.candidate or world.debug.last_candidate
        if candidate is None:
            return
        for cell in candidate.cells:
            pygame.draw.circle(surface, DEBUG_MARK_COLOR, (int(cell.x), int(cell.y)), 2, 1)

    def _draw_hold_ring(self, surface: pygame.Surface, world: DiscoveryWorld, pointer: Pointer) -> None:
        progress = world.capture.progress
        if progress <= 0.0:
            return
        r = self.mask.radius + 6
        rect = pygame.Rect(0, 0, r * 2, r * 2)
        rect.center = (int(pointer.x), int(pointer.y))
        start = math.pi / 2
        pygame.draw.arc(surface, self.config["highlight_color"], rect, start, start + progress * 2 * math.pi, 3)

    def _draw_sentence(self, surface: pygame.Surface, world: DiscoveryWorld) -> None:
        text = world.sentence.text
        if not text:
            return
        font = self.fonts.get(self.config["font_family"], max(12, int(self.config["font_size_px"]) - 2))
        w, h = surface.get_size()
        max_w = w - 24
        # Keep the most recent words when the line overflows.
        while text and font.size(text)[0] > max_w:
            text = text.split(" ", 1)[1] if " " in text else text[1:]
        surface.blit(font.render(text, True, self.config["sentence_color"]), (12, h - font.get_height() - 10))


def debug_line(world: DiscoveryWorld) -> str:
    d = world.debug
    current = f" word:[{d.last_candidate.word}]" if d.last_candidate else ""
    cap = f" cap:{'ON' if world.capture.active else 'off'} p:{world.capture.progress:.2f}"
    return (
        f"inside:{d.include_count} candidates:{d.num_candidates} filtered:{d.num_filtered}"
        f"{current}{cap} placed:{len(world.placed_words)}"
    )


def draw_hud(surface: pygame.Surface, fonts: FontCache, lines) -> None:
    font = fonts.get("monospace", 14)
    y = 10
    for line in lines:
        surface.blit(font.render(line, True, HUD_COLOR), (12, y))
        y += font.get_linesize()


HELP_SECTIONS = [
    ("Core", [
        ("Space", "Pause / Resume"),
        ("R", "New letters + placements (sentence kept)"),
        ("Bksp", "Clear the sentence"),
        ("H/F3", "Toggle debug overlay"),
        ("F4", "Screenshot to 'frames/'"),
        ("F5", "PNG sequence on/off"),
        ("F6", "Start/stop video recording"),
    ]),
    ("Mouse", [
        ("Move", "Spotlight follows the pointer"),
        ("LMB", "Hold over a word to capture it"),
    ]),
    ("Exit", [
        ("Esc", "Quit"),
    ]),
]


def draw_help_overlay(surface: pygame.Surface, fonts: FontCache, font_name: Optional[str] = None) -> None:
    """Draw an in-app help window listing hotkeys. F2 toggles."""
    width, height = surface.get_size()
    pad = 16
    max_w = min(900, int(width * 0.8))
    max_h = min(700, int(height * 0.8))
    panel = pygame.Surface((max_w, max_h), pygame.SRCALPHA)
    panel.fill((0, 0, 0, 200))
    title_font = fonts.get(font_name, 28, bold=True)
    item_font = fonts.get("monospace", 18)

    y = pad
    panel.blit(title_font.render("Text Discovery - Help (F2 to close)", True, HUD_COLOR), (pad, y))
    y += 36
    for section, items in HELP_SECTIONS:
        panel.blit(title_font.render(section, True, (210, 210, 220)), (pad, y))
        y += 28
        for key, desc in items:
            panel.blit(item_font.render(f"{key:>6}  -  {desc}", True, (235, 235, 240)), (pad, y))
            y += 22
        y += 10

    dst = surface.get_rect()
    surface.blit(panel, (dst.centerx - max_w // 2, dst.centery - max_h // 2))
