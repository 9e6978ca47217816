#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text Discovery
--------------
A grid of drifting, mutating letters seen through a spotlight that follows the
mouse. Hold the left button over a word to capture it into the sentence.
F2 shows the hotkeys.
"""
from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, List

import pygame

from word_discovery.recording import PngSequenceRecorder, VideoRecorder, save_screenshot
from word_discovery.render import FontCache, WorldRenderer, debug_line, draw_help_overlay, draw_hud
from word_discovery.settings import load_config, resolve_path
from word_discovery.words import DEFAULT_WORDS, load_words_from_file
from word_discovery.world import DiscoveryWorld, Pointer

LOG = logging.getLogger("text_discovery")

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(SCRIPT_DIR, "config.json")
DEFAULT_WORDS_FILE = "words.txt"
CONFIG: Dict = load_config(None)
WORDS_FILE_PATH = os.path.join(SCRIPT_DIR, DEFAULT_WORDS_FILE)


def prepare_runtime_config(
    config_path: str | None = None,
    output_root: str | None = None,
    words_file_override: str | None = None,
    seed_override: str | None = None,
) -> None:
    """Load config/paths based on CLI args or defaults."""

    global CONFIG, WORDS_FILE_PATH

    config_path = config_path or DEFAULT_CONFIG_PATH
    config_dir = os.path.dirname(os.path.abspath(config_path))
    output_dir = os.path.abspath(output_root) if output_root else config_dir

    CONFIG = load_config(config_path)
    CONFIG["record_dir"] = resolve_path(CONFIG.get("record_dir") or "frames_out", output_dir)
    CONFIG["save_frames_dir"] = resolve_path(CONFIG.get("save_frames_dir") or "frames", output_dir)
    if seed_override:
        CONFIG["seed"] = seed_override

    words_source = words_file_override or CONFIG.get("words_file") or DEFAULT_WORDS_FILE
    WORDS_FILE_PATH = resolve_path(words_source, config_dir) or os.path.join(config_dir, DEFAULT_WORDS_FILE)


def load_dictionary() -> List[str]:
    words = load_words_from_file(WORDS_FILE_PATH)
    if words:
        LOG.info("Loaded %d words from %s", len(words), WORDS_FILE_PATH)
        return words
    LOG.info("Words file missing or empty (%s); using the built-in list", WORDS_FILE_PATH)
    return list(DEFAULT_WORDS)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Text Discovery")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to a JSON config file")
    parser.add_argument(
        "--output-dir",
        help="Base directory for screenshots/recordings (overrides record/save paths)",
    )
    parser.add_argument("--words-file", help="Optional override for the dictionary words file")
    parser.add_argument("--seed", help="Seed for a reproducible session")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging verbosity (e.g. DEBUG, INFO, WARNING)",
    )
    return parser.parse_args()


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((CONFIG["width"], CONFIG["height"]), pygame.DOUBLEBUF)
    pygame.display.set_caption("Text Discovery")
    clock = pygame.time.Clock()

    world = DiscoveryWorld(CONFIG, load_dictionary())
    fonts = FontCache()
    renderer = WorldRenderer(CONFIG, fonts)
    pointer = Pointer(CONFIG["width"] / 2, CONFIG["height"] / 2, False)

    png_frames = PngSequenceRecorder(CONFIG["record_dir"], CONFIG["record_scale"])
    video = VideoRecorder(CONFIG["record_dir"], CONFIG["fps"], CONFIG["video_codec"], CONFIG["record_scale"])

    paused = False
    debug = bool(CONFIG["debug_overlay"])
    help_visible = False
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE: running = False
                elif event.key == pygame.K_SPACE: paused = not paused
                elif event.key == pygame.K_F2: help_visible = not help_visible
                elif event.key in (pygame.K_F3, pygame.K_h): debug = not debug
                elif event.key == pygame.K_F4:
                    save_screenshot(screen, CONFIG["save_frames_dir"], CONFIG["record_scale"])
                elif event.key == pygame.K_F5: png_frames.toggle()
                elif event.key == pygame.K_F6: video.toggle()
                elif event.key == pygame.K_r:
                    world.reset()
                    LOG.info("Grid reset (%d placed words)", len(world.placed_words))
                elif event.key == pygame.K_BACKSPACE:
                    world.sentence.clear()
            elif event.type == pygame.MOUSEMOTION:
                pointer.x, pointer.y = event.pos
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                pointer.x, pointer.y = event.pos
                pointer.down = True
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                pointer.down = False
            elif event.type == pygame.WINDOWLEAVE:
                pointer.down = False

        dt = min(float(CONFIG["max_frame_dt"]), clock.tick(CONFIG["fps"]) / 1000.0)
        if not paused:
            world.tick(dt, pointer)

        renderer.draw(screen, world, pointer, debug=debug)
        png_frames.write(screen)
        video.write(screen)

        if help_visible:
            draw_help_overlay(screen, fonts, CONFIG.get("font_family"))
        if debug:
            hud = [f"FPS:{clock.get_fps():5.1f}{'  PAUSED' if paused else ''}", debug_line(world)]
            rec = [name for name, on in (("PNG", png_frames.active), ("VIDEO", video.active)) if on]
            if rec:
                hud[0] += " REC[" + "+".join(rec) + "]"
            draw_hud(screen, fonts, hud)

        pygame.display.flip()

    video.stop()
    if world.sentence.words:
        LOG.info("Final sentence: %s", world.sentence.text)
    pygame.quit()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    prepare_runtime_config(args.config, args.output_dir, args.words_file, args.seed)
    main()
