"""
Song tribute page
----------------------------------------------
Falling leaves, a 50-bar waveform and a play/pause control in a pygame
window. Click the button (or press space) to switch the waveform tempo.

Keys (while running):
  Esc    - Quit
  Space  - Toggle play/pause
"""

import argparse
import logging
import random
import sys

import pygame
from pygame.locals import QUIT, MOUSEBUTTONDOWN, KEYDOWN, K_ESCAPE, K_SPACE

from tribute_animator import PageAnimator
from tribute_render import PageRenderer
from tribute_scene import build_page, DEFAULT_TITLE, DEFAULT_ARTIST
from tribute_timers import TimerQueue

logger = logging.getLogger("tribute")

# -----------------------------
# Configuration
# -----------------------------

WINDOW_SIZE = (1280, 720)
FPS = 60


# -----------------------------
# App
# -----------------------------

class TributeApp:
    def __init__(self, args):
        self.args = args
        pygame.init()
        pygame.display.set_caption(f"{args.title} - tribute")
        if args.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((args.width, args.height))
        self.clock = pygame.time.Clock()

        rng = random.Random(args.seed)
        self.page = build_page(args.title, args.artist)
        self.timers = TimerQueue()
        self.animator = PageAnimator(self.page, self.timers, rng=rng)
        self.renderer = PageRenderer(self.page, self.screen.get_size())
        logger.info("window %dx%d @ %d fps, seed=%s", *self.screen.get_size(), args.fps, args.seed)

    def handle_event(self, event):
        """Returns False when the app should quit."""
        if event.type == QUIT:
            return False
        if event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            if event.key == K_SPACE:
                self.animator.toggle_playback()
        elif event.type == MOUSEBUTTONDOWN and event.button == 1:
            if self.renderer.hit_button(event.pos):
                self.animator.toggle_playback()
        return True

    def run(self):
        limit_ms = int(self.args.duration * 1000) if self.args.duration is not None else None
        self.animator.start()
        # flush the zero-delay startup leaf before the first frame
        self.timers.advance(0)
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        running = False

                dt = self.clock.tick(self.args.fps)
                self.timers.advance(dt)

                self.renderer.draw(self.screen, self.timers.now_ms / 1000.0)
                pygame.display.flip()

                if limit_ms is not None and self.timers.now_ms >= limit_ms:
                    running = False
        finally:
            self.animator.stop()
            pygame.quit()

        secs = self.timers.now_ms / 1000.0
        state = "playing" if self.animator.state.is_playing else "paused"
        print(f"Ran {secs:.1f} s | leaves spawned: {self.animator.spawned} | "
              f"toggles: {self.animator.toggles} ({state})")


# -----------------------------
# CLI
# -----------------------------

def _parse_args():
    parser = argparse.ArgumentParser(description="Animated tribute page for a song.")
    parser.add_argument("--title", default=DEFAULT_TITLE,
                        help=f"Song title shown in the heading (default: {DEFAULT_TITLE})")
    parser.add_argument("--artist", default=DEFAULT_ARTIST,
                        help="Subtitle line under the title")
    parser.add_argument("--width", type=int, default=WINDOW_SIZE[0],
                        help=f"Window width (default: {WINDOW_SIZE[0]})")
    parser.add_argument("--height", type=int, default=WINDOW_SIZE[1],
                        help=f"Window height (default: {WINDOW_SIZE[1]})")
    parser.add_argument("-f", "--fullscreen", action="store_true",
                        help="Run fullscreen at the display's resolution.")
    parser.add_argument("--fps", type=int, default=FPS,
                        help=f"Frame rate cap (default: {FPS})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for leaf/bar randomness (default: random)")
    parser.add_argument("-d", "--duration", type=float, default=None,
                        help="Quit after this many seconds (default: run until closed)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every leaf spawn.")
    return parser


def main(argv=None):
    parser = _parse_args()
    # Ignore unknown args
    args, _ = parser.parse_known_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if args.duration is not None and args.duration <= 0:
        parser.error("--duration must be positive")

    TributeApp(args).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
