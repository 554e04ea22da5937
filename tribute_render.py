"""
Page renderer
----------------------------------------------
Draws the tribute page with pygame. Leaves follow a one-shot "fall"
keyframe, bars an infinite alternating "wave"; both are read from the
element styles the animator writes.
"""

import math

import numpy as np
import pygame

from tribute_scene import LEAVES_ID, WAVEFORM_ID, PLAY_BUTTON_ID, PAUSE_GLYPH


# -------- Layout & colours --------

BG_TOP = (18, 10, 32)
BG_BOTTOM = (92, 38, 24)
TEXT_MAIN = (255, 236, 210)
TEXT_SUB = (230, 180, 140)

LEAF_COLORS = [
    (214, 96, 38),
    (232, 142, 44),
    (190, 58, 34),
    (240, 190, 70),
    (156, 84, 40),
]
LEAF_SIZE = 18
LEAF_SWAY_PX = 40

WAVE_WIDTH_FRAC = 0.7
WAVE_BASELINE_FRAC = 0.66
BAR_MIN_H = 12
BAR_MAX_H = 110
BAR_FILL_FRAC = 0.6
BAR_COLOR_LOW = (255, 140, 60)
BAR_COLOR_HIGH = (255, 220, 120)

BUTTON_RADIUS = 42
BUTTON_Y_FRAC = 0.83
GLYPH_COLOR = (255, 255, 255)


# -------- Utility functions --------

def blend(c1, c2, a):
    """Blend two RGB colours, a in [0,1] toward c2."""
    return tuple(int((1 - a) * c1[i] + a * c2[i]) for i in range(3))


def animation_progress(elapsed_s, delay_s, duration_s, infinite=False):
    """
    Fraction of the current iteration, or None while the animation is
    still in its delay (or, for one-shot animations, already finished).
    """
    t = elapsed_s - delay_s
    if t < 0 or duration_s <= 0:
        return None
    if not infinite and t >= duration_s:
        return None
    return (t % duration_s) / duration_s


def leaf_transform(progress, left_pct, width, height):
    """fall keyframes: from above the top edge to below the bottom, one full turn."""
    x = left_pct / 100.0 * width + LEAF_SWAY_PX * math.sin(progress * 4 * math.pi)
    y = -0.1 * height + progress * 1.2 * height
    angle = progress * 360.0
    return x, y, angle


def bar_heights(elapsed_s, delays, durations, low=BAR_MIN_H, high=BAR_MAX_H):
    """
    wave keyframes, alternate direction: low -> high over one duration,
    back down over the next. Bars still in their delay sit at low.
    """
    delays = np.asarray(delays, dtype=np.float64)
    durations = np.asarray(durations, dtype=np.float64)
    t = np.clip(elapsed_s - delays, 0.0, None)
    s = 0.5 - 0.5 * np.cos(np.pi * t / durations)
    return low + (high - low) * s


def vertical_gradient(size, top, bottom):
    w, h = size
    a = np.linspace(0.0, 1.0, h)[None, :, None]
    top = np.array(top, dtype=np.float64)[None, None, :]
    bottom = np.array(bottom, dtype=np.float64)[None, None, :]
    pixels = (1.0 - a) * top + a * bottom
    pixels = np.broadcast_to(pixels, (w, h, 3)).astype(np.uint8)
    return pygame.surfarray.make_surface(pixels)


def leaf_polygon(cx, cy, angle_deg, size=LEAF_SIZE):
    """Leaf-shaped ellipse rotated about its centre."""
    a = math.radians(angle_deg)
    ca, sa = math.cos(a), math.sin(a)
    pts = []
    for k in range(12):
        th = k / 12.0 * 2 * math.pi
        px = size * math.cos(th)
        py = size * 0.4 * math.sin(th)
        pts.append((cx + px * ca - py * sa, cy + px * sa + py * ca))
    return pts


# -------- Renderer --------

class PageRenderer:
    def __init__(self, page, size):
        self.page = page
        self.width, self.height = size
        self.leaves = page.require(LEAVES_ID)
        self.waveform = page.require(WAVEFORM_ID)
        self.button = page.require(PLAY_BUTTON_ID)

        if not pygame.font.get_init():
            pygame.font.init()
        self.font_title = pygame.font.SysFont("dejavusans", 56, bold=True)
        self.font_sub = pygame.font.SysFont("dejavusans", 24)
        self.background = vertical_gradient(size, BG_TOP, BG_BOTTOM)

    @property
    def button_center(self):
        return (self.width // 2, int(self.height * BUTTON_Y_FRAC))

    @property
    def button_rect(self):
        cx, cy = self.button_center
        return pygame.Rect(cx - BUTTON_RADIUS, cy - BUTTON_RADIUS, 2 * BUTTON_RADIUS, 2 * BUTTON_RADIUS)

    def hit_button(self, pos):
        cx, cy = self.button_center
        return math.hypot(pos[0] - cx, pos[1] - cy) <= BUTTON_RADIUS

    # -------------------------
    # Drawing
    # -------------------------

    def draw(self, surface, now_s):
        surface.blit(self.background, (0, 0))
        self.draw_leaves(surface, now_s)
        self.draw_heading(surface)
        self.draw_waveform(surface, now_s)
        self.draw_button(surface)

    def draw_heading(self, surface):
        title = self.font_title.render(self.page.title, True, TEXT_MAIN)
        sub = self.font_sub.render(self.page.artist, True, TEXT_SUB)
        y = int(self.height * 0.18)
        surface.blit(title, title.get_rect(center=(self.width // 2, y)))
        surface.blit(sub, sub.get_rect(center=(self.width // 2, y + 50)))

    def draw_leaves(self, surface, now_s):
        for el in self.leaves.children:
            st = el.style
            p = animation_progress(now_s - st.get("animation_start", 0.0),
                                   st["animation_delay"], st["animation_duration"])
            if p is None:
                continue
            x, y, angle = leaf_transform(p, st["left"], self.width, self.height)
            color = LEAF_COLORS[int(st["left"] * 7) % len(LEAF_COLORS)]
            pygame.draw.polygon(surface, color, leaf_polygon(x, y, angle))

    def draw_waveform(self, surface, now_s):
        bars = self.waveform.children
        if not bars:
            return
        starts = np.array([b.style.get("animation_start", 0.0) for b in bars])
        heights = bar_heights(
            now_s - starts,
            [b.style["animation_delay"] for b in bars],
            [b.style["animation_duration"] for b in bars],
        )
        strip_w = self.width * WAVE_WIDTH_FRAC
        x0 = (self.width - strip_w) / 2.0
        baseline = int(self.height * WAVE_BASELINE_FRAC)
        slot_w = strip_w / len(bars)
        bar_w = max(1, int(slot_w * BAR_FILL_FRAC))
        for bar, h in zip(bars, heights):
            x = int(x0 + bar.style["left"] / 100.0 * strip_w)
            level = (h - BAR_MIN_H) / float(BAR_MAX_H - BAR_MIN_H)
            rect = pygame.Rect(x, baseline - int(h), bar_w, int(h))
            pygame.draw.rect(surface, blend(BAR_COLOR_LOW, BAR_COLOR_HIGH, level), rect,
                             border_radius=bar_w // 2)

    def draw_button(self, surface):
        cx, cy = self.button_center
        top, bottom = self.button.style["background"]
        r = BUTTON_RADIUS
        for dy in range(-r, r + 1):
            half = int(math.sqrt(max(0, r * r - dy * dy)))
            color = blend(top, bottom, (dy + r) / (2.0 * r))
            pygame.draw.line(surface, color, (cx - half, cy + dy), (cx + half, cy + dy))

        if self.button.text == PAUSE_GLYPH:
            w, h = r // 4, r
            pygame.draw.rect(surface, GLYPH_COLOR, (cx - w - 4, cy - h // 2, w, h))
            pygame.draw.rect(surface, GLYPH_COLOR, (cx + 4, cy - h // 2, w, h))
        else:
            s = r // 2
            pygame.draw.polygon(surface, GLYPH_COLOR,
                                [(cx - s // 2, cy - s), (cx - s // 2, cy + s), (cx + s, cy)])
