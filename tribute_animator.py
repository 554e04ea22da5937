"""
Page animator
----------------------------------------------
Falling leaves, the 50-bar waveform and the play/pause control.

Everything runs on one TimerQueue, so callbacks never overlap and the
shared playback flag needs no locking.
"""

import logging
import random
from dataclasses import dataclass

from tribute_scene import (
    Element,
    LEAVES_ID,
    WAVEFORM_ID,
    PLAY_BUTTON_ID,
    PLAY_GLYPH,
    PAUSE_GLYPH,
    PAUSED_GRADIENT,
    PLAYING_GRADIENT,
)
from tribute_timers import TimerHandle

logger = logging.getLogger(__name__)

# -------- Leaves --------

LEAF_SPAWN_INTERVAL_MS = 2000
LEAF_LIFETIME_MS = 25000
INITIAL_LEAVES = 10
INITIAL_LEAF_STAGGER_MS = 500

LEAF_LEFT_PCT = (0.0, 100.0)
LEAF_DELAY_S = (0.0, 15.0)
LEAF_DURATION_S = (10.0, 20.0)

# -------- Waveform --------

WAVEFORM_BARS = 50
BAR_SLOT_PCT = 2
BAR_DELAY_S = (0.0, 2.0)
BAR_DURATION_S = (1.5, 2.5)

PLAYING_BAR_DURATION_S = 0.5
PAUSED_BAR_DURATION_S = 2.0


def uniform(rng, bounds):
    """Half-open [lo, hi) draw, like Math.random() * span + lo."""
    lo, hi = bounds
    return lo + rng.random() * (hi - lo)


@dataclass
class PlaybackState:
    is_playing: bool = False


@dataclass(eq=False)
class Leaf:
    element: Element
    removal: TimerHandle = None

    @property
    def alive(self):
        return self.element.parent is not None

    def expire(self):
        self.element.remove()


class PageAnimator:
    def __init__(self, page, timers, rng=None, state=None):
        # resolved once; a page without these can't be animated
        self.leaves_container = page.require(LEAVES_ID)
        self.waveform = page.require(WAVEFORM_ID)
        self.play_button = page.require(PLAY_BUTTON_ID)

        self.timers = timers
        self.rng = rng or random.Random()
        self.state = state or PlaybackState()

        self.leaves = []
        self.spawned = 0
        self.toggles = 0
        self._spawn_timer = None
        self._startup_timers = []

    @property
    def bars(self):
        return self.waveform.find_all("bar")

    @property
    def running(self):
        return self._spawn_timer is not None and self._spawn_timer.active

    # -------------------------
    # Leaves
    # -------------------------

    def spawn_leaf(self):
        rng = self.rng
        el = Element("div", class_name="leaf", style={
            "left": uniform(rng, LEAF_LEFT_PCT),
            "animation_delay": uniform(rng, LEAF_DELAY_S),
            "animation_duration": uniform(rng, LEAF_DURATION_S),
            "animation_start": self.timers.now_ms / 1000.0,
        })
        self.leaves_container.append_child(el)

        leaf = Leaf(el)
        leaf.removal = self.timers.set_timeout(LEAF_LIFETIME_MS, self._expire_leaf, leaf)
        self.leaves.append(leaf)
        self.spawned += 1
        logger.debug("leaf #%d at %.1f%% (%d live)", self.spawned, el.style["left"], len(self.leaves))
        return leaf

    def _expire_leaf(self, leaf):
        leaf.expire()
        self.leaves.remove(leaf)

    def cancel_leaf(self, leaf):
        """Remove one leaf early, together with its removal timer."""
        leaf.removal.cancel()
        leaf.expire()
        if leaf in self.leaves:
            self.leaves.remove(leaf)

    # -------------------------
    # Waveform
    # -------------------------

    def init_waveform(self):
        """Append WAVEFORM_BARS bars in slot order. Not guarded against a second call."""
        rng = self.rng
        bars = []
        for i in range(WAVEFORM_BARS):
            bar = Element("div", class_name="bar", style={
                "left": i * BAR_SLOT_PCT,
                "animation_delay": uniform(rng, BAR_DELAY_S),
                "animation_duration": uniform(rng, BAR_DURATION_S),
                "animation_start": self.timers.now_ms / 1000.0,
            })
            bars.append(self.waveform.append_child(bar))
        return bars

    # -------------------------
    # Playback
    # -------------------------

    def toggle_playback(self):
        self.state.is_playing = not self.state.is_playing
        playing = self.state.is_playing

        self.play_button.text = PAUSE_GLYPH if playing else PLAY_GLYPH
        self.play_button.style["background"] = PLAYING_GRADIENT if playing else PAUSED_GRADIENT

        # overwrites the random per-bar durations for good
        duration = PLAYING_BAR_DURATION_S if playing else PAUSED_BAR_DURATION_S
        for bar in self.bars:
            bar.style["animation_duration"] = duration

        self.toggles += 1
        logger.info("playback %s", "playing" if playing else "paused")
        return playing

    # -------------------------
    # Lifecycle
    # -------------------------

    def start(self):
        if self.running:
            logger.warning("animator already running; start() ignored")
            return
        # a restart after stop() keeps the bars it already has
        if not self.bars:
            self.init_waveform()
        self._startup_timers = [
            self.timers.set_timeout(i * INITIAL_LEAF_STAGGER_MS, self.spawn_leaf)
            for i in range(INITIAL_LEAVES)
        ]
        self._spawn_timer = self.timers.set_interval(LEAF_SPAWN_INTERVAL_MS, self.spawn_leaf)
        logger.info("animator started: %d bars, leaf every %d ms", WAVEFORM_BARS, LEAF_SPAWN_INTERVAL_MS)

    def stop(self):
        """Cancel every timer this animator owns and clear the live leaves."""
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
        for handle in self._startup_timers:
            handle.cancel()
        self._startup_timers = []
        for leaf in self.leaves:
            leaf.removal.cancel()
            leaf.expire()
        cleared = len(self.leaves)
        self.leaves = []
        logger.info("animator stopped: %d leaves spawned, %d cleared", self.spawned, cleared)
