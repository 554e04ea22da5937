"""Shared fixtures for the tribute tests (headless pygame)."""

import os
import random
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Add repo root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tribute_animator import PageAnimator
from tribute_scene import build_page
from tribute_timers import TimerQueue


@pytest.fixture
def page():
    return build_page()


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def animator(page, timers):
    return PageAnimator(page, timers, rng=random.Random(1234))
