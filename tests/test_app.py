"""Tests for the window app and its CLI (dummy SDL video driver)."""

import pygame
import pytest

from tribute import TributeApp, _parse_args, main
from tribute_scene import PAUSE_GLYPH, PLAY_GLYPH


def make_args(*argv):
    return _parse_args().parse_args(["--width", "320", "--height", "240", "--seed", "3", *argv])


@pytest.fixture
def app():
    app = TributeApp(make_args())
    yield app
    pygame.quit()


class TestParseArgs:
    def test_defaults(self):
        args = _parse_args().parse_args([])
        assert (args.width, args.height) == (1280, 720)
        assert args.fps == 60
        assert args.seed is None
        assert args.duration is None
        assert not args.fullscreen

    def test_overrides(self):
        args = make_args("--title", "Song", "-d", "2.5", "-v")
        assert args.title == "Song"
        assert args.duration == 2.5
        assert args.verbose


class TestHandleEvent:
    def test_click_on_button_toggles(self, app):
        pos = app.renderer.button_center
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)
        assert app.handle_event(event)
        assert app.animator.state.is_playing
        assert app.animator.play_button.text == PAUSE_GLYPH

    def test_click_elsewhere_ignored(self, app):
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(1, 1))
        app.handle_event(event)
        assert not app.animator.state.is_playing

    def test_right_click_ignored(self, app):
        pos = app.renderer.button_center
        app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=pos))
        assert app.animator.play_button.text == PLAY_GLYPH

    def test_space_toggles(self, app):
        event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
        app.handle_event(event)
        app.handle_event(event)
        assert app.animator.toggles == 2
        assert not app.animator.state.is_playing

    def test_escape_and_quit_stop_the_loop(self, app):
        assert not app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        assert not app.handle_event(pygame.event.Event(pygame.QUIT))


class TestRun:
    def test_run_for_duration(self, capsys):
        """A short timed run spawns leaves, then cleans up and prints a summary."""
        app = TributeApp(make_args("--duration", "0.2", "--fps", "120"))
        app.run()
        assert app.animator.spawned >= 1
        assert app.timers.pending == 0
        assert app.animator.leaves == []
        out = capsys.readouterr().out
        assert "leaves spawned" in out

    def test_main_rejects_bad_fps(self):
        with pytest.raises(SystemExit):
            main(["--fps", "0"])

    @pytest.mark.parametrize("duration", ["0", "-1.5"])
    def test_main_rejects_non_positive_duration(self, duration):
        """-d 0 is an error, not "run forever"."""
        with pytest.raises(SystemExit):
            main(["--duration", duration])
