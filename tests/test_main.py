"""
Tests for main.py – application initialization, argument parsing and the
responsive settings it derives from the window size.
"""

import pytest

from chicken_invaders.settings import settings_for_viewport
from chicken_invaders.state import GameState
from main import FRAME_TIME, ChickenInvadersApp, parse_args


# ── Argument parsing ───────────────────────────────────────────────────────


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.width == 800
        assert args.height == 600
        assert args.fullscreen is False
        assert args.debug is False
        assert args.seed is None
        assert args.max_wave is None
        assert args.scores_file == "highscore.json"

    def test_fullscreen_flag(self):
        args = parse_args(["--fullscreen"])
        assert args.fullscreen is True

    def test_debug_flag(self):
        args = parse_args(["--debug"])
        assert args.debug is True

    def test_window_size(self):
        args = parse_args(["--width", "1024", "--height", "768"])
        assert (args.width, args.height) == (1024, 768)

    def test_seed_and_max_wave(self):
        args = parse_args(["--seed", "7", "--max-wave", "10"])
        assert args.seed == 7
        assert args.max_wave == 10

    def test_scores_file(self):
        args = parse_args(["--scores-file", "/tmp/best.json"])
        assert args.scores_file == "/tmp/best.json"

    def test_non_integer_width_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--width", "wide"])


# ── Responsive settings ─────────────────────────────────────────────────────


class TestSettingsForViewport:
    def test_reference_size(self):
        s = settings_for_viewport(800, 600)
        assert (s.playfield.width, s.playfield.height) == (800, 600)
        assert s.player_speed == 350
        assert s.chicken_cols == 10
        assert s.chicken_rows == 4
        assert s.fire_rate == 150

    def test_large_screen_caps_columns(self):
        s = settings_for_viewport(1920, 1080)
        assert s.chicken_cols == 12
        assert s.bullet_speed == pytest.approx(500 * 1.8)

    def test_tiny_window_clamped(self):
        s = settings_for_viewport(100, 100)
        assert (s.playfield.width, s.playfield.height) == (320, 480)
        assert s.chicken_cols == 4
        assert s.egg_speed == pytest.approx(120 * 0.4)

    def test_huge_window_clamped(self):
        s = settings_for_viewport(5000, 5000)
        assert (s.playfield.width, s.playfield.height) == (1920, 1080)

    def test_max_wave_passed_through(self):
        assert settings_for_viewport(800, 600, max_wave=3).max_wave == 3


# ── ChickenInvadersApp (without pygame) ─────────────────────────────────────


class TestChickenInvadersApp:
    def test_app_defaults(self):
        app = ChickenInvadersApp()
        assert app.width == 800
        assert app.height == 600
        assert app.fullscreen is False
        assert app.debug is False
        assert app.running is False
        assert app.game.state == GameState.MENU

    def test_frame_time_constant(self):
        assert abs(FRAME_TIME - 1.0 / 60) < 1e-6

    def test_settings_follow_window(self):
        app = ChickenInvadersApp(width=1024, height=768, max_wave=4)
        assert app.settings.playfield.width == 1024
        assert app.settings.max_wave == 4

    def test_resize(self):
        app = ChickenInvadersApp()
        app.resize(200, 2000)
        assert (app.width, app.height) == (200, 2000)
        assert (app.settings.playfield.width, app.settings.playfield.height) == (320, 1080)

    def test_step_ignored_in_menu(self):
        app = ChickenInvadersApp()
        before = app.game.data
        app.step(16)
        assert app.game.data is before

    def test_step_ticks_the_game(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        app.step(16)
        assert app.game.data.chicken_move_timer == 16

    def test_step_fires_while_held(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        app.firing = True
        app.step(16)
        assert len(app.game.data.bullets) == 1


# ── Player movement ─────────────────────────────────────────────────────────


class TestPlayerMovement:
    def _playing_app(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        return app

    def test_idle_stays_put(self):
        app = self._playing_app()
        assert app._next_player_x(16) == app.game.data.player.x

    def test_keyboard_right(self):
        app = self._playing_app()
        app.move_direction = 1
        x = app.game.data.player.x
        assert app._next_player_x(16) == pytest.approx(x + 350 * 0.016)

    def test_keyboard_left_clamped_at_edge(self):
        app = self._playing_app()
        app.game.move_player(2, app.game.data.player.y)
        app.move_direction = -1
        assert app._next_player_x(16) == 0

    def test_keyboard_right_clamped_at_edge(self):
        app = self._playing_app()
        app.game.move_player(759, app.game.data.player.y)
        app.move_direction = 1
        assert app._next_player_x(16) == 800 - app.game.data.player.width

    def test_pointer_within_deadzone(self):
        app = self._playing_app()
        app.pointer_x = app.game.data.player.center_x + 3
        assert app._next_player_x(16) == app.game.data.player.x

    def test_pointer_far_away_limited_to_player_speed(self):
        app = self._playing_app()
        x = app.game.data.player.x
        app.pointer_x = 790
        assert app._next_player_x(16) == pytest.approx(x + 350 * 0.016)

    def test_pointer_overrides_keyboard(self):
        app = self._playing_app()
        app.move_direction = 1
        app.pointer_x = 10
        assert app._next_player_x(16) < app.game.data.player.x

    def test_step_moves_player(self):
        app = self._playing_app()
        x = app.game.data.player.x
        app.move_direction = -1
        app.step(16)
        assert app.game.data.player.x == pytest.approx(x - 350 * 0.016)


# ── Pause and restart ───────────────────────────────────────────────────────


class TestPauseAndRestart:
    def test_toggle_pause(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        app.toggle_pause()
        assert app.game.state == GameState.PAUSED
        app.toggle_pause()
        assert app.game.state == GameState.PLAYING

    def test_toggle_pause_in_menu_is_a_no_op(self):
        app = ChickenInvadersApp()
        app.toggle_pause()
        assert app.game.state == GameState.MENU

    def test_new_run_after_game_over(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        app.game.data.score = 300
        app.game.force_game_over()
        app.new_run()
        assert app.game.state == GameState.PLAYING
        assert app.game.data.score == 0
        assert app.game.data.high_score == 300

    def test_new_run_ignored_mid_game(self):
        app = ChickenInvadersApp()
        app.game.start(app.settings)
        app.game.data.score = 300
        app.new_run()
        assert app.game.data.score == 300
