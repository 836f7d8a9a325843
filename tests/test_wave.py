"""
Tests for the wave director.

Covers formation stepping and reversal, egg-drop targeting, interval
scaling with difficulty and wave advancement including boss waves.
"""

import random

import pytest

from chicken_invaders.models.entity import Bullet, Chicken
from chicken_invaders.models.explosion import Explosion
from chicken_invaders.models.factory import EntityFactory
from chicken_invaders.models.wave import (
    WaveDirector,
    formation_margin,
    formation_step_down,
    formation_step_x,
    rows_for_wave,
)
from chicken_invaders.settings import Playfield, Settings
from chicken_invaders.state import GameData
from chicken_invaders.utils.functions import formation_bounds


SETTINGS = Settings(playfield=Playfield(800, 600), chicken_speed=30, egg_speed=120,
                    chicken_rows=4, chicken_cols=8)


@pytest.fixture
def director():
    return WaveDirector(factory=EntityFactory(rng=random.Random(42)))


def chicken_at(x, y=100, cid="c", width=30, height=24):
    return Chicken(id=cid, x=x, y=y, width=width, height=height)


# ── Intervals ───────────────────────────────────────────────────────────────


class TestIntervals:
    def test_move_interval_wave_one(self, director):
        assert director.move_interval(1, SETTINGS) == pytest.approx(40.0)

    def test_move_interval_shrinks_with_waves(self, director):
        assert director.move_interval(5, SETTINGS) < director.move_interval(1, SETTINGS)

    def test_frozen_chickens_never_move(self, director):
        frozen = Settings(chicken_speed=0)
        assert director.move_interval(1, frozen) == float("inf")

    def test_egg_interval(self, director):
        assert director.egg_interval(1) == pytest.approx(3000)
        assert director.egg_interval(3) == pytest.approx(3000 / 1.3)


# ── Formation movement ──────────────────────────────────────────────────────


class TestFormation:
    def test_no_step_before_interval(self, director):
        data = GameData(chickens=[chicken_at(200)])
        assert director.update_formation(data, 39, SETTINGS) is False
        assert data.chickens[0].x == 200
        assert data.chicken_move_timer == 39

    def test_one_step_then_timer_resets(self, director):
        data = GameData(chickens=[chicken_at(200)])
        assert director.update_formation(data, 40, SETTINGS) is True
        assert data.chickens[0].x == 200 + formation_step_x(800)
        assert data.chicken_move_timer == 0

    def test_moves_left_when_direction_negative(self, director):
        data = GameData(chickens=[chicken_at(400)], chicken_direction=-1)
        director.step_formation(data, SETTINGS)
        assert data.chickens[0].x == 400 - formation_step_x(800)

    def test_reverses_and_descends_at_right_edge(self, director):
        margin = formation_margin(800)
        x = 800 - margin - 30 - 5   # right edge 5px short of the margin
        data = GameData(chickens=[chicken_at(x), chicken_at(x - 100, cid="d")])
        director.step_formation(data, SETTINGS)
        assert data.chicken_direction == -1
        assert data.chickens[0].x == x
        assert data.chickens[0].y == 100 + formation_step_down(600)
        assert data.chickens[1].y == 100 + formation_step_down(600)

    def test_reverses_at_left_edge(self, director):
        data = GameData(chickens=[chicken_at(50)], chicken_direction=-1)
        director.step_formation(data, SETTINGS)
        assert data.chicken_direction == 1
        assert data.chickens[0].x == 50

    def test_empty_formation_is_a_no_op(self, director):
        data = GameData()
        director.step_formation(data, SETTINGS)
        assert data.chicken_direction == 1

    def test_formation_stays_inside_margins(self, director):
        data = GameData(chickens=director.first_wave(SETTINGS))
        margin = formation_margin(800)
        for _ in range(200):
            before = data.chicken_direction
            director.step_formation(data, SETTINGS)
            if data.chicken_direction == before:
                left, right = formation_bounds(data.chickens)
                assert left >= margin
                assert right <= 800 - margin
            assert data.chicken_direction in (-1, 1)


# ── Egg drops ───────────────────────────────────────────────────────────────


class TestEggDrop:
    def test_no_egg_before_interval(self, director):
        data = GameData(chickens=[chicken_at(200)])
        assert director.update_egg_drop(data, 2999, SETTINGS) is None
        assert data.eggs == []

    def test_egg_dropped_from_bottom_centre(self, director):
        data = GameData(chickens=[chicken_at(200)])
        egg = director.update_egg_drop(data, 3000, SETTINGS)
        assert egg is not None
        assert data.eggs == [egg]
        assert egg.center_x == 215
        assert egg.y == 124
        assert egg.speed == 120
        assert data.egg_drop_timer == 0

    def test_timer_resets_without_chickens(self, director):
        data = GameData()
        assert director.update_egg_drop(data, 5000, SETTINGS) is None
        assert data.egg_drop_timer == 0

    def test_dropper_is_among_three_nearest(self, director):
        xs = [0, 100, 200, 300, 400, 500, 600, 700]
        data = GameData(chickens=[chicken_at(x, cid=f"c{x}") for x in xs])
        data.player.x = 380
        data.player.width = 40   # centre 400 -> nearest 400, 300, 500
        chosen = {director.pick_egg_dropper(data).id for _ in range(200)}
        assert chosen <= {"c300", "c400", "c500"}
        assert len(chosen) == 3


# ── Wave advancement ────────────────────────────────────────────────────────


class TestWaveAdvance:
    def test_rows_grow_and_cap(self):
        assert rows_for_wave(2, 4) == 4
        assert rows_for_wave(4, 4) == 5
        assert rows_for_wave(8, 4) == 6
        assert rows_for_wave(40, 4) == 6

    def test_advance_to_boss_wave(self, director):
        data = GameData(wave=4)
        director.advance(data, SETTINGS)
        assert data.wave == 5
        assert len(data.chickens) == 2
        for c in data.chickens:
            assert c.hp == c.max_hp == 8
            assert c.points == 300

    def test_advance_to_grid_wave(self, director):
        data = GameData(wave=3)
        director.advance(data, SETTINGS)
        assert data.wave == 4
        assert len(data.chickens) == 5 * 8

    def test_advance_clears_projectiles_and_resets_timers(self, director):
        data = GameData(
            wave=1,
            bullets=[Bullet(id="b", x=0, y=0, width=6, height=12)],
            eggs=[Bullet(id="e", x=0, y=0, width=6, height=12)],
            explosions=[Explosion(id="x", x=0, y=0, width=50, height=50)],
            chicken_direction=-1,
            chicken_move_timer=12.0,
            egg_drop_timer=99.0,
        )
        director.advance(data, SETTINGS)
        assert data.bullets == []
        assert data.eggs == []
        assert data.explosions == []
        assert data.chicken_direction == 1
        assert data.chicken_move_timer == 0
        assert data.egg_drop_timer == 0

    def test_first_wave_uses_configured_rows(self, director):
        chickens = director.first_wave(SETTINGS)
        assert len(chickens) == 4 * 8
        assert min(c.x for c in chickens) == 80
        assert min(c.y for c in chickens) == 90
