"""
Tests for shared helpers.

Covers rectangle collision, formation bounds, the bottom-line check and
wave difficulty scaling.
"""

import pytest

from chicken_invaders.models.entity import Bullet, Chicken
from chicken_invaders.utils.functions import (
    clamp,
    collides,
    formation_bounds,
    reached_bottom,
    wave_difficulty,
)


def make_chicken(x, y, width=25, height=20, cid="c"):
    return Chicken(id=cid, x=x, y=y, width=width, height=height)


def make_bullet(x, y, width=6, height=12):
    return Bullet(id="b", x=x, y=y, width=width, height=height)


# ── Collision ───────────────────────────────────────────────────────────────


class TestCollision:
    def test_bullet_overlapping_chicken_hits(self):
        bullet = make_bullet(100, 100)
        assert collides(bullet, make_chicken(98, 100))

    def test_bullet_beside_chicken_misses(self):
        bullet = make_bullet(100, 100)
        assert not collides(bullet, make_chicken(200, 100))

    @pytest.mark.parametrize("cx, cy", [
        (98, 100), (200, 100), (104, 100), (105, 100), (80, 90),
        (100, 110), (100, 111), (96, 85), (75, 108), (101, 96),
    ])
    def test_symmetric(self, cx, cy):
        bullet = make_bullet(100, 100)
        chicken = make_chicken(cx, cy)
        assert collides(bullet, chicken) == collides(chicken, bullet)

    def test_grazing_contact_is_forgiven(self):
        # 3px of overlap is less than both 2px margins combined
        a = make_chicken(0, 0, 10, 10)
        b = make_chicken(7, 0, 10, 10)
        assert not collides(a, b)

    def test_deep_overlap_hits(self):
        a = make_chicken(0, 0, 10, 10)
        b = make_chicken(3, 3, 10, 10)
        assert collides(a, b)

    def test_touching_edges_do_not_hit(self):
        a = make_chicken(0, 0, 10, 10)
        b = make_chicken(10, 0, 10, 10)
        assert not collides(a, b)

    def test_custom_margin(self):
        a = make_chicken(0, 0, 10, 10)
        b = make_chicken(9, 0, 10, 10)
        assert collides(a, b, margin=0)
        assert not collides(a, b)


# ── Formation helpers ───────────────────────────────────────────────────────


class TestFormationBounds:
    def test_empty_formation_is_zero_sized(self):
        assert formation_bounds([]) == (0.0, 0.0)

    def test_bounds_span_leftmost_and_rightmost(self):
        chickens = [make_chicken(50, 0), make_chicken(300, 40, width=30)]
        assert formation_bounds(chickens) == (50, 330)

    def test_single_chicken(self):
        assert formation_bounds([make_chicken(10, 0)]) == (10, 35)


class TestReachedBottom:
    def test_far_from_bottom(self):
        assert not reached_bottom([make_chicken(0, 100)], 600)

    def test_within_margin_of_bottom(self):
        # bottom edge at 555 >= 600 - 50
        assert reached_bottom([make_chicken(0, 535)], 600)

    def test_exactly_on_the_line(self):
        assert reached_bottom([make_chicken(0, 530)], 600)
        assert not reached_bottom([make_chicken(0, 529)], 600)

    def test_no_chickens(self):
        assert not reached_bottom([], 600)


# ── Difficulty ──────────────────────────────────────────────────────────────


class TestWaveDifficulty:
    def test_wave_one_is_baseline(self):
        assert wave_difficulty(1) == 1.0

    def test_fifteen_percent_per_wave(self):
        assert wave_difficulty(3) == pytest.approx(1.3)
        assert wave_difficulty(11) == pytest.approx(2.5)

    def test_monotonic(self):
        values = [wave_difficulty(w) for w in range(1, 20)]
        assert values == sorted(values)


class TestClamp:
    def test_clamp(self):
        assert clamp(-5, 0, 10) == 0
        assert clamp(15, 0, 10) == 10
        assert clamp(5, 0, 10) == 5
