"""
Core game logic for Chicken Invaders.

``Simulation`` is the state machine: every command maps a ``GameData``
to the next ``GameData`` without touching its input.  ``Game`` is the
shell around it that owns the random source, the clock, the latest
settings and the high-score store.

A tick runs in two explicit phases:

1. ``resolve_tick`` - power-up decay, movement, formation and egg timers,
   and collision resolution, in that fixed order;
2. ``evaluate_outcome`` - wave clear (advance, or victory) takes
   precedence over the lose check.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from chicken_invaders.config import (
    MAX_ELAPSED_MS,
    PLAYER_BOTTOM_OFFSET,
    PLAYER_BOTTOM_RATIO,
    PLAYER_BULLET_SPEED,
    PLAYER_EXPLOSION_SIZE,
    PLAYER_HEIGHT_RATIO,
    PLAYER_MAX_HEIGHT,
    PLAYER_MAX_WIDTH,
    PLAYER_START_LIVES,
    PLAYER_WIDTH_RATIO,
    POWER_UP_DROP_CHANCE,
    POWER_UP_FALL_SPEED,
)
from chicken_invaders.models.entity import Chicken, Player
from chicken_invaders.models.factory import EntityFactory
from chicken_invaders.models.power_up import PowerUpSystem
from chicken_invaders.models.wave import WaveDirector
from chicken_invaders.settings import Settings
from chicken_invaders.state import TERMINAL_STATES, GameData, GameState
from chicken_invaders.ui.high_scores import ScoreStore
from chicken_invaders.utils.commands import (
    AdvanceWave,
    Command,
    ForceGameOver,
    MovePlayer,
    Pause,
    Restart,
    Resume,
    Shoot,
    Start,
    Tick,
)
from chicken_invaders.utils.functions import clamp, collides, reached_bottom

logger = logging.getLogger(__name__)


# ── State machine ───────────────────────────────────────────────────────────


@dataclass
class Simulation:
    """Pure transitions over ``GameData``.

    Each public transition returns a new aggregate; commands that do not
    apply in the current phase return the input unchanged.
    """

    factory: EntityFactory = field(default_factory=EntityFactory)
    power_ups: PowerUpSystem = field(default_factory=PowerUpSystem)
    waves: WaveDirector = field(init=False)

    def __post_init__(self) -> None:
        self.waves = WaveDirector(factory=self.factory)

    @classmethod
    def seeded(cls, rng: random.Random) -> Simulation:
        return cls(factory=EntityFactory(rng=rng))

    # ── Dispatch ────────────────────────────────────────────────────────

    def apply(self, data: GameData, command: Command) -> GameData:
        """Route *command* to its transition.  Unknown commands are ignored."""
        if isinstance(command, Tick):
            return self.tick(data, command.elapsed_ms, command.settings)
        if isinstance(command, MovePlayer):
            return self.move_player(data, command.x, command.y)
        if isinstance(command, Shoot):
            return self.shoot(data, command.now_ms, command.fire_rate)
        if isinstance(command, Start):
            return self.start(data, command.settings)
        if isinstance(command, Pause):
            return self.pause(data)
        if isinstance(command, Resume):
            return self.resume(data)
        if isinstance(command, Restart):
            return self.restart(data)
        if isinstance(command, ForceGameOver):
            return self.force_game_over(data)
        if isinstance(command, AdvanceWave):
            return self.advance_wave(data, command.settings)
        logger.debug("Ignoring unrecognised command %r", command)
        return data

    # ── Phase transitions ───────────────────────────────────────────────

    def start(self, data: GameData, settings: Settings) -> GameData:
        """MENU -> PLAYING with a fresh player and the first wave."""
        if data.phase is not GameState.MENU:
            return data
        pf = settings.playfield
        player = Player(
            id="player",
            x=pf.width / 2 - PLAYER_MAX_WIDTH / 2,
            y=pf.height - max(PLAYER_BOTTOM_OFFSET, pf.height * PLAYER_BOTTOM_RATIO),
            width=min(PLAYER_MAX_WIDTH, pf.width * PLAYER_WIDTH_RATIO),
            height=min(PLAYER_MAX_HEIGHT, pf.height * PLAYER_HEIGHT_RATIO),
            lives=PLAYER_START_LIVES,
        )
        logger.info("Run started on a %gx%g playfield", pf.width, pf.height)
        return GameData(
            player=player,
            chickens=self.waves.first_wave(settings),
            high_score=data.high_score,
            phase=GameState.PLAYING,
        )

    def pause(self, data: GameData) -> GameData:
        if data.phase is not GameState.PLAYING:
            return data
        nxt = data.copy()
        nxt.phase = GameState.PAUSED
        return nxt

    def resume(self, data: GameData) -> GameData:
        if data.phase is not GameState.PAUSED:
            return data
        nxt = data.copy()
        nxt.phase = GameState.PLAYING
        return nxt

    def restart(self, data: GameData) -> GameData:
        """Back to MENU from the menu or a finished run, keeping the best score."""
        if data.phase is not GameState.MENU and data.phase not in TERMINAL_STATES:
            return data
        return GameData(high_score=max(data.score, data.high_score))

    def force_game_over(self, data: GameData) -> GameData:
        if data.phase not in (GameState.PLAYING, GameState.PAUSED):
            return data
        return self._end_run(data.copy(), GameState.GAME_OVER)

    def advance_wave(self, data: GameData, settings: Settings) -> GameData:
        if data.phase is not GameState.PLAYING:
            return data
        return self._finish_wave(data.copy(), settings)

    # ── Player commands ─────────────────────────────────────────────────

    def move_player(self, data: GameData, x: float, y: float) -> GameData:
        nxt = data.copy()
        nxt.player.x = x
        nxt.player.y = y
        return nxt

    def can_fire(self, data: GameData, now_ms: float, fire_rate: float) -> bool:
        if data.last_shot_time is None:
            return True
        cooldown = self.power_ups.fire_cooldown(data.active_power_ups, fire_rate)
        return now_ms - data.last_shot_time >= cooldown

    def shoot(self, data: GameData, now_ms: float, fire_rate: float) -> GameData:
        """Fire from the player's nose if the cooldown has elapsed."""
        if data.phase is not GameState.PLAYING:
            return data
        if not self.can_fire(data, now_ms, fire_rate):
            return data
        nxt = data.copy()
        player = nxt.player
        for offset in self.power_ups.spread_offsets(nxt.active_power_ups):
            nxt.bullets.append(self.factory.make_bullet(
                player.center_x + offset, player.y, PLAYER_BULLET_SPEED,
            ))
        nxt.last_shot_time = now_ms
        return nxt

    # ── Tick ────────────────────────────────────────────────────────────

    def tick(self, data: GameData, elapsed_ms: float, settings: Settings) -> GameData:
        """Advance a running game by one frame.

        Timers run on the real elapsed time; movement integrates at most
        ``MAX_ELAPSED_MS`` so a slow frame under-advances instead of
        tunnelling through targets.
        """
        if data.phase is not GameState.PLAYING:
            return data
        nxt = self.resolve_tick(data.copy(), max(elapsed_ms, 0.0), settings)
        return self.evaluate_outcome(nxt, settings)

    def resolve_tick(self, data: GameData, elapsed_ms: float, settings: Settings) -> GameData:
        """Run the per-frame phases on *data* in place and return it."""
        self._update_power_ups(data, elapsed_ms)
        self._integrate(data, elapsed_ms, settings)
        self.waves.update_formation(data, elapsed_ms, settings)
        self.waves.update_egg_drop(data, elapsed_ms, settings)
        self._resolve_bullet_hits(data)
        self._resolve_egg_hits(data)
        self._collect_power_ups(data)
        return data

    def evaluate_outcome(self, data: GameData, settings: Settings) -> GameData:
        """Decide whether the frame cleared the wave or ended the run."""
        if not data.chickens:
            return self._finish_wave(data, settings)
        if data.player.lives <= 0 or reached_bottom(data.chickens, settings.playfield.height):
            return self._end_run(data, GameState.GAME_OVER)
        return data

    # ── Tick phases ─────────────────────────────────────────────────────

    def _update_power_ups(self, data: GameData, elapsed_ms: float) -> None:
        data.active_power_ups = self.power_ups.update(data.active_power_ups, elapsed_ms)
        data.player.shield = self.power_ups.has_shield(data.active_power_ups)

    def _integrate(self, data: GameData, elapsed_ms: float, settings: Settings) -> None:
        dt = clamp(elapsed_ms, 0.0, MAX_ELAPSED_MS) / 1000.0
        height = settings.playfield.height

        for bullet in data.bullets:
            bullet.y -= settings.bullet_speed * dt
        data.bullets = [b for b in data.bullets if b.bottom > 0]

        for egg in data.eggs:
            egg.y += settings.egg_speed * dt
        data.eggs = [e for e in data.eggs if e.y < height]

        for power_up in data.power_ups:
            power_up.y += POWER_UP_FALL_SPEED * dt
        data.power_ups = [p for p in data.power_ups if p.y < height]

        for explosion in data.explosions:
            explosion.update(elapsed_ms)
        data.explosions = [e for e in data.explosions if e.is_active]

    def _resolve_bullet_hits(self, data: GameData) -> None:
        """Each bullet hits at most one living chicken; dead chickens are removed."""
        remaining = []
        for bullet in data.bullets:
            target = next(
                (c for c in data.chickens if not c.is_dead and collides(bullet, c)),
                None,
            )
            if target is None:
                remaining.append(bullet)
                continue
            damage = self.power_ups.bullet_damage(data.active_power_ups, bullet.damage)
            if target.take_damage(damage):
                self._kill(data, target)
        data.bullets = remaining
        data.chickens = [c for c in data.chickens if not c.is_dead]

    def _kill(self, data: GameData, chicken: Chicken) -> None:
        data.score += chicken.points
        data.explosions.append(
            self.factory.make_explosion(chicken.center_x, chicken.center_y)
        )
        if self.factory.roll(POWER_UP_DROP_CHANCE):
            data.power_ups.append(self.factory.make_power_up(
                chicken.center_x, chicken.center_y, self.factory.pick_power_up_type(),
            ))

    def _resolve_egg_hits(self, data: GameData) -> None:
        player = data.player
        remaining = []
        for egg in data.eggs:
            if not collides(egg, player):
                remaining.append(egg)
                continue
            if self.power_ups.absorb_hit(data.active_power_ups):
                player.shield = False
                continue
            player.lives = max(player.lives - 1, 0)
            data.explosions.append(self.factory.make_explosion(
                player.center_x, player.center_y, PLAYER_EXPLOSION_SIZE,
            ))
        data.eggs = remaining

    def _collect_power_ups(self, data: GameData) -> None:
        remaining = []
        for power_up in data.power_ups:
            if collides(power_up, data.player):
                self.power_ups.activate(data.active_power_ups, power_up.type)
            else:
                remaining.append(power_up)
        data.power_ups = remaining
        data.player.shield = self.power_ups.has_shield(data.active_power_ups)

    # ── Wave / run endings ──────────────────────────────────────────────

    def _finish_wave(self, data: GameData, settings: Settings) -> GameData:
        if settings.max_wave is not None and data.wave >= settings.max_wave:
            return self._end_run(data, GameState.VICTORY)
        self.waves.advance(data, settings)
        return data

    def _end_run(self, data: GameData, phase: GameState) -> GameData:
        data.phase = phase
        data.high_score = max(data.score, data.high_score)
        logger.info(
            "Run ended in %s at wave %d with score %d",
            phase.name, data.wave, data.score,
        )
        return data


# ── Shell ───────────────────────────────────────────────────────────────────


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class Game:
    """Top-level game controller.

    Feeds commands through the ``Simulation`` and keeps the latest
    ``GameData``.  The high score is read from *store* once, at
    construction, and written back when a run ends with a better score.
    """

    rng: random.Random = field(default_factory=random.Random)
    store: Optional[ScoreStore] = None
    clock: Callable[[], float] = monotonic_ms
    settings: Settings = field(default_factory=Settings)

    simulation: Simulation = field(init=False)
    data: GameData = field(init=False)
    _saved_high_score: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self.simulation = Simulation.seeded(self.rng)
        self._saved_high_score = self._load_high_score()
        self.data = GameData(high_score=self._saved_high_score)

    @property
    def state(self) -> GameState:
        return self.data.phase

    # ── Dispatch ────────────────────────────────────────────────────────

    def dispatch(self, command: Command) -> GameData:
        """Apply *command* and return the resulting state."""
        if isinstance(command, (Start, Tick, AdvanceWave)):
            self.settings = command.settings
        previous = self.data.phase
        self.data = self.simulation.apply(self.data, command)
        if previous not in TERMINAL_STATES and self.data.phase in TERMINAL_STATES:
            self._save_high_score(self.data.score)
        return self.data

    # ── Convenience wrappers ────────────────────────────────────────────

    def start(self, settings: Optional[Settings] = None) -> GameData:
        return self.dispatch(Start(settings or self.settings))

    def tick(self, elapsed_ms: float, settings: Optional[Settings] = None) -> GameData:
        return self.dispatch(Tick(elapsed_ms, settings or self.settings))

    def move_player(self, x: float, y: float) -> GameData:
        return self.dispatch(MovePlayer(x, y))

    def shoot(self) -> GameData:
        return self.dispatch(Shoot(self.clock(), self.settings.fire_rate))

    def pause(self) -> GameData:
        return self.dispatch(Pause())

    def resume(self) -> GameData:
        return self.dispatch(Resume())

    def restart(self) -> GameData:
        return self.dispatch(Restart())

    def force_game_over(self) -> GameData:
        return self.dispatch(ForceGameOver())

    def advance_wave(self, settings: Optional[Settings] = None) -> GameData:
        return self.dispatch(AdvanceWave(settings or self.settings))

    # ── High-score persistence ──────────────────────────────────────────

    def _load_high_score(self) -> int:
        if self.store is None:
            return 0
        try:
            return int(self.store.load())
        except Exception:
            logger.warning("Could not load high score", exc_info=True)
            return 0

    def _save_high_score(self, score: int) -> None:
        if self.store is None or score <= self._saved_high_score:
            return
        try:
            self.store.save(score)
        except Exception:
            logger.warning("Could not save high score %d", score, exc_info=True)
            return
        self._saved_high_score = score
