"""
Main entry point for Chicken Invaders.

Initializes pygame, drives the simulation once per frame, translates
keyboard and mouse input into game commands, and draws the state as
plain rectangles.

Usage:
    python main.py [OPTIONS]

Options:
    --width W            Window width in pixels (default: 800)
    --height H           Window height in pixels (default: 600)
    --fullscreen         Launch in fullscreen mode
    --debug              Enable debug overlays and DEBUG logging
    --seed N             Seed the random source (reproducible runs)
    --max-wave N         Win after clearing wave N
    --scores-file PATH   Where the high score is kept
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import dataclass, field
from typing import Optional

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from chicken_invaders.config import MAX_ELAPSED_MS, UPDATE_RATE
from chicken_invaders.game import Game
from chicken_invaders.settings import Settings, settings_for_viewport
from chicken_invaders.state import TERMINAL_STATES, GameState
from chicken_invaders.ui.high_scores import HighScoreStore
from chicken_invaders.ui.text import HudText
from chicken_invaders.utils.functions import clamp

logger = logging.getLogger(__name__)


# ── Constants ───────────────────────────────────────────────────────────────

FRAME_TIME: float = 1.0 / UPDATE_RATE          # ~16.67 ms

DEFAULT_WIDTH: int = 800
DEFAULT_HEIGHT: int = 600

POINTER_DEADZONE: float = 5.0   # px; closer than this and the ship stays put
POINTER_GAIN: float = 8.0       # fraction of the gap closed per second

COLOR_BACKGROUND = (8, 6, 28)
COLOR_PLAYER = (80, 200, 255)
COLOR_SHIELD = (120, 255, 160)
COLOR_BULLET = (255, 240, 120)
COLOR_EGG = (250, 250, 235)
COLOR_CHICKEN = (240, 200, 60)
COLOR_CHICKEN_HURT = (240, 120, 60)
COLOR_POWER_UP = {
    "spread_shot": (90, 160, 255),
    "rapid_fire": (255, 220, 80),
    "shield": (90, 255, 140),
    "damage_up": (255, 90, 90),
}
COLOR_EXPLOSION = (255, 150, 40)
COLOR_TEXT = (255, 255, 255)


# ── Argument parsing ───────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Chicken Invaders - defend the skies from the chicken formation",
    )
    parser.add_argument(
        "--width", type=int, default=DEFAULT_WIDTH, metavar="W",
        help=f"Window width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height", type=int, default=DEFAULT_HEIGHT, metavar="H",
        help=f"Window height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--fullscreen", action="store_true",
        help="Launch in fullscreen mode",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug overlays (FPS, entity counts) and DEBUG logging",
    )
    parser.add_argument(
        "--seed", type=int, default=None, metavar="N",
        help="Seed the random source for a reproducible run",
    )
    parser.add_argument(
        "--max-wave", type=int, default=None, metavar="N",
        help="Win the game after clearing wave N (default: endless)",
    )
    parser.add_argument(
        "--scores-file", default="highscore.json", metavar="PATH",
        help="High-score file (default: highscore.json)",
    )
    return parser.parse_args(argv)


# ── Application ─────────────────────────────────────────────────────────────


@dataclass
class ChickenInvadersApp:
    """Top-level application wrapper.

    Owns the pygame display, the clock, the input state and the game.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fullscreen: bool = False
    debug: bool = False
    seed: Optional[int] = None
    max_wave: Optional[int] = None
    scores_file: str = "highscore.json"

    # Runtime state (initialized in ``init``)
    screen: object = field(default=None, repr=False)
    clock: object = field(default=None, repr=False)
    game: Game = field(default_factory=Game)
    settings: Settings = field(default_factory=Settings)
    running: bool = False

    # Input state, sampled once per frame
    move_direction: int = 0           # -1 left, +1 right, 0 idle
    pointer_x: Optional[float] = None
    firing: bool = False

    # Performance tracking
    fps: float = 0.0

    def __post_init__(self) -> None:
        self.settings = settings_for_viewport(self.width, self.height, self.max_wave)

    # ── Initialisation ──────────────────────────────────────────────────

    def init(self) -> bool:
        """Initialise pygame and create the display surface.

        Returns True on success, False on failure.
        """
        if pygame is None:
            print("Error: pygame is required. Install with: pip install pygame",
                  file=sys.stderr)
            return False

        try:
            pygame.init()
        except Exception as exc:
            print(f"Error initialising pygame: {exc}", file=sys.stderr)
            return False

        flags = pygame.RESIZABLE
        if self.fullscreen:
            flags |= pygame.FULLSCREEN

        try:
            self.screen = pygame.display.set_mode((self.width, self.height), flags)
        except Exception as exc:
            print(f"Error creating display: {exc}", file=sys.stderr)
            pygame.quit()
            return False

        pygame.display.set_caption("Chicken Invaders")
        self.clock = pygame.time.Clock()

        self.game = Game(
            rng=random.Random(self.seed),
            store=HighScoreStore(self.scores_file),
            clock=lambda: float(pygame.time.get_ticks()),
        )
        self.resize(*self.screen.get_size())
        self.game.start(self.settings)

        self.running = True
        return True

    def resize(self, width: int, height: int) -> None:
        """Recompute settings for a new viewport size."""
        self.width, self.height = width, height
        self.settings = settings_for_viewport(width, height, self.max_wave)
        logger.debug("Playfield now %gx%g", self.settings.playfield.width,
                     self.settings.playfield.height)

    # ── Main loop ───────────────────────────────────────────────────────

    def run(self) -> None:
        """Execute the main game loop at 60 FPS."""
        if not self.running:
            return

        try:
            while self.running:
                elapsed_ms = self.clock.tick(UPDATE_RATE)
                self.fps = self.clock.get_fps()

                self._handle_events()
                self.step(float(elapsed_ms))
                self._render()
        except KeyboardInterrupt:
            pass
        finally:
            self.shutdown()

    def step(self, elapsed_ms: float) -> None:
        """Apply held input, then advance the simulation by one frame."""
        if self.game.state is not GameState.PLAYING:
            return
        x = self._next_player_x(elapsed_ms)
        if x != self.game.data.player.x:
            self.game.move_player(x, self.game.data.player.y)
        if self.firing:
            self.game.shoot()
        self.game.tick(elapsed_ms, self.settings)

    # ── Input ───────────────────────────────────────────────────────────

    def _next_player_x(self, elapsed_ms: float) -> float:
        """Where the ship should be after this frame, clamped to the playfield.

        The mouse pointer takes priority over the keyboard; the ship eases
        towards it without exceeding the player speed.
        """
        player = self.game.data.player
        dt = min(elapsed_ms, MAX_ELAPSED_MS) / 1000.0
        max_step = self.settings.player_speed * dt
        dx = 0.0

        if self.pointer_x is not None:
            gap = self.pointer_x - player.width / 2 - player.x
            if abs(gap) > POINTER_DEADZONE:
                dx = min(abs(gap) * POINTER_GAIN * dt, max_step)
                dx = dx if gap > 0 else -dx
        elif self.move_direction:
            dx = self.move_direction * max_step

        return clamp(player.x + dx, 0.0, self.settings.playfield.width - player.width)

    def toggle_pause(self) -> None:
        if self.game.state is GameState.PLAYING:
            self.game.pause()
        elif self.game.state is GameState.PAUSED:
            self.game.resume()

    def new_run(self) -> None:
        """Restart after a finished run and go straight back into play."""
        if self.game.state not in TERMINAL_STATES:
            return
        self.game.restart()
        self.game.start(self.settings)

    def _handle_events(self) -> None:
        """Process pygame events.

        Keyboard controls:
            Left / A, Right / D – move
            Space               – fire (hold for auto-fire)
            P                   – pause / resume
            R                   – new game after game over
            ESC                 – exit

        Mouse controls:
            Movement    – ship follows the pointer
            Left button – fire (hold for auto-fire)
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)

            elif event.type == pygame.MOUSEMOTION:
                self.pointer_x = float(event.pos[0])

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.firing = True

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.firing = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_p:
                    self.toggle_pause()
                elif event.key == pygame.K_r:
                    self.new_run()
                elif event.key == pygame.K_SPACE:
                    self.firing = True
                elif event.key in (pygame.K_LEFT, pygame.K_a, pygame.K_RIGHT, pygame.K_d):
                    # keyboard takes over from the pointer until it moves again
                    self.pointer_x = None

            elif event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                self.firing = False

        keys = pygame.key.get_pressed()
        left = keys[pygame.K_LEFT] or keys[pygame.K_a]
        right = keys[pygame.K_RIGHT] or keys[pygame.K_d]
        self.move_direction = int(bool(right)) - int(bool(left))

    # ── Rendering ───────────────────────────────────────────────────────

    def _render(self) -> None:
        """Execute the rendering pipeline."""
        if self.screen is None:
            return

        data = self.game.data
        self.screen.fill(COLOR_BACKGROUND)

        for chicken in data.chickens:
            color = COLOR_CHICKEN if chicken.hp >= chicken.max_hp else COLOR_CHICKEN_HURT
            self._rect(chicken, color)
        for bullet in data.bullets:
            self._rect(bullet, COLOR_BULLET)
        for egg in data.eggs:
            pygame.draw.ellipse(self.screen, COLOR_EGG, self._to_rect(egg))
        for power_up in data.power_ups:
            self._rect(power_up, COLOR_POWER_UP.get(power_up.type.value, COLOR_TEXT))
        for explosion in data.explosions:
            rect = self._to_rect(explosion)
            shrink = int(rect.width * explosion.progress / 2)
            pygame.draw.rect(self.screen, COLOR_EXPLOSION, rect.inflate(-shrink, -shrink), 2)

        self._rect(data.player, COLOR_PLAYER)
        if data.player.shield:
            pygame.draw.ellipse(
                self.screen, COLOR_SHIELD, self._to_rect(data.player).inflate(16, 16), 2,
            )

        self._render_hud()
        if data.phase is GameState.PAUSED:
            self._render_banner(["PAUSED", "Press P to resume"])
        elif data.phase is GameState.GAME_OVER:
            self._render_banner(["GAME OVER", HudText(data).format_score(), "Press R to play again"])
        elif data.phase is GameState.VICTORY:
            self._render_banner(["VICTORY!", HudText(data).format_score(), "Press R to play again"])

        if self.debug:
            self._render_debug()

        pygame.display.flip()

    @staticmethod
    def _to_rect(entity) -> "pygame.Rect":
        return pygame.Rect(int(entity.x), int(entity.y), int(entity.width), int(entity.height))

    def _rect(self, entity, color) -> None:
        pygame.draw.rect(self.screen, color, self._to_rect(entity))

    def _font(self, size: int):
        return pygame.font.Font(None, size)

    def _render_hud(self) -> None:
        font = self._font(24)
        y = 8
        for line in HudText(self.game.data).lines():
            surface = font.render(line, True, COLOR_TEXT)
            self.screen.blit(surface, (8, y))
            y += surface.get_height() + 2

    def _render_banner(self, lines: list[str]) -> None:
        font = self._font(48)
        w, h = self.screen.get_size()
        y = h // 2 - len(lines) * 28
        for line in lines:
            surface = font.render(line, True, COLOR_TEXT)
            self.screen.blit(surface, (w // 2 - surface.get_width() // 2, y))
            y += surface.get_height() + 8

    def _render_debug(self) -> None:
        """Draw debug overlays (FPS, entity counts)."""
        data = self.game.data
        font = self._font(20)
        texts = [
            f"FPS: {self.fps:.1f}",
            f"Chickens: {len(data.chickens)}",
            f"Bullets: {len(data.bullets)}  Eggs: {len(data.eggs)}",
            f"Power-ups: {len(data.power_ups)}  Explosions: {len(data.explosions)}",
            f"Direction: {data.chicken_direction:+d}",
        ]
        w = self.screen.get_size()[0]
        y = 5
        for text in texts:
            surface = font.render(text, True, (0, 255, 0))
            self.screen.blit(surface, (w - surface.get_width() - 5, y))
            y += 18

    # ── Shutdown ────────────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Clean up and quit pygame."""
        self.running = False
        if pygame is not None:
            try:
                pygame.quit()
            except Exception:
                pass


# ── Entry point ─────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Application entry point.  Returns exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = ChickenInvadersApp(
        width=args.width,
        height=args.height,
        fullscreen=args.fullscreen,
        debug=args.debug,
        seed=args.seed,
        max_wave=args.max_wave,
        scores_file=args.scores_file,
    )

    if not app.init():
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
