"""Pygame window: draws snapshots, reads arrow keys, plays bite/zap cues."""

from __future__ import annotations

import logging

import numpy as np
import pygame

from grid_snake.driver import GameDriver
from grid_snake.engine import GameEngine
from grid_snake.events import (
    AppleEatenEvent,
    GameOverEvent,
    SessionStartedEvent,
    Snapshot,
    TickCompletedEvent,
)
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

CELL_SIZE = 24
HUD_HEIGHT = 36
FPS = 60
SAMPLE_RATE = 22050

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
HEAD_COLOR = (40, 200, 90)
BODY_COLOR = (20, 120, 50)
APPLE_COLOR = (220, 40, 40)
GAME_OVER_COLOR = (255, 200, 0)

# Up moves toward +z, which is drawn at the top of the window.
KEY_DIRECTIONS: dict[int, Direction] = {
    pygame.K_UP: Direction.NORTH,
    pygame.K_DOWN: Direction.SOUTH,
    pygame.K_LEFT: Direction.WEST,
    pygame.K_RIGHT: Direction.EAST,
}


def tone(
    frequency: float,
    duration: float,
    *,
    slide: float = 0.0,
    volume: float = 0.4,
) -> np.ndarray:
    """Synthesize a mono 16-bit tone, optionally sliding in pitch."""
    n = int(SAMPLE_RATE * duration)
    t = np.arange(n) / SAMPLE_RATE
    freq = frequency + slide * t / max(duration, 1e-9)
    phase = 2 * np.pi * np.cumsum(freq) / SAMPLE_RATE
    envelope = np.linspace(1.0, 0.0, n)
    return (np.sin(phase) * envelope * volume * 32767).astype(np.int16)


class Audio:
    """Plays the bite and zap cues; silent when no audio device is present."""

    def __init__(self) -> None:
        self.enabled = False
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            return
        self.bite = pygame.mixer.Sound(buffer=tone(660, 0.08, slide=220).tobytes())
        self.zap = pygame.mixer.Sound(buffer=tone(440, 0.4, slide=-360).tobytes())
        self.enabled = True

    def on_apple_eaten(self, event: AppleEatenEvent) -> None:
        if self.enabled:
            self.bite.play()

    def on_game_over(self, event: GameOverEvent) -> None:
        if self.enabled:
            self.zap.play()


class Renderer:
    """Draws the board, score line, and game-over prompt."""

    def __init__(self, screen: pygame.Surface, width: int, height: int) -> None:
        self.screen = screen
        self.width = width
        self.height = height
        self.font = pygame.font.Font(None, 32)
        self.big_font = pygame.font.Font(None, 64)

    def cell_rect(self, x: int, z: int) -> pygame.Rect:
        top = HUD_HEIGHT + (self.height - 1 - z) * CELL_SIZE
        return pygame.Rect(x * CELL_SIZE, top, CELL_SIZE, CELL_SIZE)

    def draw(self, snapshot: Snapshot) -> None:
        self.screen.fill(BLACK)
        for x, z in reversed(snapshot.segments[1:]):
            pygame.draw.rect(self.screen, BODY_COLOR, self.cell_rect(x, z))
        pygame.draw.rect(self.screen, HEAD_COLOR, self.cell_rect(*snapshot.head))
        if snapshot.apple is not None:
            pygame.draw.rect(self.screen, APPLE_COLOR, self.cell_rect(*snapshot.apple))

        score = self.font.render(f"Count: {snapshot.score}", True, WHITE)
        self.screen.blit(score, (8, 8))

        if not snapshot.alive:
            center = self.screen.get_rect().center
            over = self.big_font.render("GAME OVER!", True, GAME_OVER_COLOR)
            self.screen.blit(over, over.get_rect(center=center))
            prompt = self.font.render("Press R to restart", True, WHITE)
            self.screen.blit(
                prompt, prompt.get_rect(center=(center[0], center[1] + 48)),
            )
        pygame.display.flip()


def play(engine: GameEngine) -> int:
    """Open a window and play until the user quits. Returns the last score."""
    pygame.init()
    grid = engine.grid
    screen = pygame.display.set_mode(
        (grid.width * CELL_SIZE, grid.height * CELL_SIZE + HUD_HEIGHT),
    )
    pygame.display.set_caption("Grid Snake")
    clock = pygame.time.Clock()

    renderer = Renderer(screen, grid.width, grid.height)
    audio = Audio()
    frame = {"snapshot": engine.snapshot()}

    def remember(event: TickCompletedEvent | GameOverEvent | SessionStartedEvent) -> None:
        frame["snapshot"] = event.snapshot

    def game_over(event: GameOverEvent) -> None:
        remember(event)
        audio.on_game_over(event)

    driver = GameDriver(
        engine,
        on_tick=remember,
        on_apple_eaten=audio.on_apple_eaten,
        on_game_over=game_over,
        on_reset=remember,
    )

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key == pygame.K_r and engine.game_over:
                        driver.restart()
                    elif event.key in KEY_DIRECTIONS:
                        driver.push_direction(KEY_DIRECTIONS[event.key])

            driver.advance_time(clock.tick(FPS) / 1000.0)
            renderer.draw(frame["snapshot"])
    finally:
        pygame.quit()
    return engine.score
