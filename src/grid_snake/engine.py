"""Step-based game engine composing grid, snake, and apple logic."""

from __future__ import annotations

import logging

import numpy as np

from grid_snake.apple import AppleSampler
from grid_snake.collision import collision_cause
from grid_snake.config import GameConfig
from grid_snake.events import (
    AppleEatenEvent,
    ApplePlacementFailedEvent,
    Event,
    GameOverEvent,
    InvalidTransitionEvent,
    Phase,
    SessionStartedEvent,
    Snapshot,
    TickCompletedEvent,
)
from grid_snake.grid import Grid, GridPosition
from grid_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the grid, snake, apple and score for one session.
    Each call to :meth:`tick` advances the game by one step and returns
    the events it produced; nothing here raises for game conditions.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.sampler = AppleSampler(
            self.rng, attempts_per_cell=self.config.sample_attempts_per_cell,
        )
        self._start_session()

    def _start_session(self) -> None:
        direction = self.config.direction
        self.snake = Snake.spawn(
            self.grid.center(), direction, self.config.initial_length,
        )
        self.direction = direction
        self._pending_direction: Direction | None = None
        self.score = 0
        self.tick_count = 0
        self.phase = Phase.RUNNING
        self.apple: GridPosition | None = None
        self._place_apple()
        logger.info(
            "Session started on a %dx%d grid, apple at %s.",
            self.grid.width, self.grid.height, self.apple,
        )

    @property
    def alive(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def pending_direction(self) -> Direction:
        """The direction the next tick will move in."""
        return self._pending_direction or self.direction

    def set_direction(self, direction: Direction) -> bool:
        """Buffer at most one valid direction change for the next tick.

        Returns True if the turn was accepted.
        """
        if self.game_over:
            logger.debug("Ignoring %s: the game is over.", direction.name)
            return False
        if self._pending_direction is not None:
            logger.debug("Ignoring %s: a turn is already queued.", direction.name)
            return False
        if direction.is_reverse_of(self.direction):
            logger.debug("Ignoring %s: reversal.", direction.name)
            return False
        self._pending_direction = direction
        return True

    def tick(self) -> list[Event]:
        """Advance the game by one step."""
        if self.game_over:
            logger.debug("tick() called after game over.")
            return [InvalidTransitionEvent("tick", self.phase)]

        if self._pending_direction is not None:
            self.direction = self._pending_direction
            self._pending_direction = None

        candidate = self.snake.head().offset(self.direction)

        cause = collision_cause(candidate, self.snake, self.grid)
        if cause is not None:
            self.phase = Phase.GAME_OVER
            self.tick_count += 1
            logger.info(
                "Snake hit %s at tick %d with score %d.",
                cause.value, self.tick_count, self.score,
            )
            return [GameOverEvent(self.snapshot(), cause)]

        events: list[Event] = []
        if (
            self.apple is not None
            and candidate.distance_to(self.apple) < self.config.apple_eaten_distance
        ):
            eaten = self.apple
            self.snake.grow(self.config.growth_per_apple)
            self.score += 1
            self.apple = None
            # The head has not moved yet, so keep its next cell free too.
            placed = self._place_apple(reserved=(candidate,))
            events.append(AppleEatenEvent(eaten, self.score))
            if not placed:
                events.append(ApplePlacementFailedEvent(self.tick_count + 1))
            self.snake.advance(candidate)
        else:
            self.snake.advance(candidate)
            if self.apple is None and not self._place_apple():
                events.append(ApplePlacementFailedEvent(self.tick_count + 1))

        self.tick_count += 1
        events.append(TickCompletedEvent(self.snapshot()))
        return events

    def reset(self) -> list[Event]:
        """Start a fresh session after game over (or before the first tick)."""
        if self.alive and self.tick_count > 0:
            logger.debug("reset() called while the game is running.")
            return [InvalidTransitionEvent("reset", self.phase)]
        self._start_session()
        return [SessionStartedEvent(self.snapshot())]

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current state."""
        return Snapshot(
            segments=self.snake.segments(),
            apple=self.apple,
            score=self.score,
            alive=self.alive,
            tick=self.tick_count,
            direction=self.direction,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "phase": self.phase.value,
            "grid": self.grid.to_dict(),
            **self.snapshot().to_dict(),
        }

    def render_text(self) -> str:
        return self.grid.render_text(self.snake, self.apple)

    def _place_apple(self, reserved: tuple[GridPosition, ...] = ()) -> bool:
        self.apple = self.sampler.sample(
            self.snake,
            self.grid,
            self.config.min_apple_distance,
            reserved=reserved,
        )
        return self.apple is not None
