"""Fixed-interval driver loop that feeds input to an engine and fans out events."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from grid_snake.engine import GameEngine
from grid_snake.events import (
    AppleEatenEvent,
    ApplePlacementFailedEvent,
    Event,
    GameOverEvent,
    SessionStartedEvent,
    TickCompletedEvent,
)
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


class GameDriver:
    """Owns the clock for one engine and dispatches its events to hooks.

    Hooks are plain callables taking the event; any of them may be None.
    The tick interval defaults to the engine config's ``tick_interval``.
    """

    def __init__(
        self,
        engine: GameEngine,
        *,
        tick_interval: float | None = None,
        on_tick: Callable[[TickCompletedEvent], None] | None = None,
        on_apple_eaten: Callable[[AppleEatenEvent], None] | None = None,
        on_game_over: Callable[[GameOverEvent], None] | None = None,
        on_reset: Callable[[SessionStartedEvent], None] | None = None,
    ) -> None:
        self.engine = engine
        self.tick_interval = (
            tick_interval if tick_interval is not None
            else engine.config.tick_interval
        )
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        self._hooks: dict[type, Callable | None] = {
            TickCompletedEvent: on_tick,
            AppleEatenEvent: on_apple_eaten,
            GameOverEvent: on_game_over,
            SessionStartedEvent: on_reset,
        }
        self._elapsed = 0.0

    def push_direction(self, direction: Direction) -> bool:
        """Forward a turn request; only the first valid one per tick sticks."""
        return self.engine.set_direction(direction)

    def step(self) -> list[Event]:
        """Tick the engine once and dispatch the resulting events."""
        events = self.engine.tick()
        self.dispatch(events)
        return events

    def restart(self) -> list[Event]:
        """Ask the engine for a fresh session."""
        events = self.engine.reset()
        if isinstance(events[0], SessionStartedEvent):
            self._elapsed = 0.0
        self.dispatch(events)
        return events

    def advance_time(self, dt: float) -> list[Event]:
        """Accumulate *dt* seconds and tick once the interval has elapsed.

        Mirrors a per-frame update: at most one tick per call, and the
        accumulator restarts from zero after each tick.
        """
        if self.engine.game_over:
            return []
        self._elapsed += dt
        if self._elapsed < self.tick_interval:
            return []
        self._elapsed = 0.0
        return self.step()

    def run(
        self,
        max_ticks: int | None = None,
        *,
        poll_input: Callable[[], Direction | None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Tick on a fixed interval until game over or *max_ticks*.

        *poll_input* is called once before each tick. Returns the final
        score.
        """
        ticks = 0
        while not self.engine.game_over:
            if max_ticks is not None and ticks >= max_ticks:
                break
            if poll_input is not None:
                direction = poll_input()
                if direction is not None:
                    self.push_direction(direction)
            self.step()
            ticks += 1
            if not self.engine.game_over:
                sleep(self.tick_interval)
        logger.info("Driver stopped after %d ticks, score %d.", ticks, self.engine.score)
        return self.engine.score

    def dispatch(self, events: list[Event]) -> None:
        for event in events:
            if isinstance(event, ApplePlacementFailedEvent):
                logger.warning("No apple could be placed at tick %d.", event.tick)
                continue
            hook = self._hooks.get(type(event))
            if hook is not None:
                hook(event)
