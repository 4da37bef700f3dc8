"""Headless simulation runs for measuring engine throughput."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.events import AppleEatenEvent
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class SimulationResult:
    """Results from a batch of headless games."""

    total_games: int
    total_ticks: int
    apples_eaten: int
    best_score: int
    mean_score: float
    wall_time_seconds: float
    ticks_per_second: float
    final_board: str = ""

    def summary(self) -> str:
        return (
            f"Simulation: {self.total_games} games, {self.total_ticks} ticks "
            f"in {self.wall_time_seconds:.2f}s | "
            f"{self.ticks_per_second:.1f} ticks/s | "
            f"best score {self.best_score}, mean {self.mean_score:.2f}"
        )


def simulate(
    *,
    config: GameConfig | None = None,
    num_games: int = 100,
    max_ticks: int = 500,
    turn_probability: float = 0.2,
    seed: int | None = 42,
) -> SimulationResult:
    """Play *num_games* games with random turns and report throughput.

    A single engine is reused and reset between games. Each tick a turn
    is attempted with *turn_probability*; games longer than *max_ticks*
    are cut off.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")

    rng = np.random.default_rng(seed)
    engine = GameEngine(config, rng=rng)

    scores: list[int] = []
    total_ticks = 0
    apples = 0
    start = time.perf_counter()

    for game in range(num_games):
        if game > 0:
            if engine.alive:
                # Cut-off games never reached game over; start from scratch.
                engine = GameEngine(config, rng=rng)
            else:
                engine.reset()

        for _ in range(max_ticks):
            if rng.random() < turn_probability:
                engine.set_direction(_DIRECTIONS[int(rng.integers(4))])
            events = engine.tick()
            total_ticks += 1
            apples += sum(isinstance(e, AppleEatenEvent) for e in events)
            if engine.game_over:
                break
        scores.append(engine.score)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        total_games=num_games,
        total_ticks=total_ticks,
        apples_eaten=apples,
        best_score=max(scores),
        mean_score=float(np.mean(scores)),
        wall_time_seconds=elapsed,
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
        final_board=engine.render_text(),
    )
    logger.info(result.summary())
    return result
