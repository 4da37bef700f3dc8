"""Apple placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.grid import GridPosition

if TYPE_CHECKING:
    from grid_snake.grid import Grid
    from grid_snake.snake import Snake

logger = logging.getLogger(__name__)


class AppleSampler:
    """Chooses apple cells off the snake and away from its head.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Random draws are capped at ``attempts_per_cell`` times the grid area;
    past that, the first valid cell in x-major order is used instead.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        attempts_per_cell: int = 2,
    ) -> None:
        if attempts_per_cell < 1:
            raise ValueError("attempts_per_cell must be at least 1.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.attempts_per_cell = attempts_per_cell

    def max_attempts(self, grid: Grid) -> int:
        return self.attempts_per_cell * grid.area

    def is_valid(
        self,
        candidate: GridPosition,
        snake: Snake,
        min_head_distance: float,
        reserved: Iterable[tuple[int, int]] = (),
    ) -> bool:
        """Check both placement rules for a single cell."""
        if snake.occupies(candidate) or candidate in set(reserved):
            return False
        return candidate.distance_to(snake.head()) >= min_head_distance

    def sample(
        self,
        snake: Snake,
        grid: Grid,
        min_head_distance: float = 5.0,
        reserved: Iterable[tuple[int, int]] = (),
    ) -> GridPosition | None:
        """Pick a cell for the next apple.

        *reserved* cells are treated like snake segments. Returns ``None``
        when no cell on the board satisfies both rules.
        """
        reserved = [GridPosition(*p) for p in reserved]
        for _ in range(self.max_attempts(grid)):
            x = int(self.rng.integers(0, grid.width))
            z = int(self.rng.integers(0, grid.height))
            candidate = GridPosition(x, z)
            if self.is_valid(candidate, snake, min_head_distance, reserved):
                return candidate

        logger.debug(
            "Random placement exhausted %d attempts; scanning the board.",
            self.max_attempts(grid),
        )
        return self.scan(snake, grid, min_head_distance, reserved)

    def scan(
        self,
        snake: Snake,
        grid: Grid,
        min_head_distance: float = 5.0,
        reserved: Iterable[tuple[int, int]] = (),
    ) -> GridPosition | None:
        """Return the first valid cell in x-major, then z, order."""
        valid = ~grid.occupancy(snake)
        for x, z in reserved:
            if grid.in_bounds((x, z)):
                valid[x, z] = False
        valid &= grid.distance_field(snake.head()) >= min_head_distance

        xs, zs = np.nonzero(valid)
        if xs.size == 0:
            logger.warning(
                "No valid apple placement on a %dx%d grid (snake length %d).",
                grid.width, grid.height, len(snake),
            )
            return None
        return GridPosition(int(xs[0]), int(zs[0]))
