"""Wall and self-collision checks for a candidate head cell."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grid_snake.grid import Grid
    from grid_snake.snake import Snake


class CollisionCause(enum.Enum):
    """What the snake ran into."""

    WALL = "wall"
    SELF = "self"


def collision_cause(
    candidate: tuple[int, int], snake: Snake, grid: Grid,
) -> CollisionCause | None:
    """Return why moving the head to *candidate* is fatal, or ``None``.

    The body is checked as it stands before the move, so the cell the
    tail is about to leave still counts as occupied.
    """
    if not grid.in_bounds(candidate):
        return CollisionCause.WALL
    if snake.occupies(candidate):
        return CollisionCause.SELF
    return None


def is_collision(candidate: tuple[int, int], snake: Snake, grid: Grid) -> bool:
    """True if *candidate* is outside the grid or on the snake's body."""
    return collision_cause(candidate, snake, grid) is not None
