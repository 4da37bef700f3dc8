"""Grid coordinates and board bounds for the snake game."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

if TYPE_CHECKING:
    from grid_snake.snake import Direction, Snake


class GridPosition(NamedTuple):
    """An integer cell on the board.

    ``x`` runs along the width and ``z`` along the height, so the board is
    the plane ``[0, width) × [0, height)``.
    """

    x: int
    z: int

    def offset(self, direction: Direction) -> GridPosition:
        """Return the neighbouring cell one step in *direction*."""
        dx, dz = direction.offset
        return GridPosition(self.x + dx, self.z + dz)

    def distance_to(self, other: tuple[int, int]) -> float:
        """Euclidean distance to another cell."""
        return math.hypot(self.x - other[0], self.z - other[1])


class Grid:
    """Board bounds plus NumPy helpers for occupancy queries.

    Masks are indexed ``[x, z]`` so that a row-major scan of a mask visits
    cells in x-major order.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive.")
        self.width = width
        self.height = height

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, position: tuple[int, int]) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, z = position
        return 0 <= x < self.width and 0 <= z < self.height

    def center(self) -> GridPosition:
        return GridPosition(self.width // 2, self.height // 2)

    def occupancy(self, snake: Snake) -> np.ndarray:
        """Boolean ``(width, height)`` mask, True where the snake lies."""
        mask = np.zeros((self.width, self.height), dtype=bool)
        for x, z in snake.segments():
            if self.in_bounds((x, z)):
                mask[x, z] = True
        return mask

    def distance_field(self, origin: tuple[int, int]) -> np.ndarray:
        """Euclidean distance from *origin* to every cell, indexed ``[x, z]``."""
        xs, zs = np.indices((self.width, self.height))
        return np.hypot(xs - origin[0], zs - origin[1])

    def render_text(
        self,
        snake: Snake,
        apple: GridPosition | None = None,
    ) -> str:
        """Draw the board as text, highest ``z`` on the first line."""
        rows = [["." for _ in range(self.width)] for _ in range(self.height)]
        for x, z in reversed(snake.segments()):
            rows[z][x] = "o"
        head = snake.head()
        rows[head.z][head.x] = "@"
        if apple is not None:
            rows[apple.z][apple.x] = "*"
        return "\n".join("".join(row) for row in reversed(rows))

    def to_dict(self) -> dict:
        """Serialize grid bounds to a dictionary."""
        return {"width": self.width, "height": self.height}
