"""Snake representation and movement logic."""

from __future__ import annotations

import enum

from grid_snake.grid import GridPosition


class Direction(enum.Enum):
    """Cardinal movement directions with (x_delta, z_delta) values."""

    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def offset(self) -> tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> Direction:
        dx, dz = self.value
        return Direction((-dx, -dz))

    def is_reverse_of(self, other: Direction) -> bool:
        """True if turning from *other* to this direction is a 180° reversal."""
        return self.opposite is other

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


class Snake:
    """A snake represented as an ordered list of body segments.

    The head is ``segments()[0]``; the tail is ``segments()[-1]``.
    """

    def __init__(self, segments: list[tuple[int, int]]) -> None:
        if not segments:
            raise ValueError("Snake length must be at least 1.")
        self._body: list[GridPosition] = [GridPosition(*s) for s in segments]

    @classmethod
    def spawn(
        cls,
        head: GridPosition,
        direction: Direction = Direction.NORTH,
        length: int = 5,
    ) -> Snake:
        """Build a straight snake trailing behind *head* opposite *direction*."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dz = direction.offset
        return cls([
            GridPosition(head.x - dx * i, head.z - dz * i)
            for i in range(length)
        ])

    def __len__(self) -> int:
        return len(self._body)

    def segments(self) -> tuple[GridPosition, ...]:
        """Return a read-only view of the body, head first."""
        return tuple(self._body)

    def head(self) -> GridPosition:
        """Return the head coordinate."""
        return self._body[0]

    def tail(self) -> GridPosition:
        return self._body[-1]

    def advance(self, head_target: tuple[int, int]) -> None:
        """Shift every segment one slot toward the head, then move the head.

        Iterates from the tail down to index 1 so each segment copies its
        predecessor's pre-advance position.
        """
        body = self._body
        for i in range(len(body) - 1, 0, -1):
            body[i] = body[i - 1]
        body[0] = GridPosition(*head_target)

    def grow(self, n: int) -> None:
        """Append *n* segments stacked on the tail's current cell."""
        if n < 0:
            raise ValueError("Growth amount must be non-negative.")
        tail = self._body[-1]
        self._body.extend([tail] * n)

    def occupies(self, position: tuple[int, int]) -> bool:
        """Check whether the snake occupies a given cell."""
        return GridPosition(*position) in self._body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self._body]}
