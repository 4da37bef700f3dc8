"""Read-only snapshots and the events the engine hands back to its driver."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grid_snake.collision import CollisionCause
from grid_snake.grid import GridPosition
from grid_snake.snake import Direction


class Phase(enum.Enum):
    """Lifecycle states of a game session."""

    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs to draw one frame."""

    segments: tuple[GridPosition, ...]
    apple: GridPosition | None
    score: int
    alive: bool
    tick: int
    direction: Direction

    @property
    def head(self) -> GridPosition:
        return self.segments[0]

    def to_dict(self) -> dict:
        return {
            "segments": [list(s) for s in self.segments],
            "apple": list(self.apple) if self.apple is not None else None,
            "score": self.score,
            "alive": self.alive,
            "tick": self.tick,
            "direction": self.direction.name.lower(),
        }


@dataclass(frozen=True)
class TickCompletedEvent:
    snapshot: Snapshot

    def to_dict(self) -> dict:
        return {"type": "tick_completed", "snapshot": self.snapshot.to_dict()}


@dataclass(frozen=True)
class AppleEatenEvent:
    position: GridPosition
    score: int

    def to_dict(self) -> dict:
        return {
            "type": "apple_eaten",
            "position": list(self.position),
            "score": self.score,
        }


@dataclass(frozen=True)
class GameOverEvent:
    snapshot: Snapshot
    cause: CollisionCause

    def to_dict(self) -> dict:
        return {
            "type": "game_over",
            "cause": self.cause.value,
            "snapshot": self.snapshot.to_dict(),
        }


@dataclass(frozen=True)
class SessionStartedEvent:
    snapshot: Snapshot

    def to_dict(self) -> dict:
        return {"type": "session_started", "snapshot": self.snapshot.to_dict()}


@dataclass(frozen=True)
class InvalidTransitionEvent:
    """An operation was called in a phase that does not allow it."""

    operation: str
    phase: Phase

    def to_dict(self) -> dict:
        return {
            "type": "invalid_transition",
            "operation": self.operation,
            "phase": self.phase.value,
        }


@dataclass(frozen=True)
class ApplePlacementFailedEvent:
    """No legal apple cell existed; the board stays apple-less for now."""

    tick: int

    def to_dict(self) -> dict:
        return {"type": "apple_placement_failed", "tick": self.tick}


Event = (
    TickCompletedEvent
    | AppleEatenEvent
    | GameOverEvent
    | SessionStartedEvent
    | InvalidTransitionEvent
    | ApplePlacementFailedEvent
)
