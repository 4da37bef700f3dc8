"""Grid Snake — embeddable snake simulation core."""

from grid_snake.apple import AppleSampler
from grid_snake.collision import CollisionCause, collision_cause, is_collision
from grid_snake.config import ConfigurationError, GameConfig
from grid_snake.driver import GameDriver
from grid_snake.engine import GameEngine
from grid_snake.events import (
    AppleEatenEvent,
    ApplePlacementFailedEvent,
    GameOverEvent,
    InvalidTransitionEvent,
    Phase,
    SessionStartedEvent,
    Snapshot,
    TickCompletedEvent,
)
from grid_snake.grid import Grid, GridPosition
from grid_snake.snake import Direction, Snake

__all__ = [
    "AppleEatenEvent",
    "ApplePlacementFailedEvent",
    "AppleSampler",
    "CollisionCause",
    "ConfigurationError",
    "Direction",
    "GameConfig",
    "GameDriver",
    "GameEngine",
    "GameOverEvent",
    "Grid",
    "GridPosition",
    "InvalidTransitionEvent",
    "Phase",
    "SessionStartedEvent",
    "Snake",
    "Snapshot",
    "TickCompletedEvent",
    "collision_cause",
    "is_collision",
]
