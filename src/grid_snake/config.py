"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a game configuration is rejected."""


_INT_FIELDS = (
    "grid_width",
    "grid_height",
    "initial_length",
    "growth_per_apple",
    "sample_attempts_per_cell",
    "seed",
)
_FLOAT_FIELDS = ("tick_interval", "min_apple_distance", "apple_eaten_distance")


@dataclass(frozen=True)
class GameConfig:
    """Every tunable of a game session.

    ``tick_interval`` is read by the driver only; the engine itself has no
    notion of wall-clock time. Supports JSON serialization.
    """

    grid_width: int = 20
    grid_height: int = 20
    tick_interval: float = 0.2
    initial_length: int = 5
    growth_per_apple: int = 3
    min_apple_distance: float = 5.0
    apple_eaten_distance: float = 0.1
    initial_direction: str = "north"
    sample_attempts_per_cell: int = 2
    seed: int | None = None

    def __post_init__(self) -> None:
        self._check_types()
        if self.grid_width < 1 or self.grid_height < 1:
            raise ConfigurationError("grid_width and grid_height must be positive.")
        if self.tick_interval <= 0:
            raise ConfigurationError("tick_interval must be positive.")
        if self.initial_length < 1:
            raise ConfigurationError("initial_length must be at least 1.")
        if self.growth_per_apple < 0:
            raise ConfigurationError("growth_per_apple must be non-negative.")
        if self.min_apple_distance < 0:
            raise ConfigurationError("min_apple_distance must be non-negative.")
        if self.apple_eaten_distance <= 0:
            raise ConfigurationError("apple_eaten_distance must be positive.")
        if self.sample_attempts_per_cell < 1:
            raise ConfigurationError("sample_attempts_per_cell must be at least 1.")
        try:
            direction = self.direction
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        # The whole body trails behind the centred head.
        dx, dz = direction.offset
        head_x, head_z = self.grid_width // 2, self.grid_height // 2
        tail_x = head_x - dx * (self.initial_length - 1)
        tail_z = head_z - dz * (self.initial_length - 1)
        if not (0 <= tail_x < self.grid_width and 0 <= tail_z < self.grid_height):
            raise ConfigurationError(
                "initial_length does not fit the configured grid; "
                "increase grid size or reduce length."
            )

    def _check_types(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if name == "seed" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}."
                )
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"{name} must be a number, got {value!r}."
                )
        if not isinstance(self.initial_direction, str):
            raise ConfigurationError(
                f"initial_direction must be a string, got {self.initial_direction!r}."
            )

    @property
    def direction(self) -> Direction:
        return Direction.parse(self.initial_direction)

    def replace(self, **overrides) -> GameConfig:
        """Return a copy with *overrides* applied (and re-validated)."""
        data = self.to_dict()
        data.update(overrides)
        return type(self)(**data)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file, ignoring unknown keys."""
        raw = json.loads(Path(path).read_text())
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in raw.items() if k in known})
