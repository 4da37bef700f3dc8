"""Tests for the fixed-interval game driver."""

import logging

import pytest

from grid_snake.config import GameConfig
from grid_snake.driver import GameDriver
from grid_snake.engine import GameEngine
from grid_snake.events import (
    AppleEatenEvent,
    GameOverEvent,
    SessionStartedEvent,
    TickCompletedEvent,
)
from grid_snake.snake import Direction


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of(self, kind):
        return [e for e in self.events if isinstance(e, kind)]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def driver(recorder):
    engine = GameEngine(GameConfig(seed=0))
    return GameDriver(
        engine,
        on_tick=recorder,
        on_apple_eaten=recorder,
        on_game_over=recorder,
        on_reset=recorder,
    )


class TestDriverInit:
    def test_interval_from_config(self):
        engine = GameEngine(GameConfig(tick_interval=0.05, seed=0))
        assert GameDriver(engine).tick_interval == 0.05

    def test_interval_override(self):
        engine = GameEngine(GameConfig(seed=0))
        assert GameDriver(engine, tick_interval=1.0).tick_interval == 1.0

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="positive"):
            GameDriver(GameEngine(GameConfig(seed=0)), tick_interval=0)


class TestDriverDispatch:
    def test_step_calls_tick_hook(self, driver, recorder):
        driver.step()
        assert len(recorder.of(TickCompletedEvent)) == 1

    def test_apple_hook(self, driver, recorder):
        engine = driver.engine
        engine.apple = engine.snake.head().offset(engine.direction)
        driver.step()
        assert len(recorder.of(AppleEatenEvent)) == 1
        assert isinstance(recorder.events[-1], TickCompletedEvent)

    def test_game_over_and_restart_hooks(self, driver, recorder):
        driver.run(sleep=lambda _: None)
        assert len(recorder.of(GameOverEvent)) == 1
        driver.restart()
        assert len(recorder.of(SessionStartedEvent)) == 1
        assert driver.engine.alive

    def test_restart_while_running_does_nothing(self, driver, recorder):
        driver.step()
        driver.restart()
        assert recorder.of(SessionStartedEvent) == []

    def test_missing_hooks_are_fine(self):
        driver = GameDriver(GameEngine(GameConfig(seed=0)))
        assert isinstance(driver.step()[-1], TickCompletedEvent)

    def test_placement_failure_is_logged(self, caplog):
        config = GameConfig(grid_width=1, grid_height=5, initial_length=3, seed=0)
        driver = GameDriver(GameEngine(config))
        with caplog.at_level(logging.WARNING, logger="grid_snake.driver"):
            driver.step()
        assert "No apple could be placed" in caplog.text


class TestDriverInput:
    def test_only_first_turn_per_tick(self, driver):
        assert driver.push_direction(Direction.EAST)
        assert not driver.push_direction(Direction.WEST)
        driver.step()
        assert driver.engine.snake.head() == (11, 10)


class TestDriverClock:
    def test_advance_time_accumulates(self, driver, recorder):
        assert driver.advance_time(0.1) == []
        assert driver.advance_time(0.05) == []
        events = driver.advance_time(0.06)
        assert isinstance(events[-1], TickCompletedEvent)
        assert driver.engine.tick_count == 1

    def test_advance_time_one_tick_per_frame(self, driver):
        driver.advance_time(1.0)
        assert driver.engine.tick_count == 1

    def test_advance_time_idle_after_game_over(self, driver):
        driver.run(sleep=lambda _: None)
        ticks = driver.engine.tick_count
        assert driver.advance_time(1.0) == []
        assert driver.engine.tick_count == ticks


class TestDriverRun:
    def test_runs_until_wall(self, driver):
        sleeps = []
        score = driver.run(sleep=sleeps.append)
        assert driver.engine.game_over
        # Nine moves to z=19, the tenth hits the wall.
        assert driver.engine.tick_count == 10
        assert sleeps == [0.2] * 9
        assert score == driver.engine.score

    def test_max_ticks(self, driver):
        driver.run(max_ticks=3, sleep=lambda _: None)
        assert driver.engine.tick_count == 3
        assert driver.engine.alive

    def test_poll_input(self, driver):
        turns = iter([Direction.EAST, None, Direction.SOUTH])
        driver.run(max_ticks=3, poll_input=lambda: next(turns), sleep=lambda _: None)
        assert driver.engine.snake.head() == (12, 9)
