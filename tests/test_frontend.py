"""Tests for the pygame front end."""

import numpy as np
import pytest

pygame = pytest.importorskip("pygame")

from grid_snake import frontend  # noqa: E402
from grid_snake.config import GameConfig  # noqa: E402
from grid_snake.engine import GameEngine  # noqa: E402
from grid_snake.frontend import (  # noqa: E402
    CELL_SIZE,
    GAME_OVER_COLOR,
    HEAD_COLOR,
    HUD_HEIGHT,
    KEY_DIRECTIONS,
    SAMPLE_RATE,
    WHITE,
    Audio,
    Renderer,
    play,
    tone,
)
from grid_snake.snake import Direction  # noqa: E402


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def screen(headless):
    return pygame.display.set_mode(
        (20 * CELL_SIZE, 20 * CELL_SIZE + HUD_HEIGHT),
    )


def _finished_engine(tick_interval: float = 0.2) -> GameEngine:
    engine = GameEngine(GameConfig(seed=0, tick_interval=tick_interval))
    while not engine.game_over:
        engine.tick()
    return engine


def _has_color(surface, color, xs, ys) -> bool:
    return any(
        tuple(surface.get_at((x, y)))[:3] == color
        for x in xs for y in ys
    )


class TestKeyMapping:
    def test_arrows_cover_all_directions(self):
        assert set(KEY_DIRECTIONS.values()) == set(Direction)

    def test_up_moves_north(self):
        assert KEY_DIRECTIONS[pygame.K_UP] is Direction.NORTH
        assert KEY_DIRECTIONS[pygame.K_LEFT] is Direction.WEST


class TestTone:
    def test_shape_and_dtype(self):
        samples = tone(440, 0.5)
        assert samples.dtype == np.int16
        assert samples.shape == (SAMPLE_RATE // 2,)

    def test_fades_out(self):
        samples = tone(440, 0.1, slide=-200)
        assert abs(int(samples[-1])) <= 1
        assert np.abs(samples).max() > 1000


class TestRenderer:
    def test_z_zero_is_bottom_row(self, screen):
        renderer = Renderer(screen, 20, 20)
        bottom = renderer.cell_rect(0, 0)
        top = renderer.cell_rect(3, 19)
        assert bottom.top == HUD_HEIGHT + 19 * CELL_SIZE
        assert bottom.bottom == screen.get_height()
        assert top.top == HUD_HEIGHT
        assert top.left == 3 * CELL_SIZE
        assert top.size == (CELL_SIZE, CELL_SIZE)

    def test_draw_running_snapshot(self, screen):
        renderer = Renderer(screen, 20, 20)
        snapshot = GameEngine(GameConfig(seed=0)).snapshot()
        renderer.draw(snapshot)
        head = renderer.cell_rect(*snapshot.head)
        assert tuple(screen.get_at(head.center))[:3] == HEAD_COLOR
        # Score line sits in the HUD strip.
        assert _has_color(screen, WHITE, range(8, 120), range(8, HUD_HEIGHT))

    def test_draw_game_over_snapshot(self, screen):
        renderer = Renderer(screen, 20, 20)
        snapshot = _finished_engine().snapshot()
        assert not snapshot.alive
        renderer.draw(snapshot)
        cx, cy = screen.get_rect().center
        assert _has_color(
            screen, GAME_OVER_COLOR, range(cx - 120, cx + 120, 2), range(cy - 20, cy + 20),
        )
        # The head reached z=19, well clear of the centred banner.
        head = renderer.cell_rect(*snapshot.head)
        assert tuple(screen.get_at(head.center))[:3] == HEAD_COLOR

    def test_draw_without_apple(self, screen):
        engine = GameEngine(GameConfig(seed=0))
        engine.apple = None
        Renderer(screen, 20, 20).draw(engine.snapshot())


class TestAudio:
    def test_disabled_when_mixer_fails(self, monkeypatch):
        def broken_init(**kwargs):
            raise pygame.error("no audio device")

        monkeypatch.setattr(pygame.mixer, "init", broken_init)
        audio = Audio()
        assert not audio.enabled
        # Cues are skipped without touching the mixer.
        audio.on_game_over(None)
        audio.on_apple_eaten(None)


class TestPlay:
    def _script(self, monkeypatch, batches):
        frames = iter(batches)
        monkeypatch.setattr(
            frontend.pygame.event, "get", lambda: next(frames, [pygame.event.Event(pygame.QUIT)]),
        )

    def test_restart_and_arrow_keys(self, headless, monkeypatch):
        engine = _finished_engine(tick_interval=60.0)
        self._script(monkeypatch, [
            [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r)],
            [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT)],
            [pygame.event.Event(pygame.QUIT)],
        ])
        score = play(engine)
        assert score == 0
        assert engine.alive
        assert engine.tick_count == 0
        assert engine.snake.head() == (10, 10)
        assert engine.pending_direction is Direction.WEST

    def test_restart_ignored_while_running(self, headless, monkeypatch):
        engine = GameEngine(GameConfig(seed=0, tick_interval=60.0))
        engine.tick()
        self._script(monkeypatch, [
            [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r)],
            [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)],
        ])
        play(engine)
        assert engine.tick_count == 1
        assert engine.snake.head() == (10, 11)
