"""The application window and its fixed-rate tick and frame loop."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass

from spheremap.logger import log

TARGET_TPS = 60
ESCAPE_KEY = 0xFF1B  # pyglet's key symbol for Escape


class WindowError(RuntimeError):
    """The window or its graphics could not be set up."""


class KeyAction(enum.Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release queued for the next tick."""

    key: int
    action: KeyAction
    mods: int = 0

    @property
    def requests_close(self) -> bool:
        return self.key == ESCAPE_KEY and self.action is KeyAction.PRESS


@dataclass(frozen=True)
class TickResult:
    """What one pass of the loop should do."""

    ticks: int
    render: bool
    rates: tuple[int, int] | None = None


class TickClock:
    """Turns elapsed time into whole ticks and once-a-second frame/tick counts."""

    def __init__(self, start_time: float, ticks_per_second: int = TARGET_TPS) -> None:
        if ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        self.ticks_per_second = ticks_per_second
        self._seconds_per_tick = 1.0 / ticks_per_second
        self._last_second = start_time
        self._last_loop = start_time
        self._pending = 0.0
        self._frames = 0
        self._ticks = 0

    def advance(self, current_time: float) -> TickResult:
        """Account for time up to current_time and report what is due."""
        self._pending += current_time - self._last_loop
        ticks = 0
        while self._pending >= self._seconds_per_tick:
            ticks += 1
            self._pending -= self._seconds_per_tick
        self._ticks += ticks
        render = ticks > 0
        if render:
            self._frames += 1

        rates = None
        if current_time - self._last_second >= 1.0:
            self._last_second = current_time
            rates = (self._frames, self._ticks)
            self._frames = 0
            self._ticks = 0
        self._last_loop = current_time
        return TickResult(ticks, render, rates)


class Window:
    """A resizable GL 3.3 window drawing the quad at a fixed tick rate."""

    def __init__(self, width: int, height: int, title: str) -> None:
        # Deferred so the clock and key types work without a display.
        import pyglet.window

        from spheremap.graphics import Graphics

        config = pyglet.gl.Config(
            major_version=3, minor_version=3, forward_compatible=True, double_buffer=True
        )
        try:
            native = pyglet.window.Window(
                width, height, title, resizable=True, vsync=False, config=config
            )
        except Exception as error:
            log("Failed to open window.")
            raise WindowError("failed to open window") from error

        native.switch_to()
        native.push_handlers(
            on_resize=self._on_resize,
            on_key_press=self._on_key_press,
            on_key_release=self._on_key_release,
            on_close=self._on_close,
        )
        self._window = native
        self._dims = (width, height)
        self._resized = True
        self._key_events: list[KeyEvent] = []
        self._should_close = False
        log("Successfully initialised window.")

        try:
            self._graphics = Graphics()
        except Exception as error:
            log("Failed to initialize graphics.")
            native.close()
            self._window = None
            raise WindowError("failed to initialise graphics") from error

    def _on_resize(self, width: int, height: int) -> bool:
        self._dims = tuple(self._window.get_framebuffer_size())
        self._resized = True
        return True

    def _on_key_press(self, symbol: int, modifiers: int) -> bool:
        self._key_events.append(KeyEvent(symbol, KeyAction.PRESS, modifiers))
        return True

    def _on_key_release(self, symbol: int, modifiers: int) -> bool:
        self._key_events.append(KeyEvent(symbol, KeyAction.RELEASE, modifiers))
        return True

    def _on_close(self) -> bool:
        self._should_close = True
        return True

    def _process_input(self) -> None:
        if self._resized:
            self._graphics.resize(*self._dims)
            self._resized = False
        events, self._key_events = self._key_events, []
        if any(event.requests_close for event in events):
            self.close()

    def run(self) -> None:
        """Tick, render and handle events until the window is asked to close."""
        if self._window is None:
            log("Window has not been initialised.")
            return
        log("Starting window loop.")
        clock = TickClock(time.perf_counter(), TARGET_TPS)
        while not self._should_close:
            self._window.dispatch_events()
            result = clock.advance(time.perf_counter())
            for _ in range(result.ticks):
                self._process_input()
            if result.render:
                self._graphics.render()
                self._window.flip()
            if result.rates is not None:
                fps, tps = result.rates
                if fps != TARGET_TPS or tps != TARGET_TPS:
                    log("FPS: ", fps, ", TPS: ", tps)
            time.sleep(0)
        log("Finished window loop.")

    def close(self) -> None:
        """Ask the loop to stop."""
        if self._window is None:
            log("Window has not been initialised.")
            return
        self._should_close = True

    def deinit(self) -> None:
        """Release the graphics and destroy the window."""
        if self._window is None:
            log("Window has not been initialised.")
            return
        self._graphics.close()
        self._window.close()
        self._window = None
        log("Successfully deinitialised window.")

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.deinit()