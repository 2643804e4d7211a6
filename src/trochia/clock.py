'''Variable-rate simulation clock
SimulationClock class definition'''

import asyncio
from time import perf_counter
from typing import Callable, List, Optional

import numpy as np

from .config import config
from .utils import validation_error

Listener = Callable[[float], None]


class SimulationClock:
    """
    Wall-clock driven source of simulated time.

    While running, the clock ticks every config.CLOCK_DELAY_MS milliseconds
    of real time. Each tick advances simulated time by the elapsed real time
    [ms] multiplied by the speed, then calls every listener with the new
    simulated time.

    Ticks are scheduled on an asyncio event loop: the one passed in, or the
    loop running when start() is called. With no loop available the clock
    must be driven by calling tick() directly.

    Parameters
    ----------
    speed : float, optional
        Simulated time units per real millisecond
        (default config.DEFAULT_CLOCK_SPEED)
    time_source : callable, optional
        Returns real time in seconds (default time.perf_counter)
    loop : asyncio.AbstractEventLoop, optional
        Event loop used for scheduling ticks

    Examples
    --------
    >>> clock = SimulationClock()
    >>> clock.add_listener(ship.advance)
    >>> async def main():
    ...     clock.start()
    ...     await asyncio.sleep(1.0)
    ...     clock.stop()
    >>> asyncio.run(main())
    """
    def __init__(self, speed: Optional[float] = None,
                 time_source: Callable[[], float] = perf_counter,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self._time = 0.0
        self._speed = config.DEFAULT_CLOCK_SPEED
        if speed is not None:
            self.set_speed(speed)
        self._time_source = time_source
        self._loop = loop
        self._real_time: Optional[float] = None
        self._running = False
        self._handle: Optional[asyncio.TimerHandle] = None
        self._listeners: List[Listener] = []

    # ========== STATE CONTROL ==========
    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Start ticking; does nothing if already running."""
        if self._running:
            return
        self._running = True
        self._real_time = self._time_source()
        self._schedule()

    def stop(self):
        """Stop ticking and forget the real-time reference."""
        self._running = False
        self._real_time = None
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def pause(self):
        """Toggle between running and stopped."""
        if not self._running:
            self.start()
        else:
            self.stop()

    # ========== TICKING ==========
    def tick(self):
        """
        Advance simulated time by the real time elapsed since the last tick
        and notify listeners. Ignored while stopped.

        A listener that raises stops the clock; the exception propagates.
        """
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if not self._running or self._real_time is None:
            return
        now = self._time_source()
        self._time += self._speed * (now - self._real_time) * 1000.0
        self._real_time = now
        try:
            for listener in self._listeners:
                listener(self._time)
        except Exception:
            self.stop()
            raise
        if self._running:
            self._schedule()

    def _schedule(self):
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # no event loop, ticks are driven manually
                return
        self._handle = loop.call_later(config.CLOCK_DELAY_MS / 1000.0, self.tick)

    # ========== ACCESSORS ==========
    def set_speed(self, speed: float):
        """Set simulated time units per real millisecond (next tick on)."""
        if not np.isfinite(speed):
            validation_error(f"Clock speed must be finite, got {speed}")
            return
        self._speed = float(speed)

    def get_speed(self) -> float:
        return self._speed

    def get_time(self) -> float:
        """Current simulated time"""
        return self._time

    def add_listener(self, listener: Listener):
        """Register fn(t) to be called with the simulated time every tick."""
        self._listeners.append(listener)

    def __repr__(self):
        state = "running" if self._running else "stopped"
        return (f"SimulationClock({state}, t={self._time:.3f}, "
                f"speed={self._speed}, listeners={len(self._listeners)})")
