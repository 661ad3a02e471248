"""
Real-time driver loop.

Polls host input, runs one interpreter cycle per instruction tick, paces the
instruction clock at the configured frequency and decrements the timers at
60Hz measured on the wall clock, independent of the instruction rate.
"""

import logging
import time
from typing import Callable, Optional

from .constants import TIMER_FREQ

logger = logging.getLogger(__name__)


class TimerClock:
    """Counts whole timer intervals elapsed on a monotonic clock"""

    def __init__(self, rate: float = TIMER_FREQ, clock: Callable[[], float] = time.perf_counter):
        self.interval = 1.0 / rate
        self.clock = clock
        self.last_tick = clock()

    def due(self) -> int:
        """Number of ticks owed since the last call (each interval counted once)"""
        elapsed = self.clock() - self.last_tick
        ticks = int(elapsed // self.interval)
        if ticks > 0:
            self.last_tick += ticks * self.interval
        return ticks


def run(emulator, frequency: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter) -> int:
    """Drive the emulator until its screen reports closed, return cycles executed.

    Engine errors are not caught here; they end the loop and reach the caller.
    """
    frequency = frequency or emulator.config.frequency
    core_interval = 1.0 / frequency
    timers = TimerClock(clock=clock)
    screen = emulator.screen
    cycles = 0

    logger.info("Running at %.0f Hz (legacy instructions: %s)",
                frequency, emulator.config.old_instructions)

    next_time = clock()
    while True:
        screen.handle_events()
        if screen.closed():
            break

        emulator.step()
        cycles += 1

        for _ in range(timers.due()):
            emulator.tick_timers()

        # Wait for next CPU instruction
        next_time += core_interval
        delay = next_time - clock()
        if delay > 0:
            sleep(delay)
        else:
            # Lagging behind, don't try to catch up with a burst of cycles
            next_time = clock()

    logger.info("Window closed after %d cycles", cycles)
    return cycles
