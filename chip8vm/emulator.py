"""
Single-instance CHIP-8 emulator.

Bundles the state store, a framebuffer surface and the run configuration so
front-ends and tests have one object to drive. The opcode semantics stay in
cpu.py and receive the state explicitly on every cycle.
"""

import logging
from typing import Dict, Optional

import numpy as np

from . import cpu
from .config import EmulatorConfig
from .display import Framebuffer
from .memory import Memory
from .rom import RomSource, load_rom

logger = logging.getLogger(__name__)


class Chip8Emulator:
    """
    One CHIP-8 machine: memory, screen/keypad surface and config.
    Independent instances share nothing, so several can run side by side.
    """

    def __init__(self, config: Optional[EmulatorConfig] = None, screen: Optional[Framebuffer] = None):
        self.config = config or EmulatorConfig()
        self.screen = screen if screen is not None else Framebuffer()
        self.memory = Memory()
        self.rng = np.random.default_rng(self.config.seed)
        self.stats = {
            'instructions_executed': 0,
            'display_clears': 0,
            'sprites_drawn': 0,
            'timer_ticks': 0,
        }

    def load_rom(self, rom_data: RomSource) -> int:
        """Load a ROM into memory"""
        return load_rom(self.memory, rom_data)

    def step(self) -> int:
        """Execute one instruction, return its opcode"""
        opcode = cpu.emulate_cycle(self.memory, self.screen, self.config.old_instructions, rng=self.rng)
        self.stats['instructions_executed'] += 1
        if opcode == 0x00E0:
            self.stats['display_clears'] += 1
        elif opcode & 0xF000 == 0xD000:
            self.stats['sprites_drawn'] += 1
        return opcode

    def tick_timers(self):
        """One 60Hz timer tick"""
        self.memory.decrement_delay()
        self.memory.decrement_sound()
        self.stats['timer_ticks'] += 1

    def run(self, max_cycles: int = 1000, timer_every: Optional[int] = None) -> int:
        """Run emulator for up to max_cycles cycles, return how many ran.

        With timer_every set, the timers tick once every that many cycles
        instead of following the wall clock.
        """
        cycles = 0
        for cycle in range(max_cycles):
            if self.screen.closed():
                break
            self.step()
            cycles += 1
            if timer_every and (cycle + 1) % timer_every == 0:
                self.tick_timers()
        return cycles

    def set_key(self, key: int, pressed: bool):
        self.screen.set_key(key, pressed)

    def get_display(self) -> np.ndarray:
        """Get current display state as 2D array"""
        return self.screen.pixels()

    def get_stats(self) -> Dict[str, int]:
        return self.stats.copy()
