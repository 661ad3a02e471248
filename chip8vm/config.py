"""Run configuration, fixed once at startup."""

from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_FREQUENCY, DEFAULT_SCALE, TIMER_FREQ


@dataclass(frozen=True)
class EmulatorConfig:
    old_instructions: bool = False     # Original COSMAC VIP behaviour for 8XY6/8XYE/BNNN/FX55/FX65
    frequency: float = DEFAULT_FREQUENCY  # Instruction clock in Hz; timers always run at 60Hz
    scale: int = DEFAULT_SCALE         # Window pixels per CHIP-8 pixel
    seed: Optional[int] = None         # Seed for CXNN, None for fresh entropy

    def __post_init__(self):
        if self.frequency <= 0:
            raise ValueError(f"frequency must be positive, got {self.frequency}")
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")

    @property
    def cycles_per_timer_tick(self) -> int:
        """Instruction cycles per 1/60s at this frequency (at least 1)"""
        return max(1, round(self.frequency / TIMER_FREQ))
