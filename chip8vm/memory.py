"""
CHIP-8 state store.

Owns RAM (font pre-loaded at 0x050), the 16 variable registers, the index
register, both timers, the program counter and the call stack. No opcode
semantics live here, only accessors and the saturating timer decrement.
"""

from typing import List, Tuple, Union

import numpy as np

from .constants import (
    CHIP8_FONT, FONT_SIZE, FONT_START, MEMORY_SIZE, PROGRAM_START, REGISTER_COUNT,
)
from .errors import EmptyStack, OutOfRangeRegister


class Memory:
    """RAM, registers, timers, program counter and stack of one CHIP-8 machine"""

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset to power-on state"""
        self.ram = np.zeros(MEMORY_SIZE, dtype=np.uint8)
        self.var_registers = np.zeros(REGISTER_COUNT, dtype=np.uint8)
        self.stack: List[int] = []
        # Plain ints, not numpy scalars, so arithmetic on them never wraps silently
        self._index_register = 0
        self._delay_register = 0
        self._sound_register = 0
        self._program_counter = PROGRAM_START

        # Load font into memory
        self.ram[FONT_START:FONT_START + FONT_SIZE] = CHIP8_FONT

    # Variable registers

    def set_var_register(self, register_id: int, value: int):
        if not 0 <= register_id < REGISTER_COUNT:
            raise OutOfRangeRegister(register_id)
        self.var_registers[register_id] = value & 0xFF

    def get_var_register(self, register_id: int) -> int:
        if not 0 <= register_id < REGISTER_COUNT:
            raise OutOfRangeRegister(register_id)
        return int(self.var_registers[register_id])

    # Index register

    def set_index_register(self, address: int):
        self._index_register = address

    def index_register(self) -> int:
        return self._index_register

    # Program counter

    def jump_pc(self, address: int):
        self._program_counter = address

    def increment_pc(self):
        self._program_counter += 2

    def decrement_pc(self):
        """Step back one instruction so it runs again on the next cycle"""
        self._program_counter -= 2

    def pc(self) -> int:
        return self._program_counter

    # Call stack

    def push_stack(self, address: int):
        self.stack.append(address)

    def pop_stack(self) -> int:
        if not self.stack:
            raise EmptyStack()
        return self.stack.pop()

    def stack_depth(self) -> int:
        return len(self.stack)

    # RAM

    def fetch_instruction(self) -> Tuple[int, int]:
        """Return the two instruction bytes at the program counter.

        The counter is not advanced here; the caller does that right after
        fetching so jumps executed later in the cycle are not overwritten.
        """
        pc = self._program_counter
        return int(self.ram[pc]), int(self.ram[pc + 1])

    def write_ram(self, address: int, data: Union[bytes, bytearray, List[int], np.ndarray]):
        if not isinstance(data, np.ndarray):
            data = np.frombuffer(bytes(data), dtype=np.uint8)
        self.ram[address:address + len(data)] = data

    def read_ram_cell(self, address: int) -> int:
        return int(self.ram[address])

    def read_ram(self, address: int, length: int) -> bytes:
        return self.ram[address:address + length].tobytes()

    # Timers

    def decrement_delay(self):
        if self._delay_register != 0:
            self._delay_register -= 1

    def decrement_sound(self):
        if self._sound_register != 0:
            self._sound_register -= 1

    def delay_register(self) -> int:
        return self._delay_register

    def sound_register(self) -> int:
        return self._sound_register

    def set_delay_register(self, value: int):
        self._delay_register = value & 0xFF

    def set_sounds_register(self, value: int):
        self._sound_register = value & 0xFF
