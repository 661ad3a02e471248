"""
chip8vm: a CHIP-8 interpreter.

The interpreter engine (cpu) works on an explicit state store (Memory) and a
framebuffer/keypad surface (Framebuffer, or TkScreen for a window).
"""

from .config import EmulatorConfig
from .display import Framebuffer
from .emulator import Chip8Emulator
from .errors import (
    Chip8Error, EmptyStack, InstructionError, InvalidOpcode, InvalidPixelPosition,
    NoKeyPressed, OutOfRangeKey, OutOfRangeRegister, RomLoadFailure,
)
from .memory import Memory

__version__ = "0.1.0"

__all__ = [
    "Chip8Emulator", "Chip8Error", "EmptyStack", "EmulatorConfig", "Framebuffer",
    "InstructionError", "InvalidOpcode", "InvalidPixelPosition", "Memory",
    "NoKeyPressed", "OutOfRangeKey", "OutOfRangeRegister", "RomLoadFailure",
]
