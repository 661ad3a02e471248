"""ROM loading: raw bytes copied verbatim to the program start address."""

import logging
from pathlib import Path
from typing import Union

import numpy as np

from .constants import MAX_ROM_SIZE, PROGRAM_START
from .errors import RomLoadFailure

logger = logging.getLogger(__name__)

RomSource = Union[str, Path, bytes, bytearray, np.ndarray]


def read_rom(path: Union[str, Path]) -> bytes:
    """Load a ROM file"""
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomLoadFailure(f"Couldn't read rom file {path}: {e}") from e


def load_rom(memory, rom_data: RomSource) -> int:
    """Write a ROM into memory at 0x200, return its size in bytes"""
    if isinstance(rom_data, (str, Path)):
        rom_bytes = read_rom(rom_data)
    elif isinstance(rom_data, np.ndarray):
        rom_bytes = rom_data.astype(np.uint8).tobytes()
    else:
        rom_bytes = bytes(rom_data)

    if len(rom_bytes) > MAX_ROM_SIZE:
        raise RomLoadFailure(f"ROM too large: {len(rom_bytes)} bytes, max {MAX_ROM_SIZE}")

    memory.write_ram(PROGRAM_START, rom_bytes)
    logger.info("Loaded ROM: %d bytes", len(rom_bytes))
    if len(rom_bytes) >= 2:
        logger.debug("First instruction: 0x%02X%02X", rom_bytes[0], rom_bytes[1])
    return len(rom_bytes)
