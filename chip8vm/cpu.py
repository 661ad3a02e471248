"""
CHIP-8 interpreter engine: fetch / decode / execute.

The engine holds no state of its own. Every call receives the `Memory` and
the framebuffer surface it works on, plus the `old_instructions` flag that
selects original COSMAC VIP behaviour for 8XY6, 8XYE, BNNN and FX55/FX65.
"""

import logging
from collections import namedtuple
from typing import Optional

import numpy as np

from .constants import (
    DISPLAY_HEIGHT, DISPLAY_WIDTH, FLAG_REGISTER, FONT_GLYPH_SIZE, FONT_START,
)
from .errors import Chip8Error, InstructionError, InvalidOpcode

logger = logging.getLogger(__name__)

Instruction = namedtuple('Instruction', ['opcode', 'family', 'x', 'y', 'n', 'nn', 'nnn'])


def fetch(memory) -> int:
    """Read the opcode at PC and advance PC past it"""
    high_byte, low_byte = memory.fetch_instruction()
    memory.increment_pc()
    return (high_byte << 8) | low_byte


def decode(opcode: int) -> Instruction:
    return Instruction(
        opcode=opcode,
        family=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


def emulate_cycle(memory, screen, old_instructions: bool = False,
                  rng: Optional[np.random.Generator] = None) -> int:
    """Run one fetch-decode-execute cycle, return the executed opcode"""
    pc = memory.pc()
    opcode = fetch(memory)
    decode_and_execute(opcode, screen, memory, old_instructions, rng=rng, pc=pc)
    return opcode


def decode_and_execute(opcode: int, screen, memory, old_instructions: bool = False,
                       rng: Optional[np.random.Generator] = None, pc: Optional[int] = None):
    """Execute a single CHIP-8 instruction.

    Errors raised by a handler are re-raised as InstructionError carrying the
    opcode. Side effects applied before the failure are kept.
    """
    ins = decode(opcode)
    if logger.isEnabledFor(logging.DEBUG):
        where = f"0x{pc:03X}" if pc is not None else "?"
        logger.debug("Executing: 0x%04X at PC=%s", opcode, where)

    try:
        if ins.family == 0x0:
            zero_instructions(ins, screen, memory)
        elif ins.family == 0x1:  # JP addr
            memory.jump_pc(ins.nnn)
        elif ins.family == 0x2:  # CALL addr
            call_subroutine(ins.nnn, memory)
        elif ins.family == 0x3:  # SE Vx, byte
            skip_if(memory, memory.get_var_register(ins.x) == ins.nn)
        elif ins.family == 0x4:  # SNE Vx, byte
            skip_if(memory, memory.get_var_register(ins.x) != ins.nn)
        elif ins.family == 0x5:  # SE Vx, Vy
            skip_if(memory, memory.get_var_register(ins.x) == memory.get_var_register(ins.y))
        elif ins.family == 0x6:  # LD Vx, byte
            memory.set_var_register(ins.x, ins.nn)
        elif ins.family == 0x7:  # ADD Vx, byte (no carry flag)
            memory.set_var_register(ins.x, (memory.get_var_register(ins.x) + ins.nn) & 0xFF)
        elif ins.family == 0x8:
            basic_operations(ins, memory, old_instructions)
        elif ins.family == 0x9:  # SNE Vx, Vy
            skip_if(memory, memory.get_var_register(ins.x) != memory.get_var_register(ins.y))
        elif ins.family == 0xA:  # LD I, addr
            memory.set_index_register(ins.nnn)
        elif ins.family == 0xB:
            jump_with_offset(memory, ins.x, ins.nnn, old_instructions)
        elif ins.family == 0xC:  # RND Vx, byte
            rng = rng if rng is not None else np.random.default_rng()
            random_byte = int(rng.integers(0, 256))
            memory.set_var_register(ins.x, random_byte & ins.nn)
        elif ins.family == 0xD:  # DRW Vx, Vy, nibble
            draw_sprite(ins.x, ins.y, ins.n, memory, screen)
        elif ins.family == 0xE:
            skip_if_key(ins, memory, screen)
        else:
            f_instructions(ins, memory, screen, old_instructions)
    except Chip8Error as e:
        raise InstructionError(opcode, e, pc=pc) from e


def zero_instructions(ins: Instruction, screen, memory):
    if ins.opcode == 0x00E0:  # CLS
        screen.clear()
    elif ins.opcode == 0x00EE:  # RET
        memory.jump_pc(memory.pop_stack())
    else:
        raise InvalidOpcode(ins.opcode)


def call_subroutine(nnn: int, memory):
    memory.push_stack(memory.pc())
    memory.jump_pc(nnn)


def skip_if(memory, condition: bool):
    if condition:
        memory.increment_pc()


def basic_operations(ins: Instruction, memory, old_instructions: bool):
    """8XYN register-to-register arithmetic and logic.

    8XY4/8XY5/8XY7 write VF after Vx, so when X is F the flag wins.
    The shifts write VF first and keep the shifted value instead.
    """
    x = ins.x
    vx = memory.get_var_register(x)
    vy = memory.get_var_register(ins.y)

    if ins.n == 0x0:  # LD Vx, Vy
        memory.set_var_register(x, vy)
    elif ins.n == 0x1:  # OR Vx, Vy
        memory.set_var_register(x, vx | vy)
    elif ins.n == 0x2:  # AND Vx, Vy
        memory.set_var_register(x, vx & vy)
    elif ins.n == 0x3:  # XOR Vx, Vy
        memory.set_var_register(x, vx ^ vy)
    elif ins.n == 0x4:  # ADD Vx, Vy
        result = vx + vy
        memory.set_var_register(x, result & 0xFF)
        memory.set_var_register(FLAG_REGISTER, 1 if result > 0xFF else 0)
    elif ins.n == 0x5:  # SUB Vx, Vy
        memory.set_var_register(x, (vx - vy) & 0xFF)
        memory.set_var_register(FLAG_REGISTER, 1 if vx > vy else 0)  # NOT borrow
    elif ins.n == 0x6:  # SHR Vx {, Vy}
        shift_right(memory, x, vx, vy, old_instructions)
    elif ins.n == 0x7:  # SUBN Vx, Vy
        # Two's-complement wrap, same as 8XY5 (not "add 255" on borrow)
        memory.set_var_register(x, (vy - vx) & 0xFF)
        memory.set_var_register(FLAG_REGISTER, 1 if vy > vx else 0)  # NOT borrow
    elif ins.n == 0xE:  # SHL Vx {, Vy}
        shift_left(memory, x, vx, vy, old_instructions)
    else:
        raise InvalidOpcode(ins.opcode)


def shift_right(memory, x: int, vx: int, vy: int, old_instructions: bool):
    """Shifts write VF before Vx, so for 8F16 the shifted value stays in VF"""
    if old_instructions:
        memory.set_var_register(x, vy)
        vx = vy
    memory.set_var_register(FLAG_REGISTER, vx & 0x01)
    memory.set_var_register(x, vx >> 1)


def shift_left(memory, x: int, vx: int, vy: int, old_instructions: bool):
    if old_instructions:
        memory.set_var_register(x, vy)
        vx = vy
    # Raw high bit (0x80 or 0), not moved down to bit 0
    memory.set_var_register(FLAG_REGISTER, vx & 0x80)
    memory.set_var_register(x, (vx << 1) & 0xFF)


def jump_with_offset(memory, x: int, nnn: int, old_instructions: bool):
    if old_instructions:
        # BNNN: jump to NNN + V0
        memory.jump_pc(nnn + memory.get_var_register(0))
    else:
        # BXNN: jump to XNN + VX
        memory.jump_pc(nnn + memory.get_var_register(x))


def draw_sprite(x: int, y: int, n: int, memory, screen):
    """Draw an N-row sprite from I at (Vx, Vy); clips at the right and bottom edges"""
    index_register = memory.index_register()
    x_off = memory.get_var_register(x) % DISPLAY_WIDTH
    y_off = memory.get_var_register(y) % DISPLAY_HEIGHT
    collision = 0

    for row in range(n):
        y_cord = y_off + row
        if y_cord >= DISPLAY_HEIGHT:
            break
        sprite_byte = memory.read_ram_cell(index_register + row)

        for col in range(8):
            x_cord = x_off + col
            if x_cord >= DISPLAY_WIDTH:
                break
            if sprite_byte & (0x80 >> col):
                current = screen.get_pixel(x_cord, y_cord)
                if current:
                    collision = 1
                screen.set_pixel(x_cord, y_cord, not current)

    memory.set_var_register(FLAG_REGISTER, collision)
    screen.draw()


def skip_if_key(ins: Instruction, memory, screen):
    if ins.nn == 0x9E:  # SKP Vx
        skip_if(memory, screen.key_state(memory.get_var_register(ins.x)))
    elif ins.nn == 0xA1:  # SKNP Vx
        skip_if(memory, not screen.key_state(memory.get_var_register(ins.x)))
    else:
        raise InvalidOpcode(ins.opcode)


def f_instructions(ins: Instruction, memory, screen, old_instructions: bool):
    x = ins.x
    vx = memory.get_var_register(x)

    if ins.nn == 0x07:  # LD Vx, DT
        memory.set_var_register(x, memory.delay_register())
    elif ins.nn == 0x0A:  # LD Vx, K
        wait_for_keyinput(memory, screen, x)
    elif ins.nn == 0x15:  # LD DT, Vx
        memory.set_delay_register(vx)
    elif ins.nn == 0x18:  # LD ST, Vx
        memory.set_sounds_register(vx)
    elif ins.nn == 0x1E:  # ADD I, Vx
        add_to_index(memory, vx)
    elif ins.nn == 0x29:  # LD F, Vx
        memory.set_index_register(FONT_START + FONT_GLYPH_SIZE * (vx & 0x0F))
    elif ins.nn == 0x33:  # LD B, Vx
        to_digits(memory, vx)
    elif ins.nn == 0x55:  # LD [I], Vx
        store_registers(memory, x, old_instructions)
    elif ins.nn == 0x65:  # LD Vx, [I]
        load_registers(memory, x, old_instructions)
    else:
        raise InvalidOpcode(ins.opcode)


def wait_for_keyinput(memory, screen, x: int):
    """FX0A: no key down means rewind PC so this instruction runs again"""
    if screen.any_key_pressed():
        memory.set_var_register(x, screen.get_pressed_key())
    else:
        memory.decrement_pc()


def add_to_index(memory, vx: int):
    result = memory.index_register() + vx
    if result > 0x0FFF:
        memory.set_var_register(FLAG_REGISTER, 1)
    memory.set_index_register(result & 0xFFFF)


def to_digits(memory, vx: int):
    """FX33: 255 -> [2, 5, 5] at I, I+1, I+2"""
    memory.write_ram(memory.index_register(), [vx // 100, (vx // 10) % 10, vx % 10])


def store_registers(memory, x: int, old_instructions: bool):
    index = memory.index_register()
    memory.write_ram(index, [memory.get_var_register(i) for i in range(x + 1)])
    if old_instructions:
        memory.set_index_register(index + x + 1)


def load_registers(memory, x: int, old_instructions: bool):
    index = memory.index_register()
    for i in range(x + 1):
        memory.set_var_register(i, memory.read_ram_cell(index + i))
    if old_instructions:
        memory.set_index_register(index + x + 1)
