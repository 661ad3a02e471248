"""
Exceptions raised by the interpreter and its collaborators.

Every engine error is fatal for the run: the cycle loop does not retry a
failed instruction, it hands the error (annotated with the opcode) to the
driver which stops.
"""

from typing import Optional


class Chip8Error(Exception):
    pass


class OutOfRangeRegister(Chip8Error):
    def __init__(self, register_id: int):
        self.register_id = register_id
        super().__init__(
            f"Var register id is out of range, must be 0x0-0xF id: {register_id}")


class OutOfRangeKey(Chip8Error):
    def __init__(self, key: int):
        self.key = key
        super().__init__(f"Invalid key, key must be 0x0-0xF, key: {key}")


class EmptyStack(Chip8Error):
    def __init__(self):
        super().__init__("pop called on empty stack")


class InvalidOpcode(Chip8Error):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Invalid op code 0x{opcode:04X}")


class InvalidPixelPosition(Chip8Error):
    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        super().__init__(f"Accessed invalid pixel position: x: {x}, y: {y}")


class RomLoadFailure(Chip8Error):
    pass


class InstructionError(Chip8Error):
    """An engine error annotated with the instruction that caused it"""

    def __init__(self, opcode: int, cause: Chip8Error, pc: Optional[int] = None):
        self.opcode = opcode
        self.cause = cause
        self.pc = pc
        where = f" at PC=0x{pc:03X}" if pc is not None else ""
        super().__init__(
            f"Error in instruction with opcode 0x{opcode:04X}{where}: {cause}")


class NoKeyPressed(Chip8Error):
    def __init__(self):
        super().__init__("get_pressed_key was called without checking if a key was pressed")
