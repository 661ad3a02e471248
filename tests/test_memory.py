import pytest

from chip8vm.constants import CHIP8_FONT, FONT_START, PROGRAM_START
from chip8vm.errors import EmptyStack, OutOfRangeRegister
from chip8vm.memory import Memory


def test_initial_state() -> None:
    memory = Memory()

    assert memory.pc() == PROGRAM_START
    assert memory.index_register() == 0
    assert memory.stack_depth() == 0
    assert memory.delay_register() == 0
    assert memory.sound_register() == 0
    assert memory.read_ram(FONT_START, len(CHIP8_FONT)) == CHIP8_FONT.tobytes()
    assert memory.read_ram_cell(FONT_START - 1) == 0


def test_var_registers_round_trip() -> None:
    memory = Memory()
    for register_id in range(16):
        memory.set_var_register(register_id, 0x10 + register_id)
    memory.set_var_register(0x3, 0x99)

    for register_id in range(16):
        expected = 0x99 if register_id == 0x3 else 0x10 + register_id
        assert memory.get_var_register(register_id) == expected


@pytest.mark.parametrize("register_id", [0x10, 0xFF])
def test_var_register_out_of_range(register_id: int) -> None:
    memory = Memory()

    with pytest.raises(OutOfRangeRegister):
        memory.set_var_register(register_id, 1)
    with pytest.raises(OutOfRangeRegister):
        memory.get_var_register(register_id)


def test_get_var_register_returns_plain_int() -> None:
    memory = Memory()
    memory.set_var_register(0, 0xFF)

    value = memory.get_var_register(0)
    assert type(value) is int
    assert value + 1 == 0x100


def test_stack_is_lifo() -> None:
    memory = Memory()
    for address in [0x300, 0x310, 0x320]:
        memory.push_stack(address)

    assert [memory.pop_stack() for _ in range(3)] == [0x320, 0x310, 0x300]
    with pytest.raises(EmptyStack):
        memory.pop_stack()


def test_stack_is_not_capped_at_sixteen() -> None:
    memory = Memory()
    for i in range(40):
        memory.push_stack(0x200 + 2 * i)

    assert memory.stack_depth() == 40
    assert memory.pop_stack() == 0x200 + 2 * 39


def test_program_counter_steps() -> None:
    memory = Memory()
    memory.increment_pc()
    memory.increment_pc()
    memory.decrement_pc()
    assert memory.pc() == PROGRAM_START + 2

    memory.jump_pc(0x345)
    assert memory.pc() == 0x345


def test_fetch_instruction_does_not_advance_pc() -> None:
    memory = Memory()
    memory.write_ram(PROGRAM_START, bytes([0xA2, 0x2A]))

    assert memory.fetch_instruction() == (0xA2, 0x2A)
    assert memory.pc() == PROGRAM_START


def test_write_and_read_ram() -> None:
    memory = Memory()
    memory.write_ram(0x300, [1, 2, 3])

    assert memory.read_ram(0x300, 3) == b"\x01\x02\x03"
    assert memory.read_ram_cell(0x302) == 3


def test_timers_saturate_at_zero() -> None:
    memory = Memory()
    memory.set_delay_register(2)
    memory.set_sounds_register(1)

    for _ in range(5):
        memory.decrement_delay()
        memory.decrement_sound()

    assert memory.delay_register() == 0
    assert memory.sound_register() == 0


def test_reset_restores_power_on_state() -> None:
    memory = Memory()
    memory.set_var_register(5, 7)
    memory.push_stack(0x400)
    memory.jump_pc(0x600)
    memory.write_ram(FONT_START, [0, 0, 0])

    memory.reset()

    assert memory.get_var_register(5) == 0
    assert memory.stack_depth() == 0
    assert memory.pc() == PROGRAM_START
    assert memory.read_ram_cell(FONT_START) == 0xF0
