import dataclasses

import pytest

from chip8vm.config import EmulatorConfig


def test_defaults() -> None:
    config = EmulatorConfig()

    assert config.old_instructions is False
    assert config.frequency == 700.0
    assert config.cycles_per_timer_tick == 12


def test_config_is_immutable() -> None:
    config = EmulatorConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.old_instructions = True


@pytest.mark.parametrize("kwargs", [{"frequency": 0}, {"frequency": -5.0}, {"scale": 0}])
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        EmulatorConfig(**kwargs)


def test_slow_clock_still_ticks_timers() -> None:
    assert EmulatorConfig(frequency=10).cycles_per_timer_tick == 1
