from typing import List

import pytest
from PIL import Image

from chip8vm import cli
from chip8vm.display import Framebuffer

# LD I, 0x050 (font "0") / DRW V0, V0, 5 / JP 0x204
FONT_PROGRAM = bytes([0xA0, 0x50, 0xD0, 0x05, 0x12, 0x04])


def write_rom(tmp_path, data: bytes):
    path = tmp_path / "test.ch8"
    path.write_bytes(data)
    return str(path)


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args(["game.ch8"])

    assert args.path == "game.ch8"
    assert args.legacy is False
    assert args.frequency == 700.0
    assert args.headless is False


def test_parser_legacy_and_frequency() -> None:
    args = cli.build_parser().parse_args(["game.ch8", "-l", "-f", "500"])

    assert args.legacy is True
    assert args.frequency == 500.0


def test_headless_run_prints_screen(tmp_path, capsys) -> None:
    rom = write_rom(tmp_path, FONT_PROGRAM)

    status = cli.main([rom, "--headless", "--cycles", "10"])

    assert status == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 32
    assert lines[0].startswith("****")
    assert lines[1].startswith("*  *")


def test_headless_screenshot(tmp_path) -> None:
    rom = write_rom(tmp_path, FONT_PROGRAM)
    png = tmp_path / "shot.png"

    status = cli.main([rom, "--headless", "--cycles", "3", "--scale", "2", "--screenshot", str(png)])

    assert status == 0
    with Image.open(png) as img:
        assert img.size == (128, 64)


def test_missing_rom_fails(tmp_path) -> None:
    assert cli.main([str(tmp_path / "missing.ch8"), "--headless"]) == 1


def test_invalid_opcode_fails(tmp_path) -> None:
    rom = write_rom(tmp_path, bytes([0x00, 0x00]))

    assert cli.main([rom, "--headless", "--cycles", "5"]) == 1


class RecordingScreen(Framebuffer):
    """Headless stand-in for the window that remembers being closed"""

    instances: List["RecordingScreen"] = []

    def __init__(self, scale: int = 1, title: str = ""):
        super().__init__()
        RecordingScreen.instances.append(self)


def test_missing_rom_never_opens_window(tmp_path, monkeypatch) -> None:
    pytest.importorskip("tkinter")
    from chip8vm import tk_screen

    def fail(*args, **kwargs):
        raise AssertionError("window opened before the ROM was loaded")

    monkeypatch.setattr(tk_screen, "TkScreen", fail)

    assert cli.main([str(tmp_path / "missing.ch8")]) == 1


def test_invalid_opcode_closes_window(tmp_path, monkeypatch) -> None:
    pytest.importorskip("tkinter")
    from chip8vm import tk_screen

    RecordingScreen.instances = []
    monkeypatch.setattr(tk_screen, "TkScreen", RecordingScreen)
    rom = write_rom(tmp_path, bytes([0x00, 0x00]))

    assert cli.main([rom]) == 1
    assert len(RecordingScreen.instances) == 1
    assert RecordingScreen.instances[0].closed()
