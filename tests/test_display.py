import pytest
from PIL import Image

from chip8vm.display import Framebuffer
from chip8vm.errors import Chip8Error, InvalidPixelPosition, NoKeyPressed, OutOfRangeKey


def test_pixels_start_off() -> None:
    screen = Framebuffer()

    assert screen.pixels().shape == (32, 64)
    assert not screen.pixels().any()
    assert not screen.closed()


@pytest.mark.parametrize("x, y", [(64, 0), (0, 32), (-1, 0), (200, 200)])
def test_pixel_access_out_of_range(x: int, y: int) -> None:
    screen = Framebuffer()

    with pytest.raises(InvalidPixelPosition):
        screen.get_pixel(x, y)
    with pytest.raises(InvalidPixelPosition):
        screen.set_pixel(x, y, True)


def test_pixels_snapshot_is_a_copy() -> None:
    screen = Framebuffer()
    snapshot = screen.pixels()
    screen.set_pixel(63, 31, True)

    assert not snapshot[31, 63]
    assert screen.get_pixel(63, 31)


def test_clear_presents_frame() -> None:
    screen = Framebuffer()
    screen.set_pixel(1, 1, True)

    screen.clear()

    assert not screen.get_pixel(1, 1)
    assert screen.frames_presented == 1


def test_keys() -> None:
    screen = Framebuffer()
    assert not screen.any_key_pressed()

    screen.key_pressed(0xE)
    screen.set_key(0x3, True)
    assert screen.any_key_pressed()
    assert screen.key_state(0xE)
    assert screen.get_pressed_key() == 0x3

    screen.key_released(0x3)
    assert screen.get_pressed_key() == 0xE
    screen.set_key(0xE, False)
    assert not screen.any_key_pressed()


def test_get_pressed_key_without_key_down() -> None:
    with pytest.raises(NoKeyPressed) as excinfo:
        Framebuffer().get_pressed_key()
    assert isinstance(excinfo.value, Chip8Error)


@pytest.mark.parametrize("key", [0x10, -1])
def test_key_out_of_range(key: int) -> None:
    screen = Framebuffer()

    with pytest.raises(OutOfRangeKey):
        screen.key_state(key)
    with pytest.raises(OutOfRangeKey):
        screen.key_pressed(key)


def test_close() -> None:
    screen = Framebuffer()
    screen.close()
    assert screen.closed()


def test_debug_str() -> None:
    screen = Framebuffer()
    screen.set_pixel(0, 0, True)
    screen.set_pixel(63, 31, True)

    lines = screen.debug_str().splitlines()

    assert len(lines) == 32
    assert all(len(line) == 64 for line in lines)
    assert lines[0] == "*" + " " * 63
    assert lines[31] == " " * 63 + "*"


def test_save_png(tmp_path) -> None:
    screen = Framebuffer()
    screen.set_pixel(2, 1, True)
    path = tmp_path / "screen.png"

    screen.save_png(path, scale=4)

    with Image.open(path) as img:
        assert img.size == (64 * 4, 32 * 4)
        assert img.getpixel((2 * 4, 1 * 4)) == 255
        assert img.getpixel((0, 0)) == 0
