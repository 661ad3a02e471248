"""
Framebuffer and keypad surface used by the interpreter.

`Framebuffer` is the headless implementation: a 64x32 pixel grid with XOR
plotting support, 16 key flags and a closed flag. Window front-ends subclass
it and override `draw` / `handle_events` (see tk_screen.py).
"""

import logging

import numpy as np
from PIL import Image

from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, KEYPAD_SIZE
from .errors import InvalidPixelPosition, NoKeyPressed, OutOfRangeKey

logger = logging.getLogger(__name__)


class Framebuffer:
    """Pixel grid + keypad state shared between the engine and the host"""

    def __init__(self):
        self.display = np.zeros((DISPLAY_HEIGHT, DISPLAY_WIDTH), dtype=np.uint8)
        self.keypad = np.zeros(KEYPAD_SIZE, dtype=np.uint8)
        self.quit_flag = False
        self.frames_presented = 0

    # Pixels

    def get_pixel(self, x: int, y: int) -> bool:
        self._check_position(x, y)
        return bool(self.display[y, x])

    def set_pixel(self, x: int, y: int, on: bool):
        self._check_position(x, y)
        self.display[y, x] = 1 if on else 0

    def _check_position(self, x: int, y: int):
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise InvalidPixelPosition(x, y)

    def clear(self):
        self.display.fill(0)
        self.draw()

    def pixels(self) -> np.ndarray:
        """Snapshot of the pixel grid, shape (32, 64)"""
        return self.display.copy()

    # Presentation / host events

    def draw(self):
        """Present the current framebuffer. Headless: just count frames."""
        self.frames_presented += 1

    def handle_events(self):
        pass

    def closed(self) -> bool:
        return self.quit_flag

    def close(self):
        self.quit_flag = True

    # Keypad

    def _check_key(self, key: int):
        if not 0 <= key < KEYPAD_SIZE:
            raise OutOfRangeKey(key)

    def key_pressed(self, key: int):
        self._check_key(key)
        self.keypad[key] = 1

    def key_released(self, key: int):
        self._check_key(key)
        self.keypad[key] = 0

    def set_key(self, key: int, pressed: bool):
        """Set key state (0-F)"""
        if pressed:
            self.key_pressed(key)
        else:
            self.key_released(key)

    def key_state(self, key: int) -> bool:
        self._check_key(key)
        return bool(self.keypad[key])

    def any_key_pressed(self) -> bool:
        return bool(self.keypad.any())

    def get_pressed_key(self) -> int:
        """Lowest-indexed key that is down. Check any_key_pressed() first."""
        pressed = np.flatnonzero(self.keypad)
        if len(pressed) == 0:
            raise NoKeyPressed()
        return int(pressed[0])

    # Rendering helpers

    def debug_str(self) -> str:
        return ''.join(
            ''.join('*' if pixel else ' ' for pixel in row) + '\n'
            for row in self.display
        )

    def to_image(self, scale: int = 8) -> Image.Image:
        """Grayscale PIL image of the screen, each pixel scaled up by `scale`"""
        display_img = (self.display * 255).astype(np.uint8)
        scaled_img = np.repeat(np.repeat(display_img, scale, axis=0), scale, axis=1)
        return Image.fromarray(scaled_img)

    def save_png(self, path, scale: int = 8):
        self.to_image(scale).save(path)
        logger.info("Saved screenshot to %s", path)
