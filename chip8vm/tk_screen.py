"""
tkinter window front-end for the CHIP-8 framebuffer.

The window is polled by the driver loop (`handle_events`) instead of running
its own mainloop, so one interpreter cycle always completes between polls.
"""

import logging
import tkinter as tk
from tkinter import Canvas

from .constants import DEFAULT_SCALE, DISPLAY_HEIGHT, DISPLAY_WIDTH
from .display import Framebuffer

logger = logging.getLogger(__name__)

# CHIP-8 keypad mapping to keyboard keys
# Original CHIP-8 keypad:     Modern keyboard mapping:
# 1 2 3 C                     1 2 3 4
# 4 5 6 D          =>         Q W E R
# 7 8 9 E                     A S D F
# A 0 B F                     Z X C V
KEY_MAPPING = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF
}


class TkScreen(Framebuffer):
    """Framebuffer shown in a tkinter window, keypad fed from the keyboard"""

    def __init__(self, scale: int = DEFAULT_SCALE, title: str = "chip-8"):
        super().__init__()
        self.pixel_width = float(scale)
        self.pixel_height = float(scale)

        self.root = tk.Tk()
        self.root.title(title)

        self.canvas = Canvas(self.root, width=DISPLAY_WIDTH * scale,
                             height=DISPLAY_HEIGHT * scale, bg='black', highlightthickness=0)
        self.canvas.pack(fill='both', expand=True)

        self.root.bind('<KeyPress>', self._on_key_press)
        self.root.bind('<KeyRelease>', self._on_key_release)
        self.canvas.bind('<Configure>', self._on_resize)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.root.focus_set()

    def handle_events(self):
        if self.quit_flag:
            return
        try:
            self.root.update()
        except tk.TclError:
            # Window was destroyed
            self.quit_flag = True

    def close(self):
        """Safely close the window"""
        if self.quit_flag:
            return
        self.quit_flag = True
        try:
            self.root.destroy()
        except tk.TclError:
            pass

    def draw(self):
        super().draw()
        if self.quit_flag:
            return
        self.canvas.delete("all")
        for y, x in zip(*self.display.nonzero()):
            x1 = x * self.pixel_width
            y1 = y * self.pixel_height
            self.canvas.create_rectangle(x1, y1, x1 + self.pixel_width, y1 + self.pixel_height,
                                         fill='white', outline='white')

    def _on_key_press(self, event):
        key = event.keysym.lower()
        if key == 'escape':
            self.close()
        elif key in KEY_MAPPING:
            self.key_pressed(KEY_MAPPING[key])
            logger.debug("Key pressed: %s -> CHIP-8 key 0x%X", key, KEY_MAPPING[key])

    def _on_key_release(self, event):
        key = event.keysym.lower()
        if key in KEY_MAPPING:
            self.key_released(KEY_MAPPING[key])

    def _on_resize(self, event):
        self.pixel_width = event.width / DISPLAY_WIDTH
        self.pixel_height = event.height / DISPLAY_HEIGHT
        self.draw()
