# Input - 16 key hex keypad. The window writes it, the interpreter only reads it.
#  1 2 3 C
#  4 5 6 D
#  7 8 9 E
#  A 0 B F

import numpy as np

from .constants import NUM_KEYS


class Keypad:

    def __init__(self):
        self.keys = np.zeros(NUM_KEYS, dtype=np.uint8)

    # ---- read side (interpreter) ----
    def is_pressed(self, key):
        return bool(self.keys[key & 0xF])

    def first_pressed(self):
        """Lowest pressed key index, or None when nothing is held."""
        pressed = np.flatnonzero(self.keys)
        if pressed.size == 0:
            return None
        return int(pressed[0])

    # ---- write side (input collaborator) ----
    def press(self, key):
        self.keys[key & 0xF] = 1

    def release(self, key):
        self.keys[key & 0xF] = 0

    def release_all(self):
        self.keys[:] = 0
