# 64x32 display: array of pixels that are either on or off (0 || 1), row-major.
# should_draw is raised by CLS/DRW and lowered by whoever puts the frame on screen.

import numpy as np

from .constants import width, height


class Framebuffer:

    def __init__(self):
        self.vram = bytearray(width * height)
        self.should_draw = True

    @property
    def pixels(self):
        """Read-only view of the pixel bytes."""
        return memoryview(self.vram).toreadonly()

    def as_array(self):
        """The pixels as a read-only (height, width) uint8 array, row 0 on top."""
        grid = np.frombuffer(bytes(self.vram), dtype=np.uint8).reshape(height, width)
        grid.flags.writeable = False
        return grid

    def pixel(self, x, y):
        return self.vram[x + y * width]

    def clear(self):
        self.vram[:] = b'\x00' * len(self.vram)
        self.should_draw = True

    def draw_sprite(self, x, y, rows):
        """XOR an 8-pixel wide sprite onto the screen.

        The origin wraps onto the screen, pixels that fall past the right or
        bottom edge are clipped. Returns True if any lit pixel was switched off.
        """
        x %= width
        y %= height
        collision = False
        for row, sprite in enumerate(rows):
            py = y + row
            if py >= height:
                break
            base = py * width
            for bit in range(8):
                if not sprite & (0x80 >> bit):
                    continue
                px = x + bit
                if px >= width:
                    break
                idx = base + px
                if self.vram[idx]:
                    collision = True
                self.vram[idx] ^= 1
        self.should_draw = True
        return collision

    def acknowledge(self):
        """Called by the renderer once it has consumed the frame."""
        self.should_draw = False

    def to_rgba(self, scale=1):
        """RGBA bytes of the screen upscaled by scale, bottom row first for pyglet."""
        grid = self.as_array()
        small = np.zeros((height, width, 4), dtype=np.uint8)
        small[..., :3] = grid[::-1, :, None] * 255
        small[..., 3] = 255
        if scale != 1:
            small = np.repeat(np.repeat(small, scale, axis=0), scale, axis=1)
        return small.tobytes()
