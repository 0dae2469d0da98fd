import numpy as np

from .config import HEIGHT, WIDTH


class Framebuffer:
    """64x32 monochrome bitmap drawn to with XOR sprites.

    Pixels are stored row-major in a numpy uint8 array (0 = off, 1 = on).
    `dirty` is raised by every clear or draw and dropped when a snapshot is
    taken for presentation.
    """

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)
        self.dirty = True

    def clear(self):
        self.pixels.fill(0)
        self.dirty = True

    def pixel(self, x, y):
        return bool(self.pixels[y % self.height, x % self.width])

    def blend_sprite(self, x, y, height, address, memory):
        """XOR `height` rows of sprite data from `memory` at (x, y).

        Coordinates wrap on both axes. Returns True if any pixel was turned
        off by the blit.
        """
        sprite = memory.read_block(address, height)
        turned_off = False
        for row, byte in enumerate(sprite):
            if byte == 0:
                continue
            py = (y + row) % self.height
            for bit in range(8):
                if byte & (0x80 >> bit):
                    px = (x + bit) % self.width
                    if self.pixels[py, px]:
                        turned_off = True
                    self.pixels[py, px] ^= 1
        self.dirty = True
        return turned_off

    def snapshot(self):
        self.dirty = False
        return self.pixels.astype(bool)
