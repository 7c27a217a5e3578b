# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""The 64x32 monochrome framebuffer."""

VIDEO_X = 64
VIDEO_Y = 32
SPRITE_WIDTH = 8
MAX_SPRITE_ROWS = 15


class Display:
    """One byte per pixel, 0 or 1, stored row-major.

    Pixels only ever change by XOR so drawing the same sprite twice in the
    same place erases it."""

    def __init__(self):
        self.pixels = bytearray(VIDEO_X * VIDEO_Y)
        # Set whenever the framebuffer changes, cleared by whoever renders it
        self.dirty = True

    def clear(self):
        self.pixels = bytearray(VIDEO_X * VIDEO_Y)
        self.dirty = True

    def pixel(self, x, y):
        return self.pixels[(y % VIDEO_Y) * VIDEO_X + (x % VIDEO_X)]

    def draw_sprite(self, x, y, sprite):
        """XOR an 8 pixel wide sprite onto the screen at (x, y).

        Each byte of sprite is one row, msb leftmost. Coordinates wrap per
        pixel. Returns True if any lit pixel was switched off."""
        if len(sprite) > MAX_SPRITE_ROWS:
            raise ValueError(f"sprite has {len(sprite)} rows, at most {MAX_SPRITE_ROWS} allowed")
        collision = False
        for row, bits in enumerate(sprite):
            y_off = (y + row) % VIDEO_Y
            for col in range(SPRITE_WIDTH):
                if not bits >> (7 - col) & 0x1:
                    continue
                pos = y_off * VIDEO_X + (x + col) % VIDEO_X
                if self.pixels[pos]:
                    collision = True
                self.pixels[pos] ^= 1
        if sprite:
            self.dirty = True
        return collision

    def rows(self):
        """Read-only copy of the grid as a tuple of row tuples"""
        return tuple(
            tuple(self.pixels[y * VIDEO_X:(y + 1) * VIDEO_X]) for y in range(VIDEO_Y)
        )

    def lit(self):
        return sum(self.pixels)
