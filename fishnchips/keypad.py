# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""The 16 key hex keypad."""

from collections import deque

KEY_COUNT = 16


class Keypad:
    """Pressed/released state for keys 0x0-0xF.

    set_pressed() may be called from outside the stepping loop. Each key is a
    single byte and new presses go through a deque, so a reader never sees a
    half applied update."""

    def __init__(self):
        self.keys = bytearray(KEY_COUNT)
        self._presses = deque()

    def _check(self, key):
        if key < 0 or key >= KEY_COUNT:
            raise ValueError(f"no such key 0x{key:x}")

    def set_pressed(self, key, pressed=True):
        self._check(key)
        if pressed and not self.keys[key]:
            self._presses.append(key)
        self.keys[key] = 1 if pressed else 0

    def set_released(self, key):
        self.set_pressed(key, False)

    def is_pressed(self, key):
        return bool(self.keys[key & 0xF])

    def arm_wait(self):
        """Forget earlier presses; only new ones satisfy the next wait"""
        self._presses.clear()

    def wait_for_any_press(self):
        """Return the first key pressed since arm_wait(), or None.

        Never blocks. The scheduler keeps asking until it gets a key."""
        try:
            return self._presses.popleft()
        except IndexError:
            return None

    def pressed(self):
        return [key for key in range(KEY_COUNT) if self.keys[key]]
