# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Delay and sound timers."""

TIMER_HZ = 60
TIMER_MAX = 0xFF


def _clamp(value):
    return max(0, min(TIMER_MAX, value))


class Timers:
    """Both timers count down once per tick and stop at zero.

    Nothing in here knows about wall time; the scheduler calls tick() at
    TIMER_HZ."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def get_delay(self):
        return self.delay

    def set_delay(self, value):
        self.delay = _clamp(value)

    def get_sound(self):
        return self.sound

    def set_sound(self, value):
        self.sound = _clamp(value)

    @property
    def beeping(self):
        return self.sound > 0
