# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Engine configuration."""

from .timers import TIMER_HZ

DEFAULT_INSTRUCTION_RATE = 1000
DEFAULT_FRAME_RATE = 60
DEFAULT_BEEP_FREQUENCY = 553.0
DEFAULT_SCALE = 10


class EngineConfig:
    """Rates and frontend options.

    The timer rate is fixed at TIMER_HZ and can't be changed."""

    timer_rate_hz = TIMER_HZ

    def __init__(self, instruction_rate_hz=DEFAULT_INSTRUCTION_RATE,
            frame_rate_hz=DEFAULT_FRAME_RATE,
            beep_frequency_hz=DEFAULT_BEEP_FREQUENCY,
            gradient_coloring=False, scale=DEFAULT_SCALE,
            show_registers=False):
        self.instruction_rate_hz = _positive_int("instruction_rate_hz", instruction_rate_hz)
        self.frame_rate_hz = _positive_int("frame_rate_hz", frame_rate_hz)
        self.scale = _positive_int("scale", scale)
        beep_frequency_hz = float(beep_frequency_hz)
        if not beep_frequency_hz > 0:
            raise ValueError(f"beep_frequency_hz must be positive, got {beep_frequency_hz}")
        self.beep_frequency_hz = beep_frequency_hz
        # Only the renderer looks at these
        self.gradient_coloring = bool(gradient_coloring)
        self.show_registers = bool(show_registers)

    @classmethod
    def from_args(cls, args):
        return cls(
            instruction_rate_hz=args.clock_rate,
            frame_rate_hz=args.framerate,
            beep_frequency_hz=args.frequency,
            gradient_coloring=args.gradient_colors,
            scale=args.scale,
            show_registers=args.show_registers,
        )

    def __repr__(self):
        return (f"EngineConfig(instruction_rate_hz={self.instruction_rate_hz}, "
            f"frame_rate_hz={self.frame_rate_hz}, "
            f"beep_frequency_hz={self.beep_frequency_hz}, "
            f"gradient_coloring={self.gradient_coloring})")


def _positive_int(name, value):
    if isinstance(value, bool) or int(value) != value:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value
