# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Fish n chips, a Chip-8 execution engine.

Build a Machine, load a program into it and hand it to a Scheduler:

    machine = Machine.from_program(rom)
    scheduler = Scheduler(machine, EngineConfig())
    scheduler.advance(1.0)
"""

__version__ = "0.1.0"

from .config import EngineConfig
from .cpu import Executor, Instruction, Op, decode, disassemble
from .display import Display, VIDEO_X, VIDEO_Y
from .errors import (AddressOutOfRange, MachineFault, ProgramTooLarge,
    StackOverflow, StackUnderflow, UnknownOpcode)
from .keypad import Keypad
from .machine import Machine
from .memory import LOAD_POS, TOTAL_RAM, Memory, Registers
from .scheduler import Frame, Scheduler, SchedulerStats, State
from .timers import TIMER_HZ, Timers
