# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""The machine: every piece of state one program runs against."""

import logging

from .cpu import Executor
from .display import Display
from .keypad import Keypad
from .memory import LOAD_POS, Memory, Registers
from .timers import Timers

log = logging.getLogger(__name__)


class Machine:
    """Owns memory, registers, display, keypad, timers and the executor.

    Nothing is global, so any number of machines can run side by side."""

    def __init__(self, rng=None):
        self.memory = Memory()
        self.registers = Registers()
        self.display = Display()
        self.keypad = Keypad()
        self.timers = Timers()
        self.cpu = Executor(self.memory, self.registers, self.display,
            self.keypad, self.timers, rng=rng)

    def load(self, program):
        """Copy a program image into memory at LOAD_POS"""
        self.memory.load(program, LOAD_POS)
        log.info(f"Program length {len(program)} bytes.")
        self.registers.set_pc(LOAD_POS)

    def load_file(self, path):
        log.info(f"Loading program {path} at 0x{LOAD_POS:04x}")
        with open(path, 'rb') as p:
            program = p.read()
        self.load(program)
        return len(program)

    @classmethod
    def from_program(cls, program, rng=None):
        machine = cls(rng=rng)
        machine.load(program)
        return machine

    def step(self):
        return self.cpu.step()
