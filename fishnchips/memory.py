# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Main memory and the register file."""

import logging

from .errors import AddressOutOfRange, ProgramTooLarge, StackOverflow, StackUnderflow

log = logging.getLogger(__name__)

TOTAL_RAM = 4096
LOAD_POS = 0x200
STACK_DEPTH = 16
REGISTER_COUNT = 16
FLAG = 0xF

# Chip-8 ROM Font map
FONT_LOAD = 0x50
FONT_HEIGHT = 5
FONT_MAP = [
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80  # F
]


class Memory:
    """4K of byte addressable RAM with the font preloaded.

    Everything below LOAD_POS belongs to the interpreter. Opcodes write
    through store(), which refuses that region; write_byte() does not."""

    def __init__(self):
        self.cells = bytearray(TOTAL_RAM)
        self.cells[FONT_LOAD:FONT_LOAD + len(FONT_MAP)] = bytes(FONT_MAP)

    def __len__(self):
        return len(self.cells)

    def _check(self, addr):
        if addr < 0 or addr >= TOTAL_RAM:
            raise AddressOutOfRange(addr)

    def read_byte(self, addr):
        self._check(addr)
        return self.cells[addr]

    def write_byte(self, addr, value):
        self._check(addr)
        self.cells[addr] = value & 0xFF

    def store(self, addr, value):
        """Write on behalf of a program; the interpreter area is off limits"""
        if addr < LOAD_POS:
            raise AddressOutOfRange(addr)
        self.write_byte(addr, value)

    def read_word(self, addr):
        """Big-endian instruction fetch"""
        self._check(addr)
        self._check(addr + 1)
        return self.cells[addr] << 8 | self.cells[addr + 1]

    def read_block(self, addr, n):
        self._check(addr)
        if n:
            self._check(addr + n - 1)
        return bytes(self.cells[addr:addr + n])

    def load(self, program, offset=LOAD_POS):
        program = bytes(program)
        limit = TOTAL_RAM - offset
        if len(program) > limit:
            raise ProgramTooLarge(len(program), limit)
        self.cells[offset:offset + len(program)] = program
        log.debug(f"Copied {len(program)} bytes to 0x{offset:04x}")


class Registers:
    """V0-VF, I, PC and the call stack"""

    def __init__(self):
        self.v = bytearray(REGISTER_COUNT)
        self.i = 0
        self.pc = LOAD_POS
        self.stack = [0] * STACK_DEPTH
        self.sp = 0

    def get(self, x):
        return self.v[x]

    def set(self, x, value):
        self.v[x] = value & 0xFF

    def get_index(self):
        return self.i

    def set_index(self, value):
        self.i = value & 0xFFFF

    def get_pc(self):
        return self.pc

    def set_pc(self, addr):
        self.pc = addr % TOTAL_RAM

    def advance(self, n=1):
        """Move PC on by n instructions, wrapping at the end of memory"""
        self.pc = (self.pc + 2 * n) % TOTAL_RAM

    def push(self, addr):
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(self.sp + 1)
        self.stack[self.sp] = addr
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflow()
        self.sp -= 1
        return self.stack[self.sp]
