# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Instruction decoder and executor.

Decoding turns a 16 bit word into an Instruction: one Op member per
documented pattern plus every operand field, whether the op uses it or not.
Mnemonics follow Cowgod's Chip-8 technical reference.

Where the old interpreters disagree, this one does the following:

  * 8xy6/8xyE shift Vx in place and ignore Vy.
  * Fx55/Fx65 transfer V0..Vx inclusive and leave I alone.
  * 8xy1/8xy2/8xy3 reset VF.
  * VF is always written after the result, so a flag wins over VF as a
    destination.
  * 0nnn (call machine code) is not supported and faults like any other
    undefined word.
"""

import logging
import random
from collections import namedtuple
from enum import Enum

from .errors import MachineFault, UnknownOpcode
from .memory import FLAG, FONT_HEIGHT, FONT_LOAD

log = logging.getLogger(__name__)


class Op(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_BYTE = "3xkk"
    SNE_BYTE = "4xkk"
    SE_REG = "5xy0"
    LD_BYTE = "6xkk"
    ADD_BYTE = "7xkk"
    LD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_REG = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"


MNEMONICS = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03x}",
    Op.CALL: "CALL 0x{nnn:03x}",
    Op.SE_BYTE: "SE V{x:X}, 0x{kk:02x}",
    Op.SNE_BYTE: "SNE V{x:X}, 0x{kk:02x}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, 0x{kk:02x}",
    Op.ADD_BYTE: "ADD V{x:X}, 0x{kk:02x}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03x}",
    Op.JP_V0: "JP V0, 0x{nnn:03x}",
    Op.RND: "RND V{x:X}, 0x{kk:02x}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.LD_F_VX: "LD F, V{x:X}",
    Op.LD_B_VX: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
}

# 0x8xyN, keyed by N
ALU_OPS = {
    0x0: Op.LD_REG, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR,
    0x4: Op.ADD_REG, 0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN, 0xE: Op.SHL,
}

# 0xExKK and 0xFxKK, keyed by KK
KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}
IO_OPS = {
    0x07: Op.LD_VX_DT, 0x0A: Op.LD_VX_K, 0x15: Op.LD_DT_VX, 0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX, 0x29: Op.LD_F_VX, 0x33: Op.LD_B_VX, 0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


class Instruction(namedtuple("Instruction", "op word x y n kk nnn")):
    __slots__ = ()

    def mnemonic(self):
        return MNEMONICS[self.op].format(**self._asdict())

    def __str__(self):
        return f"0x{self.word:04x} {self.mnemonic()}"


def decode(word):
    """Split an instruction word into an Instruction, or raise UnknownOpcode"""
    family = word >> 12
    x = word >> 8 & 0x0F
    y = word >> 4 & 0x0F
    n = word & 0x000F
    kk = word & 0x00FF
    nnn = word & 0x0FFF

    op = None
    if word == 0x00E0:
        op = Op.CLS
    elif word == 0x00EE:
        op = Op.RET
    elif family == 0x1:
        op = Op.JP
    elif family == 0x2:
        op = Op.CALL
    elif family == 0x3:
        op = Op.SE_BYTE
    elif family == 0x4:
        op = Op.SNE_BYTE
    elif family == 0x5 and n == 0:
        op = Op.SE_REG
    elif family == 0x6:
        op = Op.LD_BYTE
    elif family == 0x7:
        op = Op.ADD_BYTE
    elif family == 0x8:
        op = ALU_OPS.get(n)
    elif family == 0x9 and n == 0:
        op = Op.SNE_REG
    elif family == 0xA:
        op = Op.LD_I
    elif family == 0xB:
        op = Op.JP_V0
    elif family == 0xC:
        op = Op.RND
    elif family == 0xD:
        op = Op.DRW
    elif family == 0xE:
        op = KEY_OPS.get(kk)
    elif family == 0xF:
        op = IO_OPS.get(kk)

    if op is None:
        raise UnknownOpcode(word)
    return Instruction(op, word, x, y, n, kk, nnn)


def disassemble(word):
    try:
        return decode(word).mnemonic()
    except UnknownOpcode:
        return f"DW 0x{word:04x}"


class Executor:
    """Runs one instruction per step() against the machine's components.

    Handlers return None to fall through to the next instruction or an
    address to continue from. step() knows nothing about time."""

    def __init__(self, memory, registers, display, keypad, timers, rng=None):
        self.memory = memory
        self.registers = registers
        self.display = display
        self.keypad = keypad
        self.timers = timers
        self.rng = rng if rng is not None else random.Random()
        # Destination register of a pending LD Vx, K
        self.waiting_for = None

        self._handlers = {
            Op.CLS: self._cls,
            Op.RET: self._ret,
            Op.JP: self._jp,
            Op.CALL: self._call,
            Op.SE_BYTE: self._se_byte,
            Op.SNE_BYTE: self._sne_byte,
            Op.SE_REG: self._se_reg,
            Op.LD_BYTE: self._ld_byte,
            Op.ADD_BYTE: self._add_byte,
            Op.LD_REG: self._ld_reg,
            Op.OR: self._or,
            Op.AND: self._and,
            Op.XOR: self._xor,
            Op.ADD_REG: self._add_reg,
            Op.SUB: self._sub,
            Op.SHR: self._shr,
            Op.SUBN: self._subn,
            Op.SHL: self._shl,
            Op.SNE_REG: self._sne_reg,
            Op.LD_I: self._ld_i,
            Op.JP_V0: self._jp_v0,
            Op.RND: self._rnd,
            Op.DRW: self._drw,
            Op.SKP: self._skp,
            Op.SKNP: self._sknp,
            Op.LD_VX_DT: self._ld_vx_dt,
            Op.LD_VX_K: self._ld_vx_k,
            Op.LD_DT_VX: self._ld_dt_vx,
            Op.LD_ST_VX: self._ld_st_vx,
            Op.ADD_I_VX: self._add_i_vx,
            Op.LD_F_VX: self._ld_f_vx,
            Op.LD_B_VX: self._ld_b_vx,
            Op.LD_MEM_VX: self._ld_mem_vx,
            Op.LD_VX_MEM: self._ld_vx_mem,
        }

    @property
    def waiting(self):
        return self.waiting_for is not None

    def fetch(self):
        return self.memory.read_word(self.registers.pc)

    def step(self):
        """Fetch, decode and execute the instruction at PC.

        Any MachineFault raised on the way is stamped with the PC it was
        fetched from and passed on."""
        if self.waiting:
            raise RuntimeError(f"step() while waiting for a key into V{self.waiting_for:X}")
        pc = self.registers.pc
        try:
            instruction = decode(self.fetch())
            if log.isEnabledFor(logging.DEBUG):
                log.debug(f"{pc:04x} | OP 0x{instruction.word:04x} - {instruction.mnemonic()}")
            target = self._handlers[instruction.op](instruction)
        except MachineFault as fault:
            if fault.pc is None:
                fault.pc = pc
            raise
        if target is None:
            self.registers.advance()
        else:
            self.registers.set_pc(target)
        return instruction

    def deliver_key(self, key):
        """Finish a pending LD Vx, K"""
        if not self.waiting:
            raise RuntimeError("no key wait in progress")
        log.debug(f"Store key {key:1x} to V{self.waiting_for:X}")
        self.registers.set(self.waiting_for, key)
        self.waiting_for = None

    def next_mnemonic(self):
        try:
            return disassemble(self.fetch())
        except MachineFault:
            return "????"

    # Helpers

    def _v(self, x):
        return self.registers.v[x]

    def _set(self, x, value):
        self.registers.v[x] = value & 0xFF

    def _flag(self, value):
        self.registers.v[FLAG] = 1 if value else 0

    def _skip_if(self, condition):
        if condition:
            return (self.registers.pc + 4) % len(self.memory)
        return None

    # Control flow

    def _cls(self, ins):
        self.display.clear()

    def _ret(self, ins):
        return self.registers.pop()

    def _jp(self, ins):
        return ins.nnn

    def _call(self, ins):
        self.registers.push((self.registers.pc + 2) % len(self.memory))
        return ins.nnn

    def _jp_v0(self, ins):
        return (ins.nnn + self._v(0)) & 0x0FFF

    def _se_byte(self, ins):
        return self._skip_if(self._v(ins.x) == ins.kk)

    def _sne_byte(self, ins):
        return self._skip_if(self._v(ins.x) != ins.kk)

    def _se_reg(self, ins):
        return self._skip_if(self._v(ins.x) == self._v(ins.y))

    def _sne_reg(self, ins):
        return self._skip_if(self._v(ins.x) != self._v(ins.y))

    def _skp(self, ins):
        return self._skip_if(self.keypad.is_pressed(self._v(ins.x)))

    def _sknp(self, ins):
        return self._skip_if(not self.keypad.is_pressed(self._v(ins.x)))

    # Registers and ALU

    def _ld_byte(self, ins):
        self._set(ins.x, ins.kk)

    def _add_byte(self, ins):
        # No carry for the immediate form
        self._set(ins.x, self._v(ins.x) + ins.kk)

    def _ld_reg(self, ins):
        self._set(ins.x, self._v(ins.y))

    def _or(self, ins):
        self._set(ins.x, self._v(ins.x) | self._v(ins.y))
        self._flag(0)

    def _and(self, ins):
        self._set(ins.x, self._v(ins.x) & self._v(ins.y))
        self._flag(0)

    def _xor(self, ins):
        self._set(ins.x, self._v(ins.x) ^ self._v(ins.y))
        self._flag(0)

    def _add_reg(self, ins):
        result = self._v(ins.x) + self._v(ins.y)
        self._set(ins.x, result)
        self._flag(result > 0xFF)

    def _sub(self, ins):
        vx, vy = self._v(ins.x), self._v(ins.y)
        self._set(ins.x, vx - vy)
        self._flag(vx >= vy)

    def _subn(self, ins):
        vx, vy = self._v(ins.x), self._v(ins.y)
        self._set(ins.x, vy - vx)
        self._flag(vy >= vx)

    def _shr(self, ins):
        vx = self._v(ins.x)
        self._set(ins.x, vx >> 1)
        self._flag(vx & 0x1)

    def _shl(self, ins):
        vx = self._v(ins.x)
        self._set(ins.x, vx << 1)
        self._flag(vx >> 7 & 0x1)

    def _rnd(self, ins):
        self._set(ins.x, self.rng.randint(0, 255) & ins.kk)

    # Index register and memory

    def _ld_i(self, ins):
        self.registers.set_index(ins.nnn)

    def _add_i_vx(self, ins):
        self.registers.set_index(self.registers.i + self._v(ins.x))

    def _ld_f_vx(self, ins):
        self.registers.set_index(FONT_LOAD + FONT_HEIGHT * (self._v(ins.x) & 0xF))

    def _ld_b_vx(self, ins):
        vx = self._v(ins.x)
        i = self.registers.i
        self.memory.store(i, vx // 100)
        self.memory.store(i + 1, vx // 10 % 10)
        self.memory.store(i + 2, vx % 10)

    def _ld_mem_vx(self, ins):
        i = self.registers.i
        for n in range(ins.x + 1):
            self.memory.store(i + n, self._v(n))

    def _ld_vx_mem(self, ins):
        block = self.memory.read_block(self.registers.i, ins.x + 1)
        for n, value in enumerate(block):
            self._set(n, value)

    # Display

    def _drw(self, ins):
        sprite = self.memory.read_block(self.registers.i, ins.n)
        collision = self.display.draw_sprite(self._v(ins.x), self._v(ins.y), sprite)
        self._flag(collision)

    # Timers and input

    def _ld_vx_dt(self, ins):
        self._set(ins.x, self.timers.get_delay())

    def _ld_dt_vx(self, ins):
        self.timers.set_delay(self._v(ins.x))

    def _ld_st_vx(self, ins):
        self.timers.set_sound(self._v(ins.x))

    def _ld_vx_k(self, ins):
        # PC moves past this instruction now; the key lands in Vx on resume
        self.keypad.arm_wait()
        self.waiting_for = ins.x
