# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Fatal machine faults.

Every fault halts the engine. None of them are retried or recovered from."""


class MachineFault(Exception):
    """Base class for anything that stops the machine dead"""

    kind = "MachineFault"

    def __init__(self, message, pc=None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self):
        if self.pc is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind} at 0x{self.pc:04x}: {self.message}"


class AddressOutOfRange(MachineFault):
    kind = "AddressOutOfRange"

    def __init__(self, address, pc=None):
        super().__init__(f"address 0x{address:04x} is out of range", pc)
        self.address = address


class StackOverflow(MachineFault):
    kind = "StackOverflow"

    def __init__(self, depth, pc=None):
        super().__init__(f"too many nested subroutines ({depth})", pc)
        self.depth = depth


class StackUnderflow(MachineFault):
    kind = "StackUnderflow"

    def __init__(self, pc=None):
        super().__init__("return with an empty stack", pc)


class UnknownOpcode(MachineFault):
    kind = "UnknownOpcode"

    def __init__(self, opcode, pc=None):
        super().__init__(f"undefined opcode 0x{opcode:04x}", pc)
        self.opcode = opcode


class ProgramTooLarge(MachineFault):
    kind = "ProgramTooLarge"

    def __init__(self, size, limit):
        super().__init__(f"program is {size} bytes, at most {limit} fit in memory")
        self.size = size
        self.limit = limit
