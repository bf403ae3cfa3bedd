"""
Hack CPU Emulator
=================

A small reference implementation of the 16-bit Hack computer, used to
check that assembled programs behave as intended.

The Hack CPU has:
- 16-bit registers: A (address/data), D (data), PC (program counter)
- Separate instruction ROM and 32K words of data RAM
- M, the RAM word addressed by A

Instruction Decoding
--------------------
    0 v v v v v v v v v v v v v v v    A = v
    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3

For a compute instruction the ALU gets x = D and y = A (a=0) or M (a=1)
and applies the control bits in order:

    zx: x = 0      nx: x = !x
    zy: y = 0      ny: y = !y
    f:  out = x + y (1) or x & y (0)
    no: out = !out

The result is stored to M (at the A value current before this
instruction), A and D as selected by d1..d3. The jump bits test the
signed result (j1: < 0, j2: == 0, j3: > 0); a taken jump loads PC from
the pre-instruction A.

Example
-------
>>> from hack_toolchain.assembler import Assembler
>>> words = Assembler().assemble_lines(["@7", "D=A", "@0", "M=D"])
>>> cpu = HackCPU(words)
>>> cpu.run()
<StopReason.END_OF_PROGRAM: 1>
>>> cpu.peek(0)
7
"""

import logging
from enum import Enum, auto
from typing import Optional, Sequence, Union

from hack_toolchain.assembler.tables import SP
from hack_toolchain.errors import EmulatorError

logger = logging.getLogger(__name__)

RAM_SIZE = 0x8000
WORD_MASK = 0xFFFF
SIGN_BIT = 0x8000
COMPUTE_BIT = 0x8000

DEFAULT_MAX_STEPS = 1_000_000


class StopReason(Enum):
    """Why run() returned."""
    END_OF_PROGRAM = auto()  # PC moved past the last ROM word
    BREAKPOINT = auto()      # PC reached the requested address
    MAX_STEPS = auto()       # Step budget exhausted


def to_signed(value: int) -> int:
    """Interpret a 16-bit word as two's complement."""
    value &= WORD_MASK
    return value - 0x10000 if value & SIGN_BIT else value


def alu(x: int, y: int, control: int) -> int:
    """
    Compute the Hack ALU output.

    Args:
        x: D register value
        y: A register or M value
        control: Six control bits zx nx zy ny f no (zx is the MSB)
    """
    zx, nx, zy, ny, f, no = ((control >> shift) & 1 for shift in range(5, -1, -1))
    if zx:
        x = 0
    if nx:
        x = ~x & WORD_MASK
    if zy:
        y = 0
    if ny:
        y = ~y & WORD_MASK
    out = (x + y) & WORD_MASK if f else x & y
    if no:
        out = ~out & WORD_MASK
    return out


class HackCPU:
    """
    Hack computer: CPU, ROM and RAM.

    Attributes:
        a: A register
        d: D register
        pc: Program counter
        steps: Instructions executed since construction or reset()
    """

    def __init__(self, rom: Sequence[Union[int, str]]):
        """
        Load a program.

        Args:
            rom: Instruction words as ints or 16-character `0`/`1` strings
        """
        self.rom = [self._decode_word(word) for word in rom]
        self.ram = [0] * RAM_SIZE
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0

    @classmethod
    def from_hack(cls, text: str) -> "HackCPU":
        """Create a CPU from `.hack` file contents."""
        return cls([line.strip() for line in text.splitlines() if line.strip()])

    @staticmethod
    def _decode_word(word: Union[int, str]) -> int:
        if isinstance(word, str):
            if len(word) != 16 or set(word) - {"0", "1"}:
                raise EmulatorError(f"invalid instruction word '{word}'")
            return int(word, 2)
        if not 0 <= word <= WORD_MASK:
            raise EmulatorError(f"instruction word {word} out of range")
        return word

    def reset(self) -> None:
        """Clear registers; RAM is left as is."""
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0

    # =========================================================================
    # Memory Access
    # =========================================================================

    def _check_address(self, address: int) -> None:
        if not 0 <= address < RAM_SIZE:
            raise EmulatorError(
                f"RAM address {address} out of range at pc={self.pc}"
            )

    def peek(self, address: int) -> int:
        """Read a RAM word (unsigned)."""
        self._check_address(address)
        return self.ram[address]

    def peek_signed(self, address: int) -> int:
        """Read a RAM word as a signed value."""
        return to_signed(self.peek(address))

    def poke(self, address: int, value: int) -> None:
        """Write a RAM word; negative values are stored as two's complement."""
        self._check_address(address)
        self.ram[address] = value & WORD_MASK

    @property
    def sp(self) -> int:
        """Current stack pointer (RAM[0])."""
        return self.ram[SP]

    def stack_top(self) -> int:
        """Signed value of the topmost stack cell."""
        return self.peek_signed(self.sp - 1)

    # =========================================================================
    # Execution
    # =========================================================================

    def step(self) -> None:
        """Execute one instruction."""
        if not 0 <= self.pc < len(self.rom):
            raise EmulatorError(f"pc {self.pc} outside ROM (0..{len(self.rom) - 1})")

        word = self.rom[self.pc]
        self.steps += 1

        if not word & COMPUTE_BIT:
            self.a = word
            self.pc += 1
            return

        use_m = (word >> 12) & 1
        control = (word >> 6) & 0x3F
        dest = (word >> 3) & 0x7
        jump = word & 0x7

        address = self.a
        y = self.peek(address) if use_m else address
        out = alu(self.d, y, control)

        if dest & 0b001:
            self.poke(address, out)
        if dest & 0b100:
            self.a = out
        if dest & 0b010:
            self.d = out

        negative = bool(out & SIGN_BIT)
        zero = out == 0
        taken = (
            (jump & 0b100 and negative)
            or (jump & 0b010 and zero)
            or (jump & 0b001 and not negative and not zero)
        )
        self.pc = address if taken else self.pc + 1

    def run(self, max_steps: int = DEFAULT_MAX_STEPS,
            breakpoint: Optional[int] = None) -> StopReason:
        """
        Execute until the program ends, a breakpoint is hit or the budget
        runs out.

        Args:
            max_steps: Maximum number of instructions to execute
            breakpoint: Stop before executing the instruction at this address

        Returns:
            The reason execution stopped
        """
        executed = 0
        while True:
            if self.pc >= len(self.rom):
                reason = StopReason.END_OF_PROGRAM
                break
            if breakpoint is not None and self.pc == breakpoint:
                reason = StopReason.BREAKPOINT
                break
            if executed >= max_steps:
                reason = StopReason.MAX_STEPS
                break
            self.step()
            executed += 1

        logger.debug(f"stopped after {executed} steps: {reason.name} (pc={self.pc})")
        return reason
