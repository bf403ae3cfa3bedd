"""
Hack Code Generator for VM Commands
===================================

This module lowers parsed VM commands to symbolic Hack assembly that the
assembler in hack_toolchain.assembler accepts.

Stack Convention
----------------
SP (RAM[0]) always holds the address one past the top of the stack.

    push:  RAM[SP] = value; SP = SP + 1
    pop:   SP = SP - 1; value = RAM[SP]

Segment Addressing
------------------
| Segment   | Address of segment[i]                       |
|-----------|---------------------------------------------|
| constant  | none: i itself is pushed                    |
| local     | RAM[LCL] + i                                |
| argument  | RAM[ARG] + i                                |
| this      | RAM[THIS] + i                               |
| that      | RAM[THAT] + i                               |
| temp      | 5 + i                                       |
| pointer   | THIS (i == 0) or THAT (i != 0)              |
| static    | assembler variable `<namespace>.<i>`        |

R13 is scratch for pop address computation; R14 (frame) and R15
(return address) are scratch for return.

Call Frame Layout
-----------------
After `call f n` the stack looks like:

    +----------------+ <- ARG (callee)
    | argument 0     |
    | ...            |
    | argument n-1   |
    +----------------+
    | return address |
    | saved LCL      |
    | saved ARG      |
    | saved THIS     |
    | saved THAT     |
    +----------------+ <- LCL (callee), SP on entry
    | local 0 ...    |  (zeroed by `function f k`)

`return` copies the return value to ARG[0], sets SP = ARG + 1, restores
THAT, THIS, ARG, LCL from the five saved slots and jumps to the return
address.

Unique Labels
-------------
Comparisons and calls need internal labels. They are minted from a
LabelCounter that belongs to a single generate() run, so two runs over
the same commands produce identical text.

Usage
-----
>>> from hack_toolchain.vm.parser import parse_source
>>> from hack_toolchain.vm.codegen import CodeGenerator
>>> asm = CodeGenerator().generate(parse_source("push constant 7"))
>>> print(asm, end="")
@7
D=A
@SP
A=M
M=D
@SP
M=M+1
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from hack_toolchain.errors import (
    UnsupportedOperationError,
    UnsupportedSegmentError,
)
from hack_toolchain.vm.commands import (
    ArithmeticCommand,
    ArithmeticOp,
    CallCommand,
    Command,
    FunctionCommand,
    GotoCommand,
    IfGotoCommand,
    LabelCommand,
    PopCommand,
    PushCommand,
    ReturnCommand,
    Segment,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_STATIC_NAMESPACE = "Foo"

TEMP_BASE = 5
TEMP_SIZE = 8  # RAM[5..12]; R13 and up are scratch

# Segments addressed through a base register
BASE_REGISTERS = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

# Saved by call, in push order
FRAME_REGISTERS = ("LCL", "ARG", "THIS", "THAT")
FRAME_SIZE = 1 + len(FRAME_REGISTERS)

BINARY_OPS = {
    ArithmeticOp.ADD: "M=D+M",
    ArithmeticOp.SUB: "M=M-D",
    ArithmeticOp.AND: "M=D&M",
    ArithmeticOp.OR: "M=D|M",
}

UNARY_OPS = {
    ArithmeticOp.NEG: "M=-M",
    ArithmeticOp.NOT: "M=!M",
}

# Jump taken when x - y satisfies the comparison
COMPARISON_JUMPS = {
    ArithmeticOp.EQ: "JEQ",
    ArithmeticOp.GT: "JGT",
    ArithmeticOp.LT: "JLT",
}

RETURN_LABEL_PREFIX = "RETURN_LABEL"


# =============================================================================
# Label Counter
# =============================================================================

@dataclass
class LabelCounter:
    """
    Mints unique internal label names for one translation run.

    >>> counter = LabelCounter()
    >>> counter.next("EQ"), counter.next("RETURN_LABEL")
    ('EQ0', 'RETURN_LABEL1')
    """
    value: int = 0

    def next(self, prefix: str) -> str:
        label = f"{prefix}{self.value}"
        self.value += 1
        return label


# =============================================================================
# Code Generator Class
# =============================================================================

class CodeGenerator:
    """
    Generates Hack assembly from VM commands.

    Attributes:
        static_namespace: Prefix of every static-segment symbol
        emit_comments: Precede each command's code with `// command`
    """

    def __init__(self, static_namespace: str = DEFAULT_STATIC_NAMESPACE,
                 emit_comments: bool = False):
        self.static_namespace = static_namespace
        self.emit_comments = emit_comments
        self._output: list[str] = []
        self._labels = LabelCounter()

    def generate(self, commands: Iterable[Command]) -> str:
        """
        Generate assembly for a whole translation run.

        Args:
            commands: Parsed VM commands in source order

        Returns:
            Assembly text, one newline-terminated line per instruction

        Raises:
            UnsupportedSegmentError: pop into constant, or unknown segment
            UnsupportedOperationError: unknown arithmetic operation
        """
        self._output = []
        self._labels = LabelCounter()

        count = 0
        for command in commands:
            if self.emit_comments:
                self._emit(f"// {command}")
            self._generate_command(command)
            count += 1

        logger.debug(
            f"generated {len(self._output)} lines for {count} commands "
            f"({self._labels.value} internal labels)"
        )
        return "".join(f"{line}\n" for line in self._output)

    # =========================================================================
    # Emission Helpers
    # =========================================================================

    def _emit(self, *lines: str) -> None:
        """Emit lines of assembly."""
        self._output.extend(lines)

    def _emit_label(self, label: str) -> None:
        """Emit a label declaration."""
        self._emit(f"({label})")

    def _emit_push_d(self) -> None:
        """Push D onto the stack."""
        self._emit("@SP", "A=M", "M=D", "@SP", "M=M+1")

    def _emit_pop_d(self) -> None:
        """Pop the stack into D (A is left pointing at the popped cell)."""
        self._emit("@SP", "AM=M-1", "D=M")

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _generate_command(self, command: Command) -> None:
        match command:
            case PushCommand(segment=segment, index=index):
                self._generate_push(segment, index)
            case PopCommand(segment=segment, index=index):
                self._generate_pop(segment, index)
            case ArithmeticCommand(operation=operation):
                self._generate_arithmetic(operation)
            case LabelCommand(name=name):
                self._emit_label(name)
            case GotoCommand(name=name):
                self._emit(f"@{name}", "0;JMP")
            case IfGotoCommand(name=name):
                self._emit_pop_d()
                self._emit(f"@{name}", "D;JNE")
            case FunctionCommand(name=name, local_count=local_count):
                self._generate_function(name, local_count)
            case CallCommand(name=name, arg_count=arg_count):
                self._generate_call(name, arg_count)
            case ReturnCommand():
                self._generate_return()
            case _:
                raise TypeError(f"not a VM command: {command!r}")

    # =========================================================================
    # Memory Access
    # =========================================================================

    def _fixed_address(self, segment: Segment, index: int) -> str:
        """Symbol or number naming the cell of a fixed-address segment."""
        match segment:
            case Segment.TEMP:
                if index >= TEMP_SIZE:
                    logger.warning(
                        f"temp {index} is outside temp 0..{TEMP_SIZE - 1} "
                        f"and addresses RAM[{TEMP_BASE + index}]"
                    )
                return str(TEMP_BASE + index)
            case Segment.POINTER:
                return "THIS" if index == 0 else "THAT"
            case Segment.STATIC:
                return f"{self.static_namespace}.{index}"
        raise UnsupportedSegmentError(str(segment))

    def _generate_push(self, segment: Segment, index: int) -> None:
        if segment is Segment.CONSTANT:
            self._emit(f"@{index}", "D=A")
        elif segment in BASE_REGISTERS:
            self._emit(f"@{index}", "D=A", f"@{BASE_REGISTERS[segment]}", "A=D+M", "D=M")
        elif isinstance(segment, Segment):
            self._emit(f"@{self._fixed_address(segment, index)}", "D=M")
        else:
            raise UnsupportedSegmentError(str(segment), "push")
        self._emit_push_d()

    def _generate_pop(self, segment: Segment, index: int) -> None:
        if segment in BASE_REGISTERS:
            self._emit(
                f"@{index}", "D=A", f"@{BASE_REGISTERS[segment]}", "D=D+M",
                "@R13", "M=D",
            )
            self._emit_pop_d()
            self._emit("@R13", "A=M", "M=D")
        elif segment in (Segment.TEMP, Segment.POINTER, Segment.STATIC):
            self._emit_pop_d()
            self._emit(f"@{self._fixed_address(segment, index)}", "M=D")
        else:
            name = segment.value if isinstance(segment, Segment) else str(segment)
            raise UnsupportedSegmentError(name, "pop")

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _generate_arithmetic(self, operation: ArithmeticOp) -> None:
        if operation in BINARY_OPS:
            self._emit_pop_d()
            self._emit("A=A-1", BINARY_OPS[operation])
        elif operation in UNARY_OPS:
            self._emit("@SP", "A=M-1", UNARY_OPS[operation])
        elif operation in COMPARISON_JUMPS:
            self._generate_comparison(operation)
        else:
            name = operation.value if isinstance(operation, ArithmeticOp) else str(operation)
            raise UnsupportedOperationError(name)

    def _generate_comparison(self, operation: ArithmeticOp) -> None:
        # x - y goes in D; x's cell is set to true and then overwritten
        # with false unless the jump skips it.
        label = self._labels.next(operation.name)
        self._emit_pop_d()
        self._emit(
            "A=A-1", "D=M-D", "M=-1",
            f"@{label}", f"D;{COMPARISON_JUMPS[operation]}",
            "@SP", "A=M-1", "M=0",
        )
        self._emit_label(label)

    # =========================================================================
    # Functions
    # =========================================================================

    def _generate_function(self, name: str, local_count: int) -> None:
        self._emit_label(name)
        for _ in range(local_count):
            self._emit("@SP", "A=M", "M=0", "@SP", "M=M+1")

    def _generate_call(self, name: str, arg_count: int) -> None:
        return_label = self._labels.next(RETURN_LABEL_PREFIX)

        self._emit(f"@{return_label}", "D=A")
        self._emit_push_d()
        for register in FRAME_REGISTERS:
            self._emit(f"@{register}", "D=M")
            self._emit_push_d()

        # ARG = SP - 5 - nArgs
        self._emit(
            "@SP", "D=M", f"@{FRAME_SIZE}", "D=D-A", f"@{arg_count}", "D=D-A",
            "@ARG", "M=D",
        )
        # LCL = SP
        self._emit("@SP", "D=M", "@LCL", "M=D")
        self._emit(f"@{name}", "0;JMP")
        self._emit_label(return_label)

    def _generate_return(self) -> None:
        # R14 = frame (LCL), R15 = return address (frame - 5)
        self._emit("@LCL", "D=M", "@R14", "M=D")
        self._emit(f"@{FRAME_SIZE}", "A=D-A", "D=M", "@R15", "M=D")
        # ARG[0] = return value; SP = ARG + 1
        self._emit("@SP", "A=M-1", "D=M", "@ARG", "A=M", "M=D", "D=A+1", "@SP", "M=D")
        for register in reversed(FRAME_REGISTERS):
            self._emit("@R14", "AM=M-1", "D=M", f"@{register}", "M=D")
        self._emit("@R15", "A=M", "0;JMP")
