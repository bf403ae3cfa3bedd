"""
Hack Computer Emulator
======================

A reference Hack CPU for running assembled programs, mainly so that
translated VM code can be checked by executing it.

Quick Start
-----------

    >>> from hack_toolchain.assembler import Assembler
    >>> from hack_toolchain.emulator import HackCPU
    >>> cpu = HackCPU(Assembler().assemble_lines(["@5", "D=A", "@R1", "M=D"]))
    >>> cpu.run()
    <StopReason.END_OF_PROGRAM: 1>
    >>> cpu.peek(1)
    5
"""

from hack_toolchain.emulator.cpu import (
    HackCPU,
    StopReason,
    alu,
    to_signed,
    RAM_SIZE,
)

__all__ = [
    "HackCPU",
    "StopReason",
    "alu",
    "to_signed",
    "RAM_SIZE",
]
