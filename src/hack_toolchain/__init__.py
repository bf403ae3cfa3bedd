"""
Hack Toolchain - VM Translator and Assembler for the Hack Computer
==================================================================

This package lowers programs for a stack-based virtual machine down to
binary machine code for the 16-bit Hack computer, in two stages:

    program.vm ──hackvm──▶ program.asm ──hackasm──▶ program.hack

Main Components
---------------
- **vm**: VM translator (hackvm)
    Converts VM commands (push/pop, arithmetic, branching, function
    call/return) into symbolic Hack assembly

- **assembler**: Hack assembler (hackasm)
    Converts symbolic assembly into 16-bit binary words, resolving
    labels and variables in two passes

- **emulator**: Reference Hack CPU
    Executes binary words, for checking generated code

Quick Start
-----------
Translate and assemble:
    >>> from hack_toolchain import translate, assemble
    >>> binary = assemble(translate("push constant 7\\npush constant 8\\nadd"))

Or use the command-line tools:
    $ hackvm SimpleAdd.vm
    $ hackasm SimpleAdd.asm
"""

__version__ = "1.0.0"

from hack_toolchain.assembler import Assembler, SymbolTable, assemble
from hack_toolchain.vm import (
    CodeGenerator,
    TranslatorOptions,
    VMTranslator,
    parse_source,
    translate,
)
from hack_toolchain.emulator import HackCPU, StopReason
from hack_toolchain.errors import (
    HackError,
    SourceLocation,
    AssemblerError,
    UnresolvableReferenceError,
    AddressRangeError,
    TranslatorError,
    UnsupportedSegmentError,
    UnsupportedOperationError,
    EmulatorError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "SymbolTable",
    "assemble",
    # VM translator
    "CodeGenerator",
    "TranslatorOptions",
    "VMTranslator",
    "parse_source",
    "translate",
    # Emulator
    "HackCPU",
    "StopReason",
    # Exception hierarchy
    "HackError",
    "SourceLocation",
    "AssemblerError",
    "UnresolvableReferenceError",
    "AddressRangeError",
    "TranslatorError",
    "UnsupportedSegmentError",
    "UnsupportedOperationError",
    "EmulatorError",
]
