"""
Hack Assembler Package
======================

Converts symbolic Hack assembly (.asm) into binary machine words (.hack).

Architecture
------------
1. **Encoding tables (tables)**: comp/dest/jump bit patterns and the
   predefined symbol addresses.

2. **Instruction model (instructions)**: AInstruction and CInstruction,
   each able to encode itself to a 16-character binary word.

3. **Symbol table (symbols)**: insert-if-absent bindings for predefined
   names, labels and variables.

4. **Assembler (assembler)** (two-pass):
   - Pass 1: bind every label to its instruction address
   - Pass 2: build instructions, allocating variables on first use

Example Usage
-------------
>>> from hack_toolchain.assembler import Assembler
>>> asm = Assembler()
>>> print(asm.assemble_string('''
... // Computes R0 = 2 + 3
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... '''), end="")
0000000000000010
1110110000010000
0000000000000011
1110000010010000
0000000000000000
1110001100001000

Supported Syntax
----------------
- Comments: `// ...` on their own line or after an instruction
- Labels: `(NAME)`
- Address loads: `@123` or `@symbol`
- Compute instructions: `[dest=]comp[;jump]`
"""

from hack_toolchain.assembler.assembler import (
    Assembler,
    Statement,
    assemble,
    is_label_declaration,
    strip_line,
)
from hack_toolchain.assembler.instructions import (
    AInstruction,
    CInstruction,
    Instruction,
    parse_compute,
)
from hack_toolchain.assembler.symbols import SymbolTable
from hack_toolchain.assembler.tables import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
    VARIABLE_BASE,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "Statement",
    "assemble",
    "is_label_declaration",
    "strip_line",
    # Instruction model
    "AInstruction",
    "CInstruction",
    "Instruction",
    "parse_compute",
    # Symbols
    "SymbolTable",
    # Tables
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "PREDEFINED_SYMBOLS",
    "VARIABLE_BASE",
]
