"""
Hack Encoding Tables
====================

Static mappings used by the assembler to turn mnemonics into bits and
predefined names into addresses.

Compute Instruction Layout
--------------------------
A compute instruction is sixteen bits:

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
    |___| |________________| |______| |______|
   prefix        comp           dest     jump

- **comp** (7 bits): `a` selects A (0) or M (1) as the ALU's y input;
  c1..c6 are the ALU control bits zx, nx, zy, ny, f, no.
- **dest** (3 bits): d1 stores to A, d2 to D, d3 to M.
- **jump** (3 bits): j1 jumps if out < 0, j2 if out == 0, j3 if out > 0.

Memory Map
----------
| Address      | Name                                          |
|--------------|-----------------------------------------------|
| 0-4          | SP, LCL, ARG, THIS, THAT                      |
| 0-15         | R0..R15 (R5..R12 hold the VM temp segment)    |
| 16-255       | static variables (assembler variable symbols) |
| 16384        | SCREEN (memory-mapped display)                |
| 24576        | KBD (memory-mapped keyboard)                  |
"""

# =============================================================================
# Instruction Field Tables
# =============================================================================

COMPUTE_PREFIX = "111"

NULL_MNEMONIC = "null"

COMP_TABLE: dict[str, str] = {
    # a = 0: y input is the A register
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a = 1: y input is RAM[A]
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}

DEST_TABLE: dict[str, str] = {
    NULL_MNEMONIC: "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
}

JUMP_TABLE: dict[str, str] = {
    NULL_MNEMONIC: "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}


# =============================================================================
# Predefined Symbols
# =============================================================================

SP = 0
LCL = 1
ARG = 2
THIS = 3
THAT = 4
SCREEN = 16384
KBD = 24576

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": SP,
    "LCL": LCL,
    "ARG": ARG,
    "THIS": THIS,
    "THAT": THAT,
    **{f"R{i}": i for i in range(16)},
    "SCREEN": SCREEN,
    "KBD": KBD,
}

# First RAM address handed out to variable symbols
VARIABLE_BASE = 16

# Largest value an address-load instruction can carry (MSB must be 0)
MAX_ADDRESS = 0x7FFF

WORD_BITS = 16
