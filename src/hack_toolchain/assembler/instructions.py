"""
Hack Instruction Model
======================

The two instruction variants produced by the assembler's second pass.
Both are immutable; each is encoded exactly once.

- AInstruction: `@value` loads a 15-bit value into the A register.
- CInstruction: `dest=comp;jump` computes, optionally stores, optionally
  branches.
"""

from dataclasses import dataclass
from typing import Optional, Union

from hack_toolchain.assembler.tables import (
    COMP_TABLE,
    COMPUTE_PREFIX,
    DEST_TABLE,
    JUMP_TABLE,
    MAX_ADDRESS,
    NULL_MNEMONIC,
    WORD_BITS,
)
from hack_toolchain.errors import AddressRangeError, UnresolvableReferenceError


@dataclass(frozen=True)
class AInstruction:
    """
    Address-load instruction carrying an already-resolved value.

    Attributes:
        value: Address or constant, 0..32767
    """
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= MAX_ADDRESS:
            raise AddressRangeError(self.value)

    def encode(self) -> str:
        """Return the 16-character binary word (MSB is always 0)."""
        return format(self.value, f"0{WORD_BITS}b")

    def __str__(self) -> str:
        return f"@{self.value}"


@dataclass(frozen=True)
class CInstruction:
    """
    Compute instruction.

    Attributes:
        comp: Computation mnemonic (required)
        dest: Destination mnemonic, or None for no store
        jump: Jump mnemonic, or None for no branch
    """
    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None

    def encode(self) -> str:
        """
        Return the 16-character binary word.

        Raises:
            UnresolvableReferenceError: If any field is not in its table
        """
        comp_bits = _lookup("comp", COMP_TABLE, self.comp)
        dest_bits = _lookup("dest", DEST_TABLE, _or_null(self.dest))
        jump_bits = _lookup("jump", JUMP_TABLE, _or_null(self.jump))
        return f"{COMPUTE_PREFIX}{comp_bits}{dest_bits}{jump_bits}"

    def __str__(self) -> str:
        text = self.comp
        if self.dest is not None:
            text = f"{self.dest}={text}"
        if self.jump is not None:
            text = f"{text};{self.jump}"
        return text


Instruction = Union[AInstruction, CInstruction]


def _or_null(mnemonic: Optional[str]) -> str:
    # An absent field is null; an empty one (`D;`, `=D`) is not.
    return NULL_MNEMONIC if mnemonic is None else mnemonic


def _lookup(field: str, table: dict[str, str], mnemonic: str) -> str:
    try:
        return table[mnemonic]
    except KeyError:
        raise UnresolvableReferenceError(field, mnemonic, valid=sorted(table)) from None


def parse_compute(text: str) -> CInstruction:
    """
    Split `dest=comp;jump` into its fields.

    The jump is split off at the first `;`, then the destination at the
    first `=`. Missing parts become None; a separator with nothing
    after (or before) it leaves an empty field, which encode() rejects.

    >>> parse_compute("D;JGT")
    CInstruction(comp='D', dest=None, jump='JGT')
    """
    rest, sep, jump = text.partition(";")
    dest, eq, comp = rest.partition("=")
    if not eq:
        dest, comp = "", rest
    return CInstruction(
        comp=comp,
        dest=dest if eq else None,
        jump=jump if sep else None,
    )
