"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, which turns symbolic Hack
assembly into 16-bit binary words.

Two-Pass Assembly
-----------------
1. **Pass 1** walks every line with an instruction counter starting at 0.
   A `(LABEL)` declaration binds LABEL to the current counter without
   advancing it; every other instruction advances it by one. After this
   pass every label is known, so forward references resolve.

2. **Pass 2** walks the lines again and builds instructions. `@number`
   is used as-is; `@symbol` is looked up, and an unbound symbol becomes a
   new variable at the next free RAM address (16, 17, ...). Anything
   else is a compute instruction `dest=comp;jump`.

Emission encodes each instruction to a string of sixteen `0`/`1`
characters, in source order.

Example Usage
-------------
>>> from hack_toolchain.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_lines(["@2", "D=A", "@3", "D=D+A", "@0", "M=D"])[-1]
'1110001100001000'
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from hack_toolchain.assembler.instructions import (
    AInstruction,
    Instruction,
    parse_compute,
)
from hack_toolchain.assembler.symbols import SymbolTable
from hack_toolchain.assembler.tables import MAX_ADDRESS
from hack_toolchain.errors import (
    AddressRangeError,
    AssemblerError,
    UnresolvableReferenceError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Line Classification
# =============================================================================

COMMENT_PREFIX = "//"


def strip_line(line: str) -> str:
    """Remove a trailing // comment and surrounding whitespace."""
    return line.split(COMMENT_PREFIX, 1)[0].strip()


def is_label_declaration(text: str) -> bool:
    """True for a stripped line of the form `(NAME)`."""
    return len(text) >= 2 and text.startswith("(") and text.endswith(")")


@dataclass(frozen=True)
class Statement:
    """
    A parsed instruction together with where it came from.

    Attributes:
        instruction: The resolved instruction
        location: Source position, for error messages
        text: The stripped source text
    """
    instruction: Instruction
    location: SourceLocation
    text: str


# =============================================================================
# Assembler Class
# =============================================================================

class Assembler:
    """
    Two-pass Hack assembler.

    Each call to parse_lines / assemble_lines is an independent run with
    a fresh symbol table. After a run, get_symbols() returns the final
    bindings (predefined, labels and variables).
    """

    def __init__(self):
        self._symbols = SymbolTable()
        self._statements: list[Statement] = []

    # =========================================================================
    # Passes
    # =========================================================================

    def _first_pass(self, lines: list[str], filename: str) -> None:
        address = 0
        for line_no, line in enumerate(lines, start=1):
            text = strip_line(line)
            if not text:
                continue
            if is_label_declaration(text):
                name = text[1:-1].strip()
                if not name:
                    location = SourceLocation(filename, line_no, line.find("(") + 1)
                    raise AssemblerError("empty label name", location=location,
                                         source_line=text)
                self._symbols.define_label(name, address)
            else:
                address += 1
        logger.debug(f"pass 1: {address} instructions")

    def _second_pass(self, lines: list[str], filename: str) -> None:
        for line_no, line in enumerate(lines, start=1):
            text = strip_line(line)
            if not text or is_label_declaration(text):
                continue

            column = line.find(text[0]) + 1
            location = SourceLocation(filename, line_no, column)

            if text.startswith("@"):
                instruction = self._address_load(text[1:].strip(), location, text)
            else:
                instruction = parse_compute("".join(text.split()))

            self._statements.append(Statement(instruction, location, text))
        logger.debug(f"pass 2: {len(self._statements)} statements")

    def _address_load(self, operand: str, location: SourceLocation,
                      text: str) -> AInstruction:
        if not operand:
            raise AssemblerError("missing address operand", location=location,
                                 source_line=text)
        if operand.isascii() and operand.isdigit():
            value = int(operand)
            if value > MAX_ADDRESS:
                raise AddressRangeError(value, location=location, source_line=text)
        else:
            value = self._symbols.resolve_variable(operand)
        return AInstruction(value)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def parse_lines(self, lines: Iterable[str],
                    filename: str = "<input>") -> list[Instruction]:
        """
        Run both passes and return the resolved instructions.

        Args:
            lines: Source lines, with or without trailing newlines
            filename: Name used in error messages

        Returns:
            One instruction per non-blank, non-comment, non-label line

        Raises:
            AddressRangeError: If an @constant exceeds 32767
            AssemblerError: Empty label declaration `()` or `@` without operand
        """
        lines = list(lines)
        self._symbols = SymbolTable()
        self._statements = []

        self._first_pass(lines, filename)
        self._second_pass(lines, filename)
        return [statement.instruction for statement in self._statements]

    def assemble_lines(self, lines: Iterable[str],
                       filename: str = "<input>") -> list[str]:
        """
        Assemble source lines into binary words.

        Returns:
            List of 16-character `0`/`1` strings, in source order

        Raises:
            UnresolvableReferenceError: Unknown comp/dest/jump mnemonic
            AddressRangeError: @constant exceeds 32767
        """
        self.parse_lines(lines, filename)

        words = []
        for statement in self._statements:
            try:
                words.append(statement.instruction.encode())
            except UnresolvableReferenceError as e:
                raise UnresolvableReferenceError(
                    e.field,
                    e.mnemonic,
                    location=statement.location,
                    source_line=statement.text,
                    valid=e.valid,
                ) from None

        logger.debug(f"emitted {len(words)} words")
        return words

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source text into `.hack` text.

        Returns:
            One newline-terminated binary word per instruction
        """
        words = self.assemble_lines(source.splitlines(), filename)
        return "".join(f"{word}\n" for word in words)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table of the last run.

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return self._symbols.as_dict()

    def get_label_address(self, name: str) -> Optional[int]:
        """Return the address bound to name in the last run, or None."""
        return self._symbols.get(name)

    def get_instructions(self) -> list[Instruction]:
        """Return the instructions of the last run."""
        return [statement.instruction for statement in self._statements]

    def get_listing(self) -> str:
        """
        Get a listing of the last run: address, word and source per line.

        Example line:
            0003  1110000010010000  D=D+A
        """
        rows = []
        for address, statement in enumerate(self._statements):
            rows.append(
                f"{address:04d}  {statement.instruction.encode()}  {statement.text}"
            )
        return "\n".join(rows)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> str:
    """
    Convenience function to assemble source text.

    Returns:
        `.hack` text, one newline-terminated word per instruction

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)

