"""
Hack Toolchain Error Hierarchy
==============================

This module defines the exception hierarchy for the whole toolchain.
All exceptions inherit from HackError, allowing callers to catch every
toolchain failure with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
├── AssemblerError (assembler-related)
│   ├── UnresolvableReferenceError - unknown comp/dest/jump mnemonic
│   └── AddressRangeError - @value constant does not fit in 15 bits
├── TranslatorError (VM translator)
│   ├── UnsupportedSegmentError - push/pop on an unknown segment
│   └── UnsupportedOperationError - unknown arithmetic operation
└── EmulatorError (reference CPU)

Malformed VM lines are not errors: the parser skips them.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all toolchain errors.

        try:
            Assembler().assemble_string(source)
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


class _LocatedError(HackError):
    """
    Shared message formatting for errors that point into a source file.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:15:1: error: unknown comp mnemonic 'D+2'
                D=D+2
                ^
            hint: valid comp mnemonics: !A, !D, !M, -1, -A, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(_LocatedError):
    """Base exception for all assembler-related errors."""
    pass


class UnresolvableReferenceError(AssemblerError):
    """
    An encoding-table lookup failed.

    Raised when the comp, dest or jump field of a compute instruction is
    not one of the mnemonics the machine understands. Fatal for the run.

    Example:
        D=D*A     ; Error: the ALU has no multiply
    """

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid: Optional[list[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic
        self.valid = valid

        hint = None
        if valid:
            hint = f"valid {field} mnemonics: {', '.join(valid)}"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    An address-load constant does not fit in 15 bits.

    The most significant bit of a word marks a compute instruction, so
    @value accepts 0..32767 only. Larger values are rejected rather
    than masked.
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        super().__init__(
            f"address constant {value} out of range (0..32767)",
            location=location,
            hint="load large constants in two steps, e.g. @16384 D=A then D=D+A",
            source_line=source_line,
        )


# =============================================================================
# VM Translator Exceptions
# =============================================================================

class TranslatorError(_LocatedError):
    """Base exception for all VM translator errors."""
    pass


class UnsupportedSegmentError(TranslatorError):
    """
    A push or pop names a segment outside the supported set.

    Also raised for `pop constant`, since the constant segment has no
    storage to pop into.
    """

    def __init__(
        self,
        segment: str,
        command: str = "push",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.segment = segment
        self.command = command
        super().__init__(
            f"unsupported {command} segment '{segment}'",
            location=location,
            source_line=source_line,
        )


class UnsupportedOperationError(TranslatorError):
    """An arithmetic command uses an operation the generator cannot emit."""

    def __init__(
        self,
        operation: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operation = operation
        super().__init__(
            f"unsupported arithmetic operation '{operation}'",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Emulator Exceptions
# =============================================================================

class EmulatorError(HackError):
    """The reference CPU could not execute a word."""
    pass
