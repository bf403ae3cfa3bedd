"""
VM Translator Main Module
=========================

This module provides the main translator interface. It orchestrates the
complete translation of one VM program:

    Source → Parse → Generate → Assembly

Usage
-----
Command line:
    $ hackvm SimpleAdd.vm -o SimpleAdd.asm

Programmatic:
    >>> from hack_toolchain.vm import translate
    >>> asm = translate("push constant 7\\npush constant 8\\nadd")

The output is symbolic Hack assembly suitable for
hack_toolchain.assembler.Assembler.

Error Handling
--------------
Lines that match no command shape are skipped (and logged). Unsupported
segments and operations raise TranslatorError subclasses; nothing is
returned from a failed run.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from hack_toolchain.vm.codegen import CodeGenerator, DEFAULT_STATIC_NAMESPACE
from hack_toolchain.vm.commands import Command
from hack_toolchain.vm.parser import parse_lines

logger = logging.getLogger(__name__)


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        static_namespace: Tag prefixed to every static-segment symbol
                          (`<tag>.<index>`). One tag is used for the whole
                          run, so statics of separately translated files
                          that are later concatenated will collide.
        emit_comments: Precede each command's assembly with a
                       `// <command>` line.
    """
    static_namespace: str = DEFAULT_STATIC_NAMESPACE
    emit_comments: bool = False


@dataclass
class TranslationResult:
    """
    Result of translating one VM program.

    Attributes:
        filename: Source name
        commands: Parsed commands, in source order
        assembly: Generated assembly text
    """
    filename: str
    commands: list[Command]
    assembly: str

    @property
    def line_count(self) -> int:
        return self.assembly.count("\n")


class VMTranslator:
    """
    VM-to-Hack-assembly translator.

    Every call is an independent translation run: internal label numbering
    restarts at zero, so translating the same source twice yields
    byte-identical text.

    Example:
        translator = VMTranslator(TranslatorOptions(emit_comments=True))
        result = translator.translate_source(source, "Main.vm")
        print(result.assembly)
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        """
        Initialize the translator.

        Args:
            options: Translator configuration (uses defaults if None)
        """
        self.options = options or TranslatorOptions()

    def _generator(self) -> CodeGenerator:
        return CodeGenerator(
            static_namespace=self.options.static_namespace,
            emit_comments=self.options.emit_comments,
        )

    def translate_lines(self, lines: Iterable[str],
                        filename: str = "<input>") -> TranslationResult:
        """
        Translate VM source lines.

        Raises:
            UnsupportedSegmentError: push/pop on an unsupported segment
            UnsupportedOperationError: unknown arithmetic operation
        """
        commands = parse_lines(lines, filename)
        assembly = self._generator().generate(commands)
        logger.debug(f"translated {filename}: {len(commands)} commands")
        return TranslationResult(filename=filename, commands=commands, assembly=assembly)

    def translate_source(self, source: str,
                         filename: str = "<input>") -> TranslationResult:
        """Translate VM source text. See translate_lines()."""
        return self.translate_lines(source.splitlines(), filename)

    def translate_commands(self, commands: Iterable[Command]) -> str:
        """Generate assembly for already-parsed commands."""
        return self._generator().generate(commands)


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(source: str, filename: str = "<input>",
              options: Optional[TranslatorOptions] = None) -> str:
    """
    Convenience function to translate VM source text.

    Returns:
        Hack assembly text

    Raises:
        TranslatorError: If translation fails
    """
    return VMTranslator(options).translate_source(source, filename).assembly
