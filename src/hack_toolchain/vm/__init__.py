"""
VM Translator Package
=====================

Translates the stack-machine VM language to symbolic Hack assembly.

Modules
-------
- **commands**: the nine command variants, Segment and ArithmeticOp
- **parser**: source lines → commands (malformed lines are skipped)
- **codegen**: commands → assembly, including the call/return protocol
- **translator**: VMTranslator facade and TranslatorOptions

Example
-------
>>> from hack_toolchain.vm import translate
>>> from hack_toolchain.assembler import assemble
>>> binary = assemble(translate("push constant 7\\npush constant 8\\nadd"))
"""

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
from hack_toolchain.vm.parser import parse_line, parse_lines, parse_source
from hack_toolchain.vm.codegen import CodeGenerator, LabelCounter
from hack_toolchain.vm.translator import (
    TranslationResult,
    TranslatorOptions,
    VMTranslator,
    translate,
)

__all__ = [
    # Commands
    "ArithmeticCommand",
    "ArithmeticOp",
    "CallCommand",
    "Command",
    "FunctionCommand",
    "GotoCommand",
    "IfGotoCommand",
    "LabelCommand",
    "PopCommand",
    "PushCommand",
    "ReturnCommand",
    "Segment",
    # Parser
    "parse_line",
    "parse_lines",
    "parse_source",
    # Code generation
    "CodeGenerator",
    "LabelCounter",
    # Translator
    "TranslationResult",
    "TranslatorOptions",
    "VMTranslator",
    "translate",
]
