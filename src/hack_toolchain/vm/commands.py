"""
VM Command Model
================

The nine command variants of the stack-machine VM language. Each source
line that parses becomes exactly one immutable command.

| Command                  | Effect                                     |
|--------------------------|--------------------------------------------|
| push segment index       | push segment[index] onto the stack         |
| pop segment index        | pop the stack into segment[index]          |
| add, sub, neg, ...       | arithmetic/logic on the top of the stack   |
| label NAME               | declare a branch target                    |
| goto NAME                | unconditional jump                         |
| if-goto NAME             | pop; jump if the value is non-zero         |
| function NAME nLocals    | declare a function with nLocals locals     |
| call NAME nArgs          | call NAME with nArgs arguments on stack    |
| return                   | return to the caller                       |
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Segment(Enum):
    """Addressable VM memory segments."""
    CONSTANT = "constant"
    LOCAL = "local"
    ARGUMENT = "argument"
    THIS = "this"
    THAT = "that"
    TEMP = "temp"
    POINTER = "pointer"
    STATIC = "static"


class ArithmeticOp(Enum):
    """Arithmetic, logical and comparison operations."""
    ADD = "add"
    SUB = "sub"
    NEG = "neg"
    EQ = "eq"
    GT = "gt"
    LT = "lt"
    AND = "and"
    OR = "or"
    NOT = "not"


@dataclass(frozen=True)
class PushCommand:
    segment: Segment
    index: int

    def __str__(self) -> str:
        return f"push {self.segment.value} {self.index}"


@dataclass(frozen=True)
class PopCommand:
    segment: Segment
    index: int

    def __str__(self) -> str:
        return f"pop {self.segment.value} {self.index}"


@dataclass(frozen=True)
class ArithmeticCommand:
    operation: ArithmeticOp

    def __str__(self) -> str:
        return self.operation.value


@dataclass(frozen=True)
class LabelCommand:
    name: str

    def __str__(self) -> str:
        return f"label {self.name}"


@dataclass(frozen=True)
class GotoCommand:
    name: str

    def __str__(self) -> str:
        return f"goto {self.name}"


@dataclass(frozen=True)
class IfGotoCommand:
    name: str

    def __str__(self) -> str:
        return f"if-goto {self.name}"


@dataclass(frozen=True)
class FunctionCommand:
    name: str
    local_count: int

    def __str__(self) -> str:
        return f"function {self.name} {self.local_count}"


@dataclass(frozen=True)
class ReturnCommand:

    def __str__(self) -> str:
        return "return"


@dataclass(frozen=True)
class CallCommand:
    name: str
    arg_count: int

    def __str__(self) -> str:
        return f"call {self.name} {self.arg_count}"


Command = Union[
    PushCommand,
    PopCommand,
    ArithmeticCommand,
    LabelCommand,
    GotoCommand,
    IfGotoCommand,
    FunctionCommand,
    ReturnCommand,
    CallCommand,
]
