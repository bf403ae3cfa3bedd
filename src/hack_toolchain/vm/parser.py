"""
VM Source Parser
================

Turns VM source lines into Command objects.

Parsing Rules
-------------
- Blank lines and `//` comments produce nothing; a trailing `// ...` on a
  command line is ignored.
- A line is split on whitespace and matched against the command shapes
  below. Word counts and numeric fields must match exactly.

    push SEGMENT INDEX      pop SEGMENT INDEX
    label NAME              goto NAME           if-goto NAME
    function NAME N         call NAME N         return
    add | sub | neg | eq | gt | lt | and | or | not

- A line that fits no shape is malformed: it is skipped with a warning,
  never raised.
- A push/pop that fits the shape but names an unknown segment (or pops
  into `constant`) raises UnsupportedSegmentError.
"""

import logging
from typing import Iterable, Optional

from hack_toolchain.errors import SourceLocation, UnsupportedSegmentError
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

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"

_SEGMENTS = {segment.value: segment for segment in Segment}
_OPERATIONS = {op.value: op for op in ArithmeticOp}


def _parse_count(text: str) -> Optional[int]:
    return int(text) if text.isascii() and text.isdigit() else None


def _parse_memory_access(parts: list[str], location: Optional[SourceLocation],
                         source_line: Optional[str]) -> Optional[Command]:
    keyword, segment_name, index_text = parts
    index = _parse_count(index_text)
    if index is None:
        return None

    segment = _SEGMENTS.get(segment_name)
    if segment is None:
        raise UnsupportedSegmentError(
            segment_name, keyword, location=location, source_line=source_line
        )

    if keyword == "push":
        return PushCommand(segment, index)
    if segment is Segment.CONSTANT:
        raise UnsupportedSegmentError(
            segment_name, keyword, location=location, source_line=source_line
        )
    return PopCommand(segment, index)


def parse_line(line: str,
               location: Optional[SourceLocation] = None) -> Optional[Command]:
    """
    Parse one VM source line.

    Args:
        line: Raw source line
        location: Where the line came from, for error messages

    Returns:
        The command, or None for blank, comment and malformed lines

    Raises:
        UnsupportedSegmentError: push/pop with an unknown segment

    >>> parse_line("push constant 7")
    PushCommand(segment=<Segment.CONSTANT: 'constant'>, index=7)
    >>> parse_line("push constant seven") is None
    True
    """
    text = line.split(COMMENT_PREFIX, 1)[0].strip()
    if not text:
        return None

    parts = text.split()
    keyword = parts[0]

    match (keyword, len(parts)):
        case ("push" | "pop", 3):
            return _parse_memory_access(parts, location, text)
        case ("label", 2):
            return LabelCommand(parts[1])
        case ("goto", 2):
            return GotoCommand(parts[1])
        case ("if-goto", 2):
            return IfGotoCommand(parts[1])
        case ("function", 3):
            count = _parse_count(parts[2])
            return FunctionCommand(parts[1], count) if count is not None else None
        case ("call", 3):
            count = _parse_count(parts[2])
            return CallCommand(parts[1], count) if count is not None else None
        case ("return", 1):
            return ReturnCommand()
        case (_, 1) if keyword in _OPERATIONS:
            return ArithmeticCommand(_OPERATIONS[keyword])
        case _:
            return None


def _is_blank_or_comment(line: str) -> bool:
    return not line.split(COMMENT_PREFIX, 1)[0].strip()


def parse_lines(lines: Iterable[str], filename: str = "<input>") -> list[Command]:
    """
    Parse VM source lines, dropping blank, comment and malformed lines.

    Args:
        lines: Source lines
        filename: Name used in error and log messages

    Returns:
        Commands in source order
    """
    commands: list[Command] = []
    for line_no, line in enumerate(lines, start=1):
        location = SourceLocation(filename, line_no)
        command = parse_line(line, location)
        if command is not None:
            commands.append(command)
        elif not _is_blank_or_comment(line):
            logger.warning(f"{location}: skipping unrecognized line: {line.strip()}")

    logger.debug(f"parsed {len(commands)} commands from {filename}")
    return commands


def parse_source(source: str, filename: str = "<input>") -> list[Command]:
    """Parse VM source text. See parse_lines()."""
    return parse_lines(source.splitlines(), filename)
