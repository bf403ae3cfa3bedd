"""
Assembler Symbol Table
======================

Maps symbol names to 15-bit addresses. Bindings are made in three
layers and a name, once bound, is never rebound:

1. Predefined architectural names (SP, LCL, R0..R15, SCREEN, KBD, ...)
2. Labels, bound during pass 1 to the address of the next instruction
3. Variables, bound lazily during pass 2 starting at RAM address 16
"""

import logging
from typing import Optional

from hack_toolchain.assembler.tables import PREDEFINED_SYMBOLS, VARIABLE_BASE

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    Insert-if-absent symbol table for one assembly run.

    Example:
        >>> table = SymbolTable()
        >>> table.define_label("LOOP", 4)
        True
        >>> table.resolve_variable("i")
        16
        >>> table.resolve_variable("i")
        16
    """

    def __init__(self):
        self._symbols: dict[str, int] = dict(PREDEFINED_SYMBOLS)
        self._next_variable = VARIABLE_BASE

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def get(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None."""
        return self._symbols.get(name)

    def define_label(self, name: str, address: int) -> bool:
        """
        Bind a label to an instruction address.

        Returns:
            True if the label was bound, False if the name already had a
            binding (the earlier binding is kept)
        """
        if name in self._symbols:
            logger.warning(
                f"label '{name}' already bound to {self._symbols[name]}, "
                f"ignoring rebinding to {address}"
            )
            return False
        self._symbols[name] = address
        logger.debug(f"label {name} = {address}")
        return True

    def resolve_variable(self, name: str) -> int:
        """
        Return the address of name, allocating a variable slot if unbound.

        Successive new variables get 16, 17, 18, ...
        """
        address = self._symbols.get(name)
        if address is None:
            address = self._next_variable
            self._symbols[name] = address
            self._next_variable += 1
            logger.debug(f"variable {name} = {address}")
        return address

    def as_dict(self) -> dict[str, int]:
        """Return a copy of every binding."""
        return dict(self._symbols)
