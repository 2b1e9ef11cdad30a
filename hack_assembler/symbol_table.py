# symbol_table.py
# Symbol -> RAM/ROM address bindings for one assembly run.

from typing import Dict

from .code import MAX_ADDRESS

PREDEFINED: Dict[str, int] = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "SCREEN": 16384, "KBD": 24576,
    **{f"R{i}": i for i in range(16)}
}


class SymbolTable:
    """
    Starts with the predefined symbols. A name keeps its first binding:
    bind() on a name that is already present does nothing, which is what
    makes labels win over variables and predefined symbols win over both.
    """

    def __init__(self) -> None:
        self._symbols: Dict[str, int] = dict(PREDEFINED)
        self._frozen = False

    def contains(self, name: str) -> bool:
        return name in self._symbols

    def get(self, name: str) -> int:
        # KeyError for an unbound name: callers check contains() first
        return self._symbols[name]

    def bind(self, name: str, address: int) -> bool:
        """Returns True when a new binding was made."""
        if self._frozen:
            raise RuntimeError(f"Symbol table is read-only, cannot bind {name}")
        if address < 0 or address > MAX_ADDRESS:
            raise ValueError(f"Address out of range for symbol {name}: {address}")
        if name in self._symbols:
            return False
        self._symbols[name] = address
        return True

    def freeze(self) -> None:
        self._frozen = True
