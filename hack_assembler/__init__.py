# hack_assembler
# Two-pass assembler for the Hack computer (Nand2Tetris chapter 6).

from .assembler import Assembler, AssemblerOptions, Phase, assemble
from .errors import (
    AddressOverflow, AsmError, InvocationError, MalformedInstruction, NumericOverflow, UnresolvedSymbol,
)
from .symbol_table import PREDEFINED, SymbolTable

__version__ = "1.0.0"

__all__ = [
    "Assembler", "AssemblerOptions", "Phase", "assemble",
    "AddressOverflow", "AsmError", "InvocationError", "MalformedInstruction", "NumericOverflow", "UnresolvedSymbol",
    "PREDEFINED", "SymbolTable",
]
