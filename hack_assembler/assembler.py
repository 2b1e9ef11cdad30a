# assembler.py
# Nand2Tetris (Elements of Computing Systems) Chapter 6: Hack assembler driver
#
# - Pass 1: labels -> ROM address of the next real instruction
# - Pass 2: unseen @symbols -> RAM[16], RAM[17], ... (decimal constants bind to themselves)
# - Pass 3: A- and C-instructions -> 16-character binary words

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .code import MAX_ADDRESS, encode_address, encode_compute
from .errors import AddressOverflow, MalformedInstruction, NumericOverflow, UnresolvedSymbol
from .parser import CommandType, Instruction, parse
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

VARIABLE_BASE = 16
_DECIMAL = re.compile(r"[0-9]+")
_MAX_DIGITS = 5


@dataclass(frozen=True)
class AssemblerOptions:
    # raise NumericOverflow instead of binding an out-of-range constant to 0
    strict_overflow: bool = False
    # cut "D=M // note" at the marker instead of dropping the whole line
    truncate_comments: bool = False


class Phase(Enum):
    RESOLVE_LABELS = auto()
    ALLOCATE_VARIABLES = auto()
    GENERATE_CODE = auto()
    DONE = auto()


# -----------------------------
# Constants
# -----------------------------
def is_constant(token: str) -> bool:
    return _DECIMAL.fullmatch(token) is not None


def constant_value(token: str) -> Optional[int]:
    """Value of a decimal @constant, or None when it does not fit in 15 bits."""
    if len(token) > _MAX_DIGITS:
        return None
    value = int(token)
    if value > MAX_ADDRESS:
        return None
    return value


# -----------------------------
# Pass 1: labels
# -----------------------------
def pass1_resolve_labels(instructions: List[Instruction], symbols: SymbolTable) -> None:
    rom_addr = 0
    for inst in instructions:
        if inst.kind == CommandType.L_COMMAND:
            if rom_addr > MAX_ADDRESS:
                raise AddressOverflow(f"Label {inst.symbol} past the end of ROM ({rom_addr})",
                                      inst.line_no, inst.text)
            if not symbols.bind(inst.symbol, rom_addr):
                logger.warning("[line %d] Label %s already bound to %d, ignored",
                               inst.line_no, inst.symbol, symbols.get(inst.symbol))
        else:
            # Only actual instructions consume ROM addresses
            rom_addr += 1
    logger.debug("pass 1: %d instructions", rom_addr)


# -----------------------------
# Pass 2: variables and constants
# -----------------------------
def pass2_allocate_variables(instructions: List[Instruction], symbols: SymbolTable,
                             strict_overflow: bool = False) -> None:
    next_var_addr = VARIABLE_BASE
    for inst in instructions:
        if inst.kind != CommandType.A_COMMAND or symbols.contains(inst.symbol):
            continue
        token = inst.symbol
        if is_constant(token):
            value = constant_value(token)
            if value is None:
                if strict_overflow:
                    raise NumericOverflow(f"Constant out of range for 15-bit A-instruction: {token}",
                                          inst.line_no, inst.text)
                logger.warning("[line %d] Constant %s out of range, using 0", inst.line_no, token)
                value = 0
            symbols.bind(token, value)
        else:
            if next_var_addr > MAX_ADDRESS:
                raise AddressOverflow(f"No RAM left for variable {token}", inst.line_no, inst.text)
            symbols.bind(token, next_var_addr)
            next_var_addr += 1
    logger.debug("pass 2: %d variables", next_var_addr - VARIABLE_BASE)


# -----------------------------
# Pass 3: code generation
# -----------------------------
def pass3_generate_code(instructions: List[Instruction], symbols: SymbolTable) -> List[str]:
    out: List[str] = []
    for inst in instructions:
        if inst.kind == CommandType.L_COMMAND:
            continue

        if inst.kind == CommandType.A_COMMAND:
            if not symbols.contains(inst.symbol):
                raise UnresolvedSymbol(f"Unresolved symbol '{inst.symbol}'", inst.line_no, inst.text)
            out.append(encode_address(symbols.get(inst.symbol)))
            continue

        try:
            out.append(encode_compute(inst.dest, inst.comp, inst.jump))
        except MalformedInstruction as e:
            raise MalformedInstruction(e.msg, inst.line_no, inst.text) from None
    logger.debug("pass 3: %d words", len(out))
    return out


# -----------------------------
# Driver
# -----------------------------
class Assembler:
    """
    One assembly run. Owns the symbol table and the classified lines and
    moves through the passes once, in order; the table is frozen before
    code generation starts.
    """

    def __init__(self, asm_text: str, options: Optional[AssemblerOptions] = None) -> None:
        self.options = options or AssemblerOptions()
        self.instructions: List[Instruction] = parse(asm_text, self.options.truncate_comments)
        self.symbols = SymbolTable()
        self.phase = Phase.RESOLVE_LABELS

    def run(self) -> List[str]:
        if self.phase != Phase.RESOLVE_LABELS:
            raise RuntimeError(f"Assembler already ran (phase {self.phase.name})")

        pass1_resolve_labels(self.instructions, self.symbols)
        self.phase = Phase.ALLOCATE_VARIABLES

        pass2_allocate_variables(self.instructions, self.symbols, self.options.strict_overflow)
        self.symbols.freeze()
        self.phase = Phase.GENERATE_CODE

        machine = pass3_generate_code(self.instructions, self.symbols)
        self.phase = Phase.DONE
        return machine


def assemble(asm_text: str, options: Optional[AssemblerOptions] = None) -> List[str]:
    return Assembler(asm_text, options).run()
