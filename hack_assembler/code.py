# code.py
# Hack machine-code tables for the three C-instruction fields (dest, comp, jump)
# and the two word encoders.
#
#   A-instruction: 0 vvvvvvvvvvvvvvv
#   C-instruction: 1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3

from types import MappingProxyType
from typing import Mapping

from .errors import MalformedInstruction

NULL = "null"
MAX_ADDRESS = 32767  # 15 bits

# -----------------------------
# Code tables (Nand2Tetris chapter 6)
# -----------------------------
DEST_TABLE: Mapping[str, str] = MappingProxyType({
    NULL:   "000",
    "M":    "001",
    "D":    "010",
    "MD":   "011",
    "A":    "100",
    "AM":   "101",
    "AD":   "110",
    "AMD":  "111",
})

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    NULL:   "000",
    "JGT":  "001",
    "JEQ":  "010",
    "JGE":  "011",
    "JLT":  "100",
    "JNE":  "101",
    "JLE":  "110",
    "JMP":  "111",
})

# c1..c6, keyed by the A spelling. The M spelling shares the bits and sets a=1.
COMP_TABLE: Mapping[str, str] = MappingProxyType({
    "0":   "101010",
    "1":   "111111",
    "-1":  "111010",
    "D":   "001100",
    "A":   "110000",
    "!D":  "001101",
    "!A":  "110001",
    "-D":  "001111",
    "-A":  "110011",
    "D+1": "011111",
    "A+1": "110111",
    "D-1": "001110",
    "A-1": "110010",
    "D+A": "000010",
    "D-A": "010011",
    "A-D": "000111",
    "D&A": "000000",
    "D|A": "010101",
})

_DEST_ORDER = "AMD"


def canonical_dest(text: str) -> str:
    """'DM' -> 'MD', 'DA' -> 'AD' ... Registers may be written in any order, once each."""
    if text == NULL:
        return text
    if not text or len(set(text)) != len(text) or any(c not in _DEST_ORDER for c in text):
        raise MalformedInstruction(f"Invalid dest field: '{text}'")
    return "".join(sorted(text, key=_DEST_ORDER.index))


def dest(text: str) -> str:
    return DEST_TABLE[canonical_dest(text)]


def jump(text: str) -> str:
    if text not in JUMP_TABLE:
        raise MalformedInstruction(f"Invalid jump field: '{text}'")
    return JUMP_TABLE[text]


def comp(text: str) -> str:
    """7 bits: the a bit (1 when M is referenced) followed by c1..c6."""
    a_bit = "1" if "M" in text else "0"
    key = text.replace("M", "A") if a_bit == "1" else text
    if key not in COMP_TABLE:
        raise MalformedInstruction(f"Invalid comp field: '{text}'")
    return a_bit + COMP_TABLE[key]


def encode_compute(dest_text: str, comp_text: str, jump_text: str) -> str:
    return "111" + comp(comp_text) + dest(dest_text) + jump(jump_text)


def encode_address(address: int) -> str:
    if address < 0 or address > MAX_ADDRESS:
        raise ValueError(f"Address out of range for 15-bit A-instruction: {address}")
    return "0" + f"{address:015b}"
