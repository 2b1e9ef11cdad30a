# parser.py
# Turns .asm text into a list of classified instructions.
#
#   @xxx              -> A_COMMAND  (symbol = xxx)
#   (xxx)             -> L_COMMAND  (symbol = xxx)
#   dest=comp;jump    -> C_COMMAND  (dest / jump default to "null")

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .code import NULL
from .errors import MalformedInstruction

COMMENT = "//"


# ------------------------------------------------------------
# Command kinds
# ------------------------------------------------------------

class CommandType(Enum):
    A_COMMAND = auto()
    C_COMMAND = auto()
    L_COMMAND = auto()


@dataclass(frozen=True)
class SourceLine:
    text: str     # whitespace already removed
    line_no: int  # 1-based in the original file


@dataclass(frozen=True)
class Instruction:
    kind: CommandType
    line_no: int
    text: str
    symbol: Optional[str] = None  # A_COMMAND / L_COMMAND
    dest: str = NULL              # C_COMMAND
    comp: str = ""
    jump: str = NULL


# ------------------------------------------------------------
# Line cleanup
# ------------------------------------------------------------

def strip_whitespace(line: str) -> str:
    # every whitespace character goes, including ones inside a token
    return "".join(line.split())


def clean_lines(asm_text: str, truncate_comments: bool = False) -> List[SourceLine]:
    """
    Drops blank lines and comment lines. A line holding "//" anywhere is
    dropped as a whole, so "D=M // load" disappears too; with
    truncate_comments the line is cut at the marker instead.
    """
    lines: List[SourceLine] = []
    for i, raw in enumerate(asm_text.split("\n")):
        code = strip_whitespace(raw)
        if COMMENT in code:
            if not truncate_comments:
                continue
            code = code.split(COMMENT, 1)[0]
        if not code:
            continue
        lines.append(SourceLine(text=code, line_no=i + 1))
    return lines


# ------------------------------------------------------------
# Classification
# ------------------------------------------------------------

def classify(line: SourceLine) -> Instruction:
    text = line.text

    _, at, symbol = text.partition("@")
    if at:
        if not symbol:
            raise MalformedInstruction("Missing symbol after '@'", line.line_no, text)
        return Instruction(CommandType.A_COMMAND, line.line_no, text, symbol=symbol)

    _, opened, rest = text.partition("(")
    if opened:
        label, closed, _ = rest.partition(")")
        if closed:
            if not label:
                raise MalformedInstruction("Empty label", line.line_no, text)
            return Instruction(CommandType.L_COMMAND, line.line_no, text, symbol=label)

    dest, assign, compjump = text.partition("=")
    if not assign:
        dest, compjump = NULL, text
    comp, semi, jump = compjump.partition(";")
    if not semi:
        jump = NULL
    return Instruction(CommandType.C_COMMAND, line.line_no, text, dest=dest, comp=comp, jump=jump)


# ------------------------------------------------------------
# Parser: walks the cleaned lines one command at a time
# ------------------------------------------------------------

class Parser:
    def __init__(self, asm_text: str, truncate_comments: bool = False) -> None:
        self.commands: List[SourceLine] = clean_lines(asm_text, truncate_comments)
        self.current: Instruction | None = None
        self.index: int = -1

    def has_more_commands(self) -> bool:
        return self.index + 1 < len(self.commands)

    def advance(self) -> None:
        """Classifies the next line and makes it current."""
        self.index += 1
        self.current = classify(self.commands[self.index])


def parse(asm_text: str, truncate_comments: bool = False) -> List[Instruction]:
    parser = Parser(asm_text, truncate_comments)
    instructions: List[Instruction] = []
    while parser.has_more_commands():
        parser.advance()
        assert parser.current is not None
        instructions.append(parser.current)
    return instructions
