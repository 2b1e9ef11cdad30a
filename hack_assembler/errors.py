# errors.py
# Exceptions raised while assembling a Hack program.

from typing import Optional


class AsmError(Exception):
    def __init__(self, msg: str, line_no: Optional[int] = None, text: Optional[str] = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.line_no = line_no  # 1-based in the original file
        self.text = text

    def __str__(self) -> str:
        loc = f"[line {self.line_no}] " if self.line_no is not None else ""
        tail = f": {self.text}" if self.text else ""
        return f"{loc}{self.msg}{tail}"


class MalformedInstruction(AsmError):
    """dest/comp/jump (or a symbol) that no table knows about."""


class UnresolvedSymbol(AsmError):
    """A-instruction symbol still unbound when code generation runs."""


class NumericOverflow(AsmError):
    """Decimal constant outside 0..32767 (only raised in strict mode)."""


class InvocationError(AsmError):
    pass


class AddressOverflow(AsmError):
    """Label or variable address past the end of the 15-bit address space."""
