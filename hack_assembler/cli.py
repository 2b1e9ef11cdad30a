# cli.py
# Usage:
#   hack-assembler input.asm              -> writes input.hack next to input
#   hack-assembler input.asm out.hack     -> writes to explicit output path
#   python -m hack_assembler ...          -> same
#
# Exit status: 0 ok, 1 bad input/output path, 2 assembly error, 3 unexpected error.

import argparse
import logging
import os
import stat
import sys
import tempfile
from typing import List, Optional

from .assembler import AssemblerOptions, assemble
from .errors import AsmError, InvocationError

logger = logging.getLogger(__name__)


def default_output_path(in_path: str) -> str:
    stem, _ = os.path.splitext(in_path)
    return stem + ".hack"


def read_source(in_path: str) -> str:
    if not os.path.isfile(in_path):
        raise InvocationError(f"Input not found: {in_path}")
    try:
        with open(in_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvocationError(f"Cannot read {in_path}: {e}") from e


def output_mode(out_path: str) -> int:
    """Mode of the file being replaced, else what a plain open() would create."""
    try:
        return stat.S_IMODE(os.stat(out_path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_hack(out_path: str, words: List[str]) -> None:
    """
    Writes one word per line into a temporary file beside out_path and
    renames it over out_path at the end. out_path is either the complete
    output or left as it was.
    """
    out_dir = os.path.dirname(os.path.abspath(out_path))
    try:
        os.makedirs(out_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=out_dir)
    except OSError as e:
        raise InvocationError(f"Cannot write {out_path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            for word in words:
                f.write(word + "\n")
                f.flush()
        os.chmod(tmp_path, output_mode(out_path))
        os.replace(tmp_path, out_path)
    except OSError as e:
        os.unlink(tmp_path)
        raise InvocationError(f"Cannot write {out_path}: {e}") from e
    logger.debug("wrote %d words to %s", len(words), out_path)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hack-assembler",
        description="Assemble a Hack .asm program into .hack binary words.")
    ap.add_argument("source", help="input .asm file")
    ap.add_argument("output", nargs="?", default=None,
                    help="output .hack file (default: source with .hack extension)")
    ap.add_argument("--strict-overflow", action="store_true",
                    help="reject @constants above 32767 instead of assembling them as 0")
    ap.add_argument("--truncate-comments", action="store_true",
                    help="keep the code before a trailing // comment instead of dropping the line")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    out_path = args.output or default_output_path(args.source)
    options = AssemblerOptions(strict_overflow=args.strict_overflow,
                               truncate_comments=args.truncate_comments)
    try:
        asm_text = read_source(args.source)
        hack_lines = assemble(asm_text, options)
        write_hack(out_path, hack_lines)
    except InvocationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AsmError as e:
        print(f"Assembly error: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        logger.exception("unexpected failure")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 3

    print(f"OK: wrote {out_path} ({len(hack_lines)} instructions)")
    return 0
