import os
import stat

import pytest

from hack_assembler.cli import default_output_path, main

SRC = "@2\nD=A\n@3\nD=D+A\n@0\nM=D\n"
HACK = (
    "0000000000000010\n"
    "1110110000010000\n"
    "0000000000000011\n"
    "1110000010010000\n"
    "0000000000000000\n"
    "1110001100001000\n"
)


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_explicit_output(tmp_path, capsys):
    src = write(tmp_path / "Add.asm", SRC)
    out = tmp_path / "out" / "Add.hack"
    assert main([str(src), str(out)]) == 0
    assert out.read_text(encoding="utf-8") == HACK
    assert "OK: wrote" in capsys.readouterr().out


def test_default_output(tmp_path):
    src = write(tmp_path / "Add.asm", SRC)
    assert main([str(src)]) == 0
    assert (tmp_path / "Add.hack").read_text(encoding="utf-8") == HACK


def test_default_output_path():
    assert default_output_path(os.path.join("a", "Prog.asm")) == os.path.join("a", "Prog.hack")


def test_missing_input(tmp_path, capsys):
    out = tmp_path / "x.hack"
    assert main([str(tmp_path / "missing.asm"), str(out)]) == 1
    assert not out.exists()
    assert "Input not found" in capsys.readouterr().err


def test_assembly_error_leaves_output_alone(tmp_path, capsys):
    src = write(tmp_path / "Bad.asm", "@1\nD=D+2\n")
    out = write(tmp_path / "Bad.hack", "previous\n")
    assert main([str(src), str(out)]) == 2
    assert out.read_text(encoding="utf-8") == "previous\n"
    assert sorted(os.listdir(tmp_path)) == ["Bad.asm", "Bad.hack"]
    assert "[line 2]" in capsys.readouterr().err


def test_strict_overflow_flag(tmp_path):
    src = write(tmp_path / "Big.asm", "@40000\n")
    out = tmp_path / "Big.hack"
    assert main([str(src), str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "0000000000000000\n"
    out.unlink()
    assert main([str(src), str(out), "--strict-overflow"]) == 2
    assert not out.exists()


def test_truncate_comments_flag(tmp_path):
    src = write(tmp_path / "C.asm", "@1\nD=A // one\n")
    out = tmp_path / "C.hack"
    assert main([str(src), str(out)]) == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == 1
    assert main([str(src), str(out), "--truncate-comments"]) == 0
    assert out.read_text(encoding="utf-8").splitlines() == ["0000000000000001", "1110110000010000"]


def test_output_is_a_directory(tmp_path):
    src = write(tmp_path / "Add.asm", SRC)
    (tmp_path / "taken").mkdir()
    assert main([str(src), str(tmp_path / "taken")]) == 1
    assert sorted(os.listdir(tmp_path)) == ["Add.asm", "taken"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_output_mode_matches_plain_open(tmp_path):
    ref = tmp_path / "ref.txt"
    with open(ref, "w"):
        pass
    src = write(tmp_path / "Add.asm", SRC)
    out = tmp_path / "Add.hack"
    assert main([str(src), str(out)]) == 0
    assert stat.S_IMODE(out.stat().st_mode) == stat.S_IMODE(ref.stat().st_mode)


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_overwrite_keeps_existing_mode(tmp_path):
    src = write(tmp_path / "Add.asm", SRC)
    out = write(tmp_path / "Add.hack", "old\n")
    os.chmod(out, 0o640)
    assert main([str(src), str(out)]) == 0
    assert out.read_text(encoding="utf-8") == HACK
    assert stat.S_IMODE(out.stat().st_mode) == 0o640
