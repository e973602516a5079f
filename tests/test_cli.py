import io
import sys

import pytest

from bftape import cli


class FakeStdin:
    def __init__(self, data=b""):
        self.buffer = io.BytesIO(data)


@pytest.fixture(autouse=True)
def stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", FakeStdin(b"Z"))


@pytest.fixture
def program_file(tmp_path):
    def write(code):
        path = tmp_path / "prog.bf"
        path.write_bytes(code)
        return str(path)
    return write


def test_runs_program_and_writes_raw_bytes(capsysbinary, program_file):
    assert cli.main([program_file(b"+++.\n")]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == b"\x03"
    assert captured.err == b""


def test_echoes_stdin(capsysbinary, program_file):
    assert cli.main([program_file(b",.")]) == 0
    assert capsysbinary.readouterr().out == b"Z"


def test_missing_argument_prints_usage(capsys):
    assert cli.main([]) == 0
    assert cli.USAGE in capsys.readouterr().out


def test_unreadable_file(capsys, tmp_path):
    assert cli.main([str(tmp_path / "missing.bf")]) == 1
    assert "Failed to read from program file" in capsys.readouterr().err


def test_execution_failure_is_reported(capsysbinary, program_file):
    assert cli.main([program_file(b"<")]) == 1
    assert b"Program exited with error" in capsysbinary.readouterr().err


def test_unmatched_bracket_is_reported(capsysbinary, program_file):
    assert cli.main([program_file(b"[")]) == 1
    assert b"unmatched '['" in capsysbinary.readouterr().err


def test_memory_size_flag(capsysbinary, program_file):
    path = program_file(b">>>+.")
    assert cli.main(["--memory-size", "3", path]) == 1
    assert b"outside tape [0, 3)" in capsysbinary.readouterr().err
    assert cli.main(["--memory-size", "4", path]) == 0
    assert capsysbinary.readouterr().out == b"\x01"


def test_env_overrides_config_file_and_flags_override_env(monkeypatch, tmp_path, program_file):
    config_path = tmp_path / "bf.yaml"
    config_path.write_text("memory_size: 2\njump_strategy: scan\n")
    monkeypatch.setenv("BF_MEMORY_SIZE", "5")
    args = cli.build_parser().parse_args(["--config", str(config_path), program_file(b"")])
    config = cli.resolve_config(args)
    assert config.memory_size == 5
    assert config.jump_strategy == "scan"

    args = cli.build_parser().parse_args(
        ["--config", str(config_path), "--memory-size", "9", program_file(b"")])
    assert cli.resolve_config(args).memory_size == 9


def test_invalid_env_config(monkeypatch, capsys, program_file):
    monkeypatch.setenv("BF_CELL_OVERFLOW", "saturate")
    assert cli.main([program_file(b"+")]) == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_max_steps_flag(capsysbinary, program_file):
    assert cli.main(["--max-steps", "10", program_file(b"+[]")]) == 1
    assert b"10 steps" in capsysbinary.readouterr().err


def test_trace_goes_to_stderr(capsysbinary, program_file):
    assert cli.main(["--trace", "--memory-size", "4", program_file(b"++.")]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == b"\x02"
    assert "BRAINFUCK DEBUGGER" in captured.err.decode("utf-8")


@pytest.mark.parametrize("content", [b"1: 2\n", b"memory_size: \xff\xfe\n"])
def test_bad_config_file_is_reported(content, tmp_path, program_file, capsys):
    config_path = tmp_path / "bad.yaml"
    config_path.write_bytes(content)
    assert cli.main(["--config", str(config_path), program_file(b"+")]) == 1
    assert "Invalid configuration" in capsys.readouterr().err
