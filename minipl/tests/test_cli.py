"""
Tests for the mpl command line and its configuration.
"""
import logging

import pytest

import mpl
from minipl.config import Options, configure_logging, parse_command_line_args


def write_script(tmp_path, source: str):
    path = tmp_path / "script.mpl"
    path.write_text(source, encoding="utf-8")
    return path


def test_runs_script(tmp_path, capsys):
    path = write_script(tmp_path, 'var n : int := 6;\nprint n * 7;\nprint "\\n";\n')
    assert mpl.main(["mpl", str(path)]) == 0
    assert capsys.readouterr().out == "42\n"


def test_file_option(tmp_path, capsys):
    path = write_script(tmp_path, 'print "ok";')
    assert mpl.main(["mpl", "--file", str(path)]) == 0
    assert capsys.readouterr().out == "ok"


def test_failure_exit_status_and_diagnostic(tmp_path, capsys):
    path = write_script(tmp_path, "print undeclared;\n")
    assert mpl.main(["mpl", str(path)]) == 1
    err = capsys.readouterr().err
    assert "TypeError: Undeclared variable 'undeclared'" in err
    assert "[   1]  print undeclared;" in err


def test_missing_file(tmp_path, capsys):
    assert mpl.main(["mpl", str(tmp_path / "nope.mpl")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_dump_tokens_and_ast(tmp_path, capsys):
    path = write_script(tmp_path, "print 1;")
    assert mpl.main(["mpl", "--tokens", "--ast", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "Token(PRINT, 'print', line=1, column=1)" in out
    assert "AST:" in out
    assert "('print', ('int', 1," in out


def test_script_is_required():
    with pytest.raises(SystemExit) as exc:
        parse_command_line_args([], environ={})
    assert exc.value.code == 2


def test_script_given_twice():
    with pytest.raises(SystemExit):
        parse_command_line_args(["a.mpl", "--file", "b.mpl"], environ={})


def test_options_from_arguments():
    options = parse_command_line_args(["-v", "prog.mpl"], environ={})
    assert options == Options(input_file="prog.mpl", verbose=True)


def test_debug_environment_variable():
    assert parse_command_line_args(["prog.mpl"], environ={"MINIPLDEBUG": "1"}).verbose
    assert not parse_command_line_args(["prog.mpl"], environ={}).verbose


def test_configure_logging_levels():
    configure_logging(True)
    assert logging.getLogger().level == logging.DEBUG
    configure_logging(False)
    assert logging.getLogger().level == logging.WARNING
