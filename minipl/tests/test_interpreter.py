"""
Tests for evaluating expressions and statements in Mini-PL.
"""
import io

import pytest

from minipl.exceptions import AssertionFailure, DivisionByZeroError, InputError
from minipl.interpreter import (
    EXIT_SUCCESS,
    InputReader,
    Interpreter,
    divide,
    format_expr,
    format_value,
    wrap_int,
)

from minipl.tests.utils import parse_source, run_program


@pytest.mark.parametrize("source, expected", [
    ("print 2+3*4;", "14"),
    ("print (2+3)*4;", "20"),
    ("print 10 - 3 - 2;", "5"),
    ("print 7 / 2;", "3"),
    ("print 1 = 1;", "true"),
    ("print 2 < 1;", "false"),
    ('print "abc" < "abd";', "true"),
    ('print "b" = "b";', "true"),
    ("print !(1 = 1);", "false"),
    ('print "ab" & "cd";', "abcd"),
])
def test_expression_evaluation(source, expected):
    assert run_program(source) == expected


def test_string_concatenation_through_variable():
    assert run_program('var a: string := "ab" & "cd"; print a;') == "abcd"


def test_print_adds_no_separator():
    assert run_program('print "a"; print 1; print "\\n";') == "a1\n"


def test_declaration_defaults():
    source = (
        "var i : int;\n"
        "var s : string;\n"
        "var b : bool;\n"
        'print i; print "[" & s & "]"; print b;\n'
    )
    assert run_program(source) == "0[]false"


def test_assignment_replaces_value():
    source = (
        "var x : int := 5;\n"
        "x := x + 1;\n"
        "print x;\n"
    )
    assert run_program(source) == "6"


def test_division_truncates_toward_zero():
    assert run_program("print (0 - 7) / 2;") == "-3"
    assert divide(7, -2) == -3
    assert divide(-7, -2) == 3


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as exc:
        run_program("print 7/0;")
    assert exc.value.line == 1


def test_division_by_zero_variable():
    with pytest.raises(DivisionByZeroError):
        run_program("var z : int; print 1 / z;")


def test_integer_arithmetic_wraps():
    assert run_program("print 2147483647 + 1;") == "-2147483648"
    assert wrap_int(-2147483649) == 2147483647
    assert wrap_int(12) == 12


def test_assert_success_is_silent():
    assert run_program('assert(1 < 2); print "after";') == "after"


def test_assert_failure_halts_execution():
    ast = parse_source('print "before";\nassert(1 = 2);\nprint "after";')
    out = io.StringIO()
    interpreter = Interpreter("<test>", stdin=io.StringIO(), stdout=out)
    with pytest.raises(AssertionFailure) as exc:
        interpreter.run(ast)
    assert out.getvalue() == "before"
    assert exc.value.expression == "1 = 2"
    assert (exc.value.line, exc.value.column) == (2, 1)


def test_read_int_and_string():
    source = (
        "var n : int;\n"
        "var s : string;\n"
        "read n;\n"
        "read s;\n"
        'print n + 1; print " "; print s;\n'
    )
    assert run_program(source, stdin="41 hello\n") == "42 hello"


def test_read_across_lines():
    source = "var a : int; var b : int; read a; read b; print a * b;"
    assert run_program(source, stdin="6\n\n  7\n") == "42"


def test_read_signed_integer():
    assert run_program("var n : int; read n; print n;", stdin="-5") == "-5"


def test_read_unparsable_integer():
    with pytest.raises(InputError) as exc:
        run_program("var n : int; read n;", stdin="abc")
    assert "abc" in exc.value.message


def test_read_integer_out_of_range():
    with pytest.raises(InputError):
        run_program("var n : int; read n;", stdin="99999999999")


def test_read_exhausted_input():
    with pytest.raises(InputError) as exc:
        run_program("var s : string; read s; read s;", stdin="only")
    assert "end of input" in exc.value.message


def test_input_reader_tokens():
    reader = InputReader(io.StringIO("a b\n\nc\n"))
    assert [reader.next_token() for _ in range(4)] == ['a', 'b', 'c', None]


def test_print_goes_to_stdout_by_default(capsys):
    ast = parse_source("print 1 + 1;")
    interpreter = Interpreter("<test>")
    assert interpreter.run(ast) == EXIT_SUCCESS
    assert capsys.readouterr().out == "2"


def test_format_value():
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value(-3) == "-3"
    assert format_value("x") == "x"


@pytest.mark.parametrize("source", [
    "1 + 2 * 3",
    "(1 + 2) * 3",
    "1 - (2 - 3)",
    "!(a = b)",
    "!!a",
    '"a\\n" & s',
    "a < b = c",
])
def test_format_expr(source):
    expr = parse_source(f"print {source};")[0][1]
    assert format_expr(expr) == source
