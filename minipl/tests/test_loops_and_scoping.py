"""
Tests for for loops and scoping rules in Mini-PL.
"""
import io

from minipl.interpreter import Interpreter

from minipl.tests.utils import parse_source, run_program


def test_loop_runs_inclusive_range():
    assert run_program('for i in 1..5 do print i; print " "; end for;') == "1 2 3 4 5 "


def test_empty_range_runs_zero_times():
    assert run_program("for i in 5..1 do print i; end for;") == ""


def test_single_value_range():
    assert run_program("for i in 3..3 do print i; end for;") == "3"


def test_bounds_evaluated_once():
    source = (
        "var n : int := 3;\n"
        "var count : int;\n"
        "for i in 1..n do\n"
        "    n := n + 1;\n"
        "    count := count + 1;\n"
        "end for;\n"
        "print count; print n;\n"
    )
    assert run_program(source) == "36"


def test_loop_variable_shadows_global():
    source = (
        'var i : string := "global";\n'
        "for i in 1..2 do print i; end for;\n"
        "print i;\n"
    )
    assert run_program(source) == "12global"


def test_body_declarations_are_fresh_each_iteration():
    source = (
        "for i in 1..3 do\n"
        "    var acc : int;\n"
        "    acc := acc + i;\n"
        "    print acc;\n"
        "end for;\n"
    )
    assert run_program(source) == "123"


def test_body_updates_outer_variable():
    source = (
        "var total : int := 0;\n"
        "for i in 1..10 do total := total + i; end for;\n"
        "print total;\n"
    )
    assert run_program(source) == "55"


def test_nested_loops():
    source = (
        "for i in 1..3 do\n"
        "    for j in 1..i do print j; end for;\n"
        '    print ";";\n'
        "end for;\n"
    )
    assert run_program(source) == "1;12;123;"


def test_scope_stack_restored_after_loop():
    ast = parse_source("var x : int; for i in 1..2 do var y : int; end for;")
    interpreter = Interpreter("<test>", stdin=io.StringIO(), stdout=io.StringIO())
    interpreter.run(ast)
    assert interpreter.vars.depth == 1
    assert interpreter.vars.lookup('y') is None
    assert interpreter.value_of('x') == 0


def test_factorial_program():
    source = (
        "var nTimes : int := 0;\n"
        "read nTimes;\n"
        "var result : int := 1;\n"
        "for k in 1..nTimes do\n"
        "    result := result * k;\n"
        "end for;\n"
        'print "The result is: ";\n'
        "print result;\n"
        "assert(!(result = 0));\n"
    )
    assert run_program(source, stdin="5") == "The result is: 120"


def test_loop_header_without_space_before_do():
    assert run_program("for i in 1..3do print i; end for;") == "123"
