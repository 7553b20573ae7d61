"""Interpreter.

This is a tree-walk interpreter for evaluating type-checked AST nodes
produced by the parser. It supports integer, string and boolean values,
variables, output and input statements, assertions and bounded for loops.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down,
recursive manner. Statements are executed via the `execute()` method, and
expressions are evaluated using `eval_expr()`. Both methods pattern match
over the tuples that make up the AST.

2. Environment
The interpreter keeps its variables in a :class:`minipl.scope.ScopeStack`.
The global scope lives for the whole run; every iteration of a for loop
pushes a fresh scope holding the loop variable and the body's declarations
and pops it when the iteration ends, so nothing leaks between iterations.

3. Values
Runtime values are plain Python ``int``, ``str`` and ``bool`` objects.
Integers behave as 32-bit two's complement numbers: results of ``+ - * /``
wrap around and division truncates toward zero.

4. Input and Output
``print`` writes to the output stream without adding a newline. ``read``
takes the next whitespace-delimited token from the input stream. Both
streams default to ``sys.stdout`` and ``sys.stdin``.

5. Error Handling
The type checker has already rejected ill-typed programs, so the only
problems left are division by zero, bad or missing input and failed
assertions. They are raised as :class:`minipl.exceptions.ExecutionError`
subclasses carrying the line and column of the offending statement.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import re
import sys
from collections import deque

from minipl.exceptions import AssertionFailure, DivisionByZeroError, InputError
from minipl.lexer import escape_string
from minipl.operations import INT_BITS, INT_MAX, INT_MIN, Op, Type
from minipl.scope import ScopeStack, Variable

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

INTEGER_INPUT = re.compile(r'[+-]?\d+')

# Binding strength used when rendering expressions back to source
PRECEDENCE = {
    Op.EQ: 1,
    Op.LT: 1,
    Op.ADD: 2,
    Op.SUB: 2,
    Op.CONCAT: 2,
    Op.MUL: 3,
    Op.DIV: 3,
}
UNARY_PRECEDENCE = 4
ATOM_PRECEDENCE = 5


def wrap_int(value: int) -> int:
    """
    Reduce ``value`` to the signed fixed-width integer range.
    """
    return ((value - INT_MIN) % (1 << INT_BITS)) + INT_MIN


def divide(lhs: int, rhs: int) -> int:
    """
    Integer division truncating toward zero.
    """
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def format_value(value) -> str:
    """
    Return the text ``print`` writes for a runtime value.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _precedence(node) -> int:
    if node[0] == 'unary':
        return UNARY_PRECEDENCE
    return PRECEDENCE.get(node[0], ATOM_PRECEDENCE)


def format_expr(node) -> str:
    """
    Convert an expression AST back to readable source text.

    Parentheses are only added where the tree shape needs them.

    Args:
        node (tuple): An expression node, structured as a tuple.

    Returns:
        str: A string representation of the expression.
    """
    match node:
        case ('int', value, _):
            return str(value)
        case ('string', value, _):
            return f'"{escape_string(value)}"'
        case ('ident', name, _):
            return name
        case ('unary', op, operand, _):
            inner = format_expr(operand)
            if _precedence(operand) < UNARY_PRECEDENCE:
                inner = f"({inner})"
            return f"{op}{inner}"
        case (Op() as op, left, right, _):
            lhs = format_expr(left)
            rhs = format_expr(right)
            if _precedence(left) < PRECEDENCE[op]:
                lhs = f"({lhs})"
            if _precedence(right) <= PRECEDENCE[op]:
                rhs = f"({rhs})"
            return f"{lhs} {op} {rhs}"
        case _:
            return f"<expr {node[0]}>"


class InputReader:
    """Hands out whitespace-delimited tokens from a text stream."""

    def __init__(self, stream):
        self.stream = stream
        self.pending: deque[str] = deque()

    def next_token(self) -> str | None:
        """
        Return the next token, or ``None`` once the stream is exhausted.
        """
        while not self.pending:
            line = self.stream.readline()
            if not line:
                return None
            self.pending.extend(line.split())
        return self.pending.popleft()


class Interpreter:
    """Tree-walk interpreter for Mini-PL."""

    def __init__(self, file: str = "<stdin>", stdin=None, stdout=None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The name of the script, used in error messages.
            stdin: Text stream ``read`` consumes, ``sys.stdin`` by default.
            stdout: Text stream ``print`` writes to, ``sys.stdout`` by default.
        """
        self.file = file
        self.stdout = stdout if stdout is not None else sys.stdout
        self.input = InputReader(stdin if stdin is not None else sys.stdin)
        self.vars = ScopeStack()

    def value_of(self, name: str):
        """
        Return the current value bound to ``name``.
        """
        return self.vars.lookup(name).value

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node, structured as a tuple.
                        The first element is the operation (e.g. 'int', Op.ADD),
                        followed by operands and the source position.

        Returns:
            The evaluated result of the expression.

        Raises:
            DivisionByZeroError: If the right operand of ``/`` is zero.
        """
        match node:
            case ('int', value, _) | ('string', value, _):
                return value
            case ('ident', name, _):
                return self.value_of(name)
            case ('unary', Op.NOT, operand, _):
                return not self.eval_expr(operand)
            case (Op() as op, left, right, pos):
                lhs = self.eval_expr(left)
                rhs = self.eval_expr(right)
                match op:
                    case Op.ADD:
                        return wrap_int(lhs + rhs)
                    case Op.SUB:
                        return wrap_int(lhs - rhs)
                    case Op.MUL:
                        return wrap_int(lhs * rhs)
                    case Op.DIV:
                        if rhs == 0:
                            raise DivisionByZeroError(pos.line, pos.column, self.file)
                        return wrap_int(divide(lhs, rhs))
                    case Op.CONCAT:
                        return lhs + rhs
                    case Op.EQ:
                        return lhs == rhs
                    case Op.LT:
                        return lhs < rhs
        raise RuntimeError(f"Invalid expression node: {node}")

    def read_value(self, name: str, pos):
        """
        Read the next input token and convert it for ``name``'s type.

        Raises:
            InputError: If input is exhausted or an integer cannot be parsed.
        """
        variable = self.vars.lookup(name)
        token = self.input.next_token()
        if token is None:
            raise InputError(
                f"Unexpected end of input while reading '{name}'",
                pos.line, pos.column, self.file,
            )
        if variable.type == Type.STR:
            return token
        if not INTEGER_INPUT.fullmatch(token):
            raise InputError(
                f"Cannot read '{token}' as an integer",
                pos.line, pos.column, self.file,
            )
        value = int(token)
        if not INT_MIN <= value <= INT_MAX:
            raise InputError(
                f"Integer input {token} is out of range",
                pos.line, pos.column, self.file,
            )
        return value

    def execute(self, statements: list):
        """
        Executes a list of statements.

        Parameters:
            statements (list):
                A list of ('decl' | 'assign' | 'print' | 'read' | 'assert' | 'for', ...) tuples.

        Raises:
            ExecutionError: For failures at runtime.
        """
        for stmt in statements:
            match stmt:
                case ('decl', name, var_type, expr_node, _):
                    value = var_type.default() if expr_node is None else self.eval_expr(expr_node)
                    self.vars.declare(name, Variable(var_type, value))

                case ('assign', name, expr_node, _):
                    value = self.eval_expr(expr_node)
                    self.vars.lookup(name).value = value

                case ('print', expr_node, _):
                    self.stdout.write(format_value(self.eval_expr(expr_node)))

                case ('read', name, pos):
                    self.vars.lookup(name).value = self.read_value(name, pos)

                case ('assert', expr_node, pos):
                    if not self.eval_expr(expr_node):
                        raise AssertionFailure(
                            format_expr(expr_node), pos.line, pos.column, self.file
                        )

                case ('for', name, start_expr, end_expr, body, _):
                    start = self.eval_expr(start_expr)
                    end = self.eval_expr(end_expr)
                    for value in range(start, end + 1):
                        with self.vars.scope():
                            self.vars.declare(name, Variable(Type.INT, value))
                            self.execute(body)

                case _:
                    raise RuntimeError(f"Unknown statement type: {stmt[0]}")

    def run(self, program: list) -> int:
        """
        Execute a checked program and return its exit status.

        Runtime failures propagate as exceptions; the output stream is
        flushed either way.
        """
        logger.debug("Running %d statements from %s", len(program), self.file)
        try:
            self.execute(program)
        finally:
            self.stdout.flush()
        return EXIT_SUCCESS
