"""Static type checker.

The checker walks the AST once, depth-first and left to right, before any
statement is executed. It infers a type for every expression, verifies that
every statement uses its operands correctly and rejects the whole program at
the first offense.

1. Scopes
Declarations live in a :class:`minipl.scope.ScopeStack`. The global scope is
created with the checker; each for loop pushes a scope that holds the loop
variable and the declarations of its body, and pops it at ``end for``. A name
may shadow a name of an enclosing scope but may not be declared twice in the
same scope.

2. Operators
``+ - * /`` take two ints and give an int, ``&`` takes two strings and gives
a string, ``=`` takes two operands of the same type and ``<`` two ints or two
strings, both giving a bool. ``!`` takes and gives a bool.

3. Loop variables
The control variable of a for loop is an int that cannot be assigned or read
into inside the loop body, and it cannot reuse the name of an enclosing
loop's variable. Inside a loop body it also cannot reuse a name declared
earlier in that body; at the top level it shadows a global of the same name.

4. Annotations
The AST is never modified. Inferred types are kept in ``expression_types``,
keyed by the identity of the expression node.


File: checker.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from minipl.exceptions import (
    DuplicateDeclarationError,
    LoopVariableMutationError,
    TypeMismatchError,
    UndeclaredVariableError,
)
from minipl.operations import Op, Type
from minipl.scope import ScopeStack, Symbol

logger = logging.getLogger(__name__)


ARITHMETIC_OPS = frozenset({Op.ADD, Op.SUB, Op.MUL, Op.DIV})
READABLE_TYPES = frozenset({Type.INT, Type.STR})


class TypeChecker:
    """Single pass type checker for Mini-PL programs."""

    def __init__(self, file: str = "<stdin>"):
        self.file = file
        self.symbols = ScopeStack()
        self.expression_types: dict[int, Type] = {}

    def _mismatch(self, message: str, pos) -> TypeMismatchError:
        return TypeMismatchError(message, pos.line, pos.column, self.file)

    def _resolve(self, name: str, pos) -> Symbol:
        symbol = self.symbols.lookup(name)
        if symbol is None:
            raise UndeclaredVariableError(name, pos.line, pos.column, self.file)
        return symbol

    def _resolve_mutable(self, name: str, pos) -> Symbol:
        symbol = self._resolve(name, pos)
        if not symbol.mutable:
            raise LoopVariableMutationError(name, pos.line, pos.column, self.file)
        return symbol

    def _check_loop_variable(self, name: str, pos) -> None:
        existing = self.symbols.lookup(name)
        if existing is not None and not existing.mutable:
            raise LoopVariableMutationError(name, pos.line, pos.column, self.file)
        # globals may be shadowed, names inside a loop body may not
        if self.symbols.depth > 1 and self.symbols.is_declared_locally(name):
            raise DuplicateDeclarationError(name, pos.line, pos.column, self.file)

    def binary_type(self, op: Op, left: Type, right: Type, pos) -> Type:
        """
        Return the result type of ``left op right``.

        Raises:
            TypeMismatchError: If the operator does not accept the operand types.
        """
        if op in ARITHMETIC_OPS and left == right == Type.INT:
            return Type.INT
        if op == Op.CONCAT and left == right == Type.STR:
            return Type.STR
        if op == Op.EQ and left == right:
            return Type.BOOL
        if op == Op.LT and left == right and left in (Type.INT, Type.STR):
            return Type.BOOL
        raise self._mismatch(
            f"Operator '{op}' cannot be applied to {left} and {right}", pos
        )

    def expr_type(self, node) -> Type:
        """
        Infer the type of an expression node.

        Parameters:
            node (tuple): An expression node.

        Returns:
            Type: The static type of the expression.

        Raises:
            UndeclaredVariableError: If a variable has not been declared.
            TypeMismatchError: If an operator is applied to the wrong types.
        """
        match node:
            case ('int', _, _):
                result = Type.INT
            case ('string', _, _):
                result = Type.STR
            case ('ident', name, pos):
                result = self._resolve(name, pos).type
            case ('unary', Op.NOT, operand, pos):
                inner = self.expr_type(operand)
                if inner != Type.BOOL:
                    raise self._mismatch(f"Operator '!' cannot be applied to {inner}", pos)
                result = Type.BOOL
            case (Op() as op, left, right, pos):
                left_type = self.expr_type(left)
                right_type = self.expr_type(right)
                result = self.binary_type(op, left_type, right_type, pos)
            case _:
                raise ValueError(f"Invalid expression node: {node}")
        self.expression_types[id(node)] = result
        return result

    def _expect(self, node, expected: Type, what: str, pos) -> None:
        actual = self.expr_type(node)
        if actual != expected:
            raise self._mismatch(f"{what} must be {expected}, not {actual}", pos)

    def check_statement(self, stmt) -> None:
        """
        Check a single statement.

        Raises:
            TypeCheckError: On the first problem found.
        """
        match stmt:
            case ('print', expr_node, _):
                self.expr_type(expr_node)

            case ('read', name, pos):
                symbol = self._resolve_mutable(name, pos)
                if symbol.type not in READABLE_TYPES:
                    raise self._mismatch(
                        f"Cannot read into '{name}' of type {symbol.type}", pos
                    )

            case ('decl', name, var_type, expr_node, pos):
                if self.symbols.is_declared_locally(name):
                    raise DuplicateDeclarationError(name, pos.line, pos.column, self.file)
                if expr_node is not None:
                    init_type = self.expr_type(expr_node)
                    if init_type != var_type:
                        raise self._mismatch(
                            f"Cannot initialise '{name}' of type {var_type} with {init_type}",
                            pos,
                        )
                self.symbols.declare(name, Symbol(var_type))

            case ('assert', expr_node, pos):
                self._expect(expr_node, Type.BOOL, "Assertion condition", pos)

            case ('for', name, start_expr, end_expr, body, pos):
                self._expect(start_expr, Type.INT, "Loop start", pos)
                self._expect(end_expr, Type.INT, "Loop end", pos)
                self._check_loop_variable(name, pos)
                with self.symbols.scope():
                    self.symbols.declare(name, Symbol(Type.INT, mutable=False))
                    self.check_statements(body)

            case ('assign', name, expr_node, pos):
                symbol = self._resolve_mutable(name, pos)
                value_type = self.expr_type(expr_node)
                if value_type != symbol.type:
                    raise self._mismatch(
                        f"Cannot assign {value_type} to '{name}' of type {symbol.type}",
                        pos,
                    )

            case _:
                raise ValueError(f"Unknown statement type: {stmt[0]}")

    def check_statements(self, statements: list) -> None:
        for stmt in statements:
            self.check_statement(stmt)

    def check(self, program: list) -> None:
        """
        Type check a whole program.

        Parameters:
            program (list): The statements returned by the parser.

        Raises:
            TypeCheckError: On the first problem found.
        """
        logger.debug("Starting type checking of %s", self.file)
        self.check_statements(program)
        logger.debug("Type checking finished: %d expressions typed", len(self.expression_types))
