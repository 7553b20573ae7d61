"""Shared definitions for AST operators and static types.

This module centralizes the operator and type identifiers used by the parser,
the type checker and the interpreter to label nodes in the abstract syntax
tree. Keeping them in one place prevents the stages from drifting apart when
an operation is added or renamed.

The value of each enum member is its spelling in Mini-PL source, so
``str(Op.ADD)`` is ``"+"`` and ``Type("int")`` is ``Type.INT``.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported operators.
    """

    # Comparison
    EQ = "="
    LT = "<"

    # Additive
    ADD = "+"
    SUB = "-"
    CONCAT = "&"

    # Multiplicative
    MUL = "*"
    DIV = "/"

    # Unary
    NOT = "!"

    def __str__(self) -> str:
        """
        Return the source symbol for nicer debug output.
        """
        return self.value


class Type(str, Enum):
    """
    Enumeration of the three primitive Mini-PL types.
    """

    INT = "int"
    STR = "string"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value

    def default(self):
        """
        Return the value a declaration without an initializer starts with.
        """
        match self:
            case Type.INT:
                return 0
            case Type.STR:
                return ""
            case Type.BOOL:
                return False


# Integers are fixed-width signed values
INT_BITS = 32
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1

BINARY_OPS = frozenset({Op.EQ, Op.LT, Op.ADD, Op.SUB, Op.CONCAT, Op.MUL, Op.DIV})


__all__ = ["Op", "Type", "BINARY_OPS", "INT_BITS", "INT_MIN", "INT_MAX"]
