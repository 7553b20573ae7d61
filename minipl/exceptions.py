"""Errors.

Every stage of the pipeline reports problems by raising one of the exceptions
below. They all derive from :class:`MiniPLError`, which records the source
position and file so callers can render a diagnostic without knowing which
stage failed.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class MiniPLError(Exception):
    """
    Base class for all Mini-PL errors.
    """
    kind = "Error"

    def __init__(self, message, line=None, column=None, file=None):
        self.message = message
        self.line = line
        self.column = column
        self.file = file
        text = message
        if line is not None:
            text += f" on line {line}"
            if column is not None:
                text += f", column {column}"
        if file is not None:
            text += f" in {file}"
        super().__init__(text)


class LexError(MiniPLError):
    """
    Error for characters or literals the lexer cannot turn into tokens.
    """
    kind = "LexError"


class ParseError(MiniPLError):
    """
    Error for token sequences that do not match the grammar.
    """
    kind = "ParseError"

    def __init__(self, expected, found, line=None, column=None, file=None):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} but found {found}", line, column, file)


class TypeCheckError(MiniPLError):
    """
    Base class for errors reported by the static type checker.
    """
    kind = "TypeError"


class UndeclaredVariableError(TypeCheckError):
    """
    Error for identifiers used before their declaration.
    """
    def __init__(self, varname, line=None, column=None, file=None):
        self.varname = varname
        super().__init__(f"Undeclared variable '{varname}'", line, column, file)


class DuplicateDeclarationError(TypeCheckError):
    """
    Error for a second declaration of a name in the same scope.
    """
    def __init__(self, varname, line=None, column=None, file=None):
        self.varname = varname
        super().__init__(f"Variable '{varname}' is already declared in this scope", line, column, file)


class TypeMismatchError(TypeCheckError):
    """
    Error for operands or values whose types do not fit where they are used.
    """


class LoopVariableMutationError(TypeCheckError):
    """
    Error for writes to a for-loop control variable inside its own body.
    """
    def __init__(self, varname, line=None, column=None, file=None):
        self.varname = varname
        super().__init__(f"Cannot modify loop variable '{varname}'", line, column, file)


class ExecutionError(MiniPLError):
    """
    Base class for errors raised while a checked program runs.
    """
    kind = "RuntimeError"


class DivisionByZeroError(ExecutionError):
    """
    Error for integer division by zero.
    """
    def __init__(self, line=None, column=None, file=None):
        super().__init__("Division by zero", line, column, file)


class InputError(ExecutionError):
    """
    Error for exhausted or unparsable input consumed by ``read``.
    """


class AssertionFailure(ExecutionError):
    """
    Raised when an ``assert`` condition evaluates to false.
    """
    kind = "AssertionFailure"

    def __init__(self, expression, line=None, column=None, file=None):
        self.expression = expression
        super().__init__(f"Assertion failed: {expression}", line, column, file)
