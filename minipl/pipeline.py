"""Pipeline.

Runs a Mini-PL program through every stage and reports how it ended:

1. The Lexer tokenizes the source code into meaningful tokens.
2. The Parser processes tokens into an AST following the language grammar.
3. The TypeChecker verifies the AST before anything runs.
4. The Interpreter walks the AST, evaluating expressions and executing statements.

The first error stops the pipeline. Instead of a bare status code the
caller receives an :data:`Outcome` naming the stage that failed, and a
rendered diagnostic is written to the diagnostic stream.


File: pipeline.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
import sys
from dataclasses import dataclass
from typing import Union

from minipl.checker import TypeChecker
from minipl.diagnostics import SourceContext
from minipl.exceptions import (
    ExecutionError,
    LexError,
    MiniPLError,
    ParseError,
    TypeCheckError,
)
from minipl.interpreter import EXIT_FAILURE, EXIT_SUCCESS, Interpreter
from minipl.lexer import tokenize
from minipl.parser import Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """The program ran to completion."""

    exit_status: int = EXIT_SUCCESS

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Base for outcomes where a stage raised an error."""

    error: MiniPLError
    exit_status: int = EXIT_FAILURE

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class LexFailure(Failure):
    """The source could not be tokenized."""


@dataclass(frozen=True)
class ParseFailure(Failure):
    """The tokens do not form a valid program."""


@dataclass(frozen=True)
class TypeFailure(Failure):
    """The program is ill-typed and was not executed."""


@dataclass(frozen=True)
class RuntimeFailure(Failure):
    """Execution stopped on a runtime error or failed assertion."""


Outcome = Union[Success, LexFailure, ParseFailure, TypeFailure, RuntimeFailure]

FAILURES = (
    (LexError, LexFailure),
    (ParseError, ParseFailure),
    (TypeCheckError, TypeFailure),
    (ExecutionError, RuntimeFailure),
)


def analyze(source: str, file: str = "<stdin>") -> tuple[list, TypeChecker]:
    """
    Lex, parse and type check ``source`` without running it.

    Returns:
        tuple: the program AST and the checker that accepted it.

    Raises:
        LexError, ParseError, TypeCheckError: On the first problem found.
    """
    tokens, token_map_literals = tokenize(source, file)
    parser = Parser(tokens, token_map_literals, file)
    program = parser.parse()
    checker = TypeChecker(file)
    checker.check(program)
    return program, checker


def run_source(source: str, file: str = "<stdin>", stdin=None, stdout=None, stderr=None) -> Outcome:
    """
    Run a Mini-PL program and report how it ended.

    Parameters:
        source (str): The program text.
        file (str): Name used in diagnostics.
        stdin: Stream for ``read`` statements, ``sys.stdin`` by default.
        stdout: Stream for ``print`` statements, ``sys.stdout`` by default.
        stderr: Stream for diagnostics, ``sys.stderr`` by default.

    Returns:
        Outcome: ``Success`` or the failure of the stage that stopped the run.
    """
    stderr = stderr if stderr is not None else sys.stderr
    try:
        program, _ = analyze(source, file)
        interpreter = Interpreter(file, stdin=stdin, stdout=stdout)
        interpreter.run(program)
    except MiniPLError as e:
        for error_type, failure_type in FAILURES:
            if isinstance(e, error_type):
                logger.debug("%s stopped the run of %s", failure_type.__name__, file)
                stderr.write(SourceContext(source, file).render(e))
                return failure_type(e)
        raise
    return Success()
