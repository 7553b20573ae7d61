"""
Utility functions shared across Mini-PL tests.
"""
import io

from minipl.checker import TypeChecker
from minipl.interpreter import Interpreter
from minipl.lexer import tokenize
from minipl.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    tokens, token_map = tokenize(source, "<test>")
    parser = Parser(tokens, token_map, "<test>")
    return parser.parse()


def check_source(source: str) -> TypeChecker:
    """
    Parse and type check source code, returning the checker.
    """
    checker = TypeChecker("<test>")
    checker.check(parse_source(source))
    return checker


def run_program(source: str, stdin: str = "") -> str:
    """
    Parse, check and run source code and return everything it printed.
    """
    ast = parse_source(source)
    TypeChecker("<test>").check(ast)
    out = io.StringIO()
    interpreter = Interpreter("<test>", stdin=io.StringIO(stdin), stdout=out)
    interpreter.run(ast)
    return out.getvalue()
