"""
Main parser entry point for Mini-PL.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`minipl.parser.expressions` and `minipl.parser.statements`.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
from contextlib import contextmanager

from minipl.exceptions import ParseError
from minipl.lexer import Token

from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)

# Human readable names for token types without a fixed spelling
TOKEN_DESCRIPTIONS = {
    'ID': 'identifier',
    'NUMBER': 'integer literal',
    'STRING': 'string literal',
    'EOF': 'end of input',
}

# Parentheses, `!` and loop bodies each recurse through the parser
MAX_NESTING = 50
# Height of an expression tree, bounded for the recursive checker and evaluator
MAX_EXPRESSION_HEIGHT = 200


class Parser:
    """Mini-PL parser."""

    def __init__(self, tokens: list[Token], token_map_literals: dict[str, str], file: str):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``EOF``.
            token_map_literals (dict): A dict of token spellings mapped to types.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.token_map = token_map_literals
        self.reverse_token_map = {v: k for k, v in self.token_map.items()}
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file
        self.nesting = 0
        self.expression_heights: dict[int, int] = {}

    def describe_type(self, token_type: str) -> str:
        """
        Describe a token type for an error message, e.g. ``';'`` or
        ``identifier``.
        """
        if token_type in self.reverse_token_map:
            return f"'{self.reverse_token_map[token_type]}'"
        return TOKEN_DESCRIPTIONS.get(token_type, token_type)

    def describe_token(self, tok: Token) -> str:
        """
        Describe a concrete token for an error message.
        """
        if tok.type in ('ID', 'NUMBER', 'STRING'):
            return f"{TOKEN_DESCRIPTIONS[tok.type]} {tok.text}"
        return self.describe_type(tok.type)

    def error(self, expected: str, tok: Token | None = None) -> ParseError:
        """
        Build a ParseError for ``tok`` (the current token by default).
        """
        tok = tok if tok is not None else self.curr_token
        return ParseError(
            expected,
            self.describe_token(tok),
            tok.line,
            tok.column,
            self.source_file,
        )

    @contextmanager
    def nested(self, expected: str):
        """
        Enter one level of syntactic nesting at the current token.

        Raises:
            ParseError: If the input is nested more than ``MAX_NESTING`` deep.
        """
        if self.nesting >= MAX_NESTING:
            raise self.error(expected)
        self.nesting += 1
        try:
            yield
        finally:
            self.nesting -= 1

    def track_height(self, node: tuple, *children: tuple, tok: Token) -> tuple:
        """
        Record the height of a new operator node and return it.

        Raises:
            ParseError: At ``tok`` if the tree grows taller than
                ``MAX_EXPRESSION_HEIGHT``.
        """
        height = 1 + max(self.expression_heights.get(id(child), 1) for child in children)
        if height > MAX_EXPRESSION_HEIGHT:
            raise self.error("an expression nested less deeply", tok)
        self.expression_heights[id(node)] = height
        return node

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` places after the current one without
        consuming anything. Reads past the end return the ``EOF`` token.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def eat(self, token_type: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type != token_type:
            raise self.error(self.describe_type(token_type))
        if tok.type != 'EOF':
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok


    # Expression wrappers
    def factor(self) -> tuple:
        """
        Parse a literal, a variable, or a parenthesized group.
        """
        return _expr.parse_factor(self)

    def unary(self) -> tuple:
        """
        Parse a prefix ``!`` expression.
        """
        return _expr.parse_unary(self)

    def term(self) -> tuple:
        """
        Parse a multiplication or division expression.
        """
        return _expr.parse_term(self)

    def add_sub(self) -> tuple:
        """
        Parse an addition, subtraction or concatenation expression.
        """
        return _expr.parse_add_sub(self)

    def comparison(self) -> tuple:
        """
        Parse an equality or less-than comparison.
        """
        return _expr.parse_comparison(self)

    def expr(self) -> tuple:
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)


    # Statement wrappers
    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def statement_list(self, terminator: str) -> list:
        """
        Parse statements until the current token is ``terminator``.
        """
        return _stmt.parse_statement_list(self, terminator)

    def parse_print(self) -> tuple:
        """
        Parse a 'print' statement used for output.
        """
        return _stmt.parse_print(self)

    def parse_read(self) -> tuple:
        """
        Parse a 'read' statement used for input.
        """
        return _stmt.parse_read(self)

    def parse_declaration(self) -> tuple:
        """
        Parse a 'var' declaration.
        """
        return _stmt.parse_declaration(self)

    def parse_assert(self) -> tuple:
        """
        Parse an 'assert' statement.
        """
        return _stmt.parse_assert(self)

    def parse_for(self) -> tuple:
        """
        Parse a 'for' loop.
        """
        return _stmt.parse_for(self)

    def parse_assignment(self) -> tuple:
        """
        Parse an assignment to an existing variable.
        """
        return _stmt.parse_assignment(self)


    def parse(self) -> list:
        """
        Parse the full input into a list of statements.
        """
        statements = self.statement_list('EOF')
        logger.debug("Parsed %d top-level statements from %s", len(statements), self.source_file)
        return statements
