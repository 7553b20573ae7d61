"""Lexer for Mini-PL.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value, source text and position.

Tokens cover literals (integers and strings), keywords (``var``, ``for``,
``print`` …), operators and punctuation. Line comments beginning with ``//``
and block comments enclosed within ``/* … */`` are skipped during
tokenization while line and column numbers stay accurate. The token list is
always terminated by a single ``EOF`` token so the parser never reads past
the end of the buffer.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import logging
import re
from typing import NamedTuple

from minipl.exceptions import LexError
from minipl.operations import INT_MAX

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """
    A 1-based line and column in the source text.
    """
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# Reserved words, matched exactly against a whole identifier run
KEYWORDS = {
    'var': 'VAR',
    'for': 'FOR',
    'in': 'IN',
    'do': 'DO',
    'end': 'END',
    'print': 'PRINT',
    'read': 'READ',
    'assert': 'ASSERT',
}
KEYWORD_TYPES = frozenset(KEYWORDS.values())
OPERATORS = frozenset({'EQ', 'LT', 'PLUS', 'MINUS', 'AMP', 'MUL', 'DIV', 'BANG'})
PUNCTUATION = frozenset({'ASSIGN', 'RANGE', 'COLON', 'SEMICOLON', 'LPAREN', 'RPAREN'})

TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Comments
    ('BLOCK_COMMENT',        r'/\*.*?\*/'),
    ('UNTERMINATED_COMMENT', r'/\*'),
    ('COMMENT',              r'//[^\n]*'),

    # Literals
    ('NUMBER',               r'\d+'),
    ('STRING',               r'"(?:[^"\\]|\\.)*"'),
    ('UNTERMINATED_STRING',  r'"'),

    # Identifiers and keywords
    ('ID',                   r'[A-Za-z][A-Za-z0-9_]*'),

    # Punctuation, longest first
    ('ASSIGN',               r':='),
    ('RANGE',                r'\.\.'),
    ('COLON',                r':'),
    ('SEMICOLON',            r';'),
    ('LPAREN',               r'\('),
    ('RPAREN',               r'\)'),

    # Operators
    ('EQ',                   r'='),
    ('LT',                   r'<'),
    ('PLUS',                 r'\+'),
    ('MINUS',                r'-'),
    ('AMP',                  r'&'),
    ('MUL',                  r'\*'),
    ('DIV',                  r'/'),
    ('BANG',                 r'!'),

    # Miscellaneous
    ('NEWLINE',              r'\n'),
    ('SKIP',                 r'[ \t\r]+'),
    ('MISMATCH',             r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION),
    re.DOTALL,
)

ESCAPES = {
    '"': '"',
    '\\': '\\',
    'n': '\n',
    't': '\t',
    'r': '\r',
}


class Token:
    """
    Represents a lexical token with a type, value and source position.
    """
    __slots__ = ('type', 'value', 'text', 'line', 'column')

    def __init__(self, type_, value, line, column=1, text=None):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): The 1-based source line.
            column (int): The 1-based source column.
            text (str): The lexeme as written; defaults to ``value``.
        """
        self.type = type_
        self.value = value
        self.text = text if text is not None else ('' if value is None else str(value))
        self.line = line
        self.column = column

    @property
    def pos(self) -> Position:
        """
        Return the position of the first character of the token.
        """
        return Position(self.line, self.column)

    @property
    def category(self) -> str:
        """
        Return the coarse token kind.
        """
        if self.type in KEYWORD_TYPES:
            return 'keyword'
        if self.type in OPERATORS:
            return 'operator'
        if self.type in PUNCTUATION:
            return 'punctuation'
        return {
            'ID': 'identifier',
            'NUMBER': 'integer-literal',
            'STRING': 'string-literal',
            'EOF': 'end-of-input',
        }[self.type]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line}, column={self.column})"


def _literal_map() -> dict[str, str]:
    """
    Map the fixed spelling of every keyword, operator and punctuation token
    to its type, e.g. ``';' -> 'SEMICOLON'``.
    """
    token_map_literals = dict(KEYWORDS)
    for name, pattern in TOKEN_SPECIFICATION:
        if name not in OPERATORS | PUNCTUATION:
            continue
        literal = re.sub(r'\\(.)', r'\1', pattern)
        if re.fullmatch(pattern, literal):
            token_map_literals[literal] = name
    return token_map_literals


TOKEN_MAP_LITERALS = _literal_map()


def _decode_string(body: str, line: int, column: int, file: str) -> str:
    """
    Replace escape sequences in the body of a string literal.

    Raises:
        LexError: On an escape sequence other than the supported ones.
    """
    def replace(match_obj):
        char = match_obj.group(1)
        if char not in ESCAPES:
            raise LexError(
                f"Unknown escape sequence '\\{char}'",
                line, column + 1 + match_obj.start(), file,
            )
        return ESCAPES[char]

    return re.sub(r'\\(.)', replace, body, flags=re.DOTALL)


def tokenize(code: str, file: str | None = None) -> tuple[list[Token], dict[str, str]]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Optional file name used in error messages.

    Returns:
        list[Token]: A list of Token instances ending with an ``EOF`` token.
        dict[str, str]: A dict mapping fixed token spellings to token types.

    Raises:
        LexError: If an unexpected character, an unterminated string or
            comment, or an invalid literal is encountered.
    """
    tokens = []
    line_num = 1
    line_start = 0

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        offset = match_obj.start()
        column = offset - line_start + 1

        if kind == 'NEWLINE':
            line_num += 1
            line_start = match_obj.end()
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue
        if kind == 'BLOCK_COMMENT':
            newlines = value.count('\n')
            if newlines:
                line_num += newlines
                line_start = offset + value.rfind('\n') + 1
            continue
        if kind == 'UNTERMINATED_COMMENT':
            raise LexError("Unterminated block comment", line_num, column, file)
        if kind == 'UNTERMINATED_STRING':
            raise LexError("Unterminated string literal", line_num, column, file)
        if kind == 'MISMATCH':
            raise LexError(f"Unexpected character {value!r}", line_num, column, file)

        if kind == 'NUMBER':
            number = int(value)
            if number > INT_MAX:
                raise LexError(f"Invalid number literal {value}", line_num, column, file)
            tokens.append(Token('NUMBER', number, line_num, column, value))
        elif kind == 'STRING':
            decoded = _decode_string(value[1:-1], line_num, column, file)
            tokens.append(Token('STRING', decoded, line_num, column, value))
            newlines = value.count('\n')
            if newlines:
                line_num += newlines
                line_start = offset + value.rfind('\n') + 1
        elif kind == 'ID':
            tokens.append(Token(KEYWORDS.get(value, 'ID'), value, line_num, column, value))
        else:
            tokens.append(Token(kind, value, line_num, column, value))

    tokens.append(Token('EOF', None, line_num, len(code) - line_start + 1))
    logger.debug("Tokenized %d characters into %d tokens", len(code), len(tokens))
    return tokens, dict(TOKEN_MAP_LITERALS)


def escape_string(value: str) -> str:
    """
    Re-apply escape sequences so ``value`` can be written as a string literal.
    """
    reverse = {v: k for k, v in ESCAPES.items()}
    return ''.join('\\' + reverse[ch] if ch in reverse else ch for ch in value)


def render_tokens(tokens: list[Token]) -> str:
    """
    Render a token list back to source text, one space between tokens.

    Comments and the original layout are not preserved, but tokenizing the
    result yields the same token types and literal values.
    """
    parts = []
    for tok in tokens:
        if tok.type == 'EOF':
            break
        if tok.type == 'STRING':
            parts.append(f'"{escape_string(tok.value)}"')
        elif tok.type == 'NUMBER':
            parts.append(str(tok.value))
        else:
            parts.append(tok.text)
    return ' '.join(parts)
