"""
Expression parsing utilities for Mini-PL.

These functions operate on a `minipl.parser.parser.Parser` instance and
implement the recursive descent logic for expressions. Precedence is encoded
as a chain of tiers, loosest first:

1. ``=`` ``<``
2. ``+`` ``-`` ``&``
3. ``*`` ``/``
4. prefix ``!``
5. literals, identifiers and parenthesized expressions

Every binary tier is left-associative.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from minipl.operations import Op

if TYPE_CHECKING:
    from minipl.parser import Parser


COMPARISON_OPS = {
    'EQ': Op.EQ,
    'LT': Op.LT,
}

ADDITIVE_OPS = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
    'AMP': Op.CONCAT,
}

MULTIPLICATIVE_OPS = {
    'MUL': Op.MUL,
    'DIV': Op.DIV,
}


# ---- Highest precedence ----

def parse_factor(parser: 'Parser') -> tuple:
    """Parse a literal, variable, or parenthesized expression."""
    tok = parser.curr_token

    if tok.type == 'NUMBER':
        parser.eat('NUMBER')
        return ('int', tok.value, tok.pos)

    if tok.type == 'STRING':
        parser.eat('STRING')
        return ('string', tok.value, tok.pos)

    if tok.type == 'ID':
        parser.eat('ID')
        return ('ident', tok.value, tok.pos)

    if tok.type == 'LPAREN':
        with parser.nested("an expression nested less deeply"):
            parser.eat('LPAREN')
            node = parser.expr()
            parser.eat('RPAREN')
        return node

    raise parser.error('an expression')


def parse_unary(parser: 'Parser') -> tuple:
    """Parse a logical not, which may be repeated."""
    tok = parser.curr_token
    if tok.type == 'BANG':
        with parser.nested("an expression nested less deeply"):
            parser.eat('BANG')
            operand = parser.unary()
        return parser.track_height(('unary', Op.NOT, operand, tok.pos), operand, tok=tok)
    return parser.factor()


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication and division expressions."""
    result = parser.unary()
    while parser.curr_token.type in MULTIPLICATIVE_OPS:
        op_tok = parser.eat(parser.curr_token.type)
        right = parser.unary()
        node = (MULTIPLICATIVE_OPS[op_tok.type], result, right, op_tok.pos)
        result = parser.track_height(node, result, right, tok=op_tok)
    return result


def parse_add_sub(parser: 'Parser') -> tuple:
    """Parse addition, subtraction and string concatenation."""
    result = parser.term()
    while parser.curr_token.type in ADDITIVE_OPS:
        op_tok = parser.eat(parser.curr_token.type)
        right = parser.term()
        node = (ADDITIVE_OPS[op_tok.type], result, right, op_tok.pos)
        result = parser.track_height(node, result, right, tok=op_tok)
    return result


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse comparison expressions (=, <)."""
    result = parser.add_sub()
    while parser.curr_token.type in COMPARISON_OPS:
        op_tok = parser.eat(parser.curr_token.type)
        right = parser.add_sub()
        node = (COMPARISON_OPS[op_tok.type], result, right, op_tok.pos)
        result = parser.track_height(node, result, right, tok=op_tok)
    return result


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.comparison()
